from __future__ import annotations

import pytest

from atlas.relevance import (
    MUTED_COLOR,
    color_for_cluster,
    hex_to_rgb,
    is_relevant,
    matches_search,
    recompute,
    style_for,
)
from types_models import Point


def _point(title: str, categories: tuple[str, ...], cluster: int | None = 0) -> Point:
    return Point(
        position=(0.0, 0.0),
        radius=10.0,
        title=title,
        categories=categories,
        cluster_id=cluster,
    )


@pytest.fixture
def points() -> list[Point]:
    return [
        _point("Attention Is All You Need", ("cs.CL", "cs.LG")),
        _point("Deep Residual Learning", ("cs.CV",), cluster=1),
        _point("A Survey of Reinforcement Learning", ("cs.AI", "cs.LG"), cluster=None),
        _point("Uncategorised", ()),
    ]


def test_scenario_shared_category_is_relevant() -> None:
    point = _point("Anything", ("cs.AI", "cs.LG"))

    recompute([point], "", {"cs.LG"})

    assert point.relevant is True
    assert point.emphasis == 1.0


def test_search_is_case_insensitive_substring() -> None:
    assert matches_search("Deep Residual Learning", "residual")
    assert matches_search("Deep Residual Learning", "SIDUAL LEAR")
    assert matches_search("Deep Residual Learning", "")
    assert not matches_search("Deep Residual Learning", "residual networks")


def test_category_match_is_exact_and_case_sensitive() -> None:
    point = _point("t", ("cs.LG",))

    assert is_relevant(point, "", {"cs.LG"})
    assert not is_relevant(point, "", {"cs.lg"})
    assert not is_relevant(point, "", {"cs.L"})


def test_select_none_hides_everything(points: list[Point]) -> None:
    count = recompute(points, "", set())

    assert count == 0
    assert all(not p.relevant for p in points)
    assert all(p.emphasis == 0.2 for p in points)


def test_select_all_with_empty_search_keeps_every_categorised_point(
    points: list[Point],
) -> None:
    selected = {token for p in points for token in p.categories}

    count = recompute(points, "", selected)

    assert count == 3
    assert [p.relevant for p in points] == [True, True, True, False]


@pytest.mark.parametrize(
    ("search", "selected", "expected"),
    [
        ("learning", {"cs.LG", "cs.CV"}, [False, True, True, False]),
        ("ATTENTION", {"cs.LG"}, [True, False, False, False]),
        ("attention", {"cs.CV"}, [False, False, False, False]),
        ("", {"cs.AI"}, [False, False, True, False]),
    ],
)
def test_relevance_combines_search_and_categories(
    points: list[Point], search: str, selected: set[str], expected: list[bool]
) -> None:
    recompute(points, search, selected)

    assert [p.relevant for p in points] == expected
    assert [p.emphasis for p in points] == [1.0 if e else 0.2 for e in expected]


def test_recompute_is_idempotent_and_reversible(points: list[Point]) -> None:
    recompute(points, "zzz", {"cs.LG"})
    assert not any(p.relevant for p in points)

    recompute(points, "", {"cs.LG", "cs.CV", "cs.AI", "cs.CL"})
    recompute(points, "", {"cs.LG", "cs.CV", "cs.AI", "cs.CL"})
    assert [p.relevant for p in points] == [True, True, True, False]


def test_cluster_palette_and_fallback() -> None:
    assert color_for_cluster(0) == "#1f77b4"
    assert color_for_cluster(4) == "#9467bd"
    assert color_for_cluster(5) == "#000000"
    assert color_for_cluster(-1) == "#000000"
    assert color_for_cluster(None) == "#000000"


def test_hex_to_rgb() -> None:
    assert hex_to_rgb("#ff7f0e") == (255, 127, 14)
    with pytest.raises(ValueError):
        hex_to_rgb("ff7f0e")


def test_style_uses_cluster_colour_only_when_relevant() -> None:
    point = _point("t", ("a",), cluster=1)

    recompute([point], "", {"a"})
    style = style_for(point)
    assert style.fill_color == "rgba(255, 127, 14, 1)"
    assert style.border_color == "rgba(255, 255, 255, 1)"

    recompute([point], "", set())
    style = style_for(point)
    r, g, b = hex_to_rgb(MUTED_COLOR)
    assert style.fill_color == f"rgba({r}, {g}, {b}, 0.2)"
    assert style.border_color == "rgba(255, 255, 255, 0.2)"

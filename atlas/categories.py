"""Category vocabulary of the currently loaded dataset."""

from __future__ import annotations

from typing import Iterable, Iterator

from types_models import Point


class CategoryIndex:
    """Ordered set of distinct category tokens.

    The index is always rebuilt from a complete point sequence; it has no
    incremental update path.
    """

    def __init__(self, tokens: Iterable[str] = ()) -> None:
        super().__init__()
        self._tokens: tuple[str, ...] = tuple(dict.fromkeys(tokens))

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> "CategoryIndex":
        return cls(token for point in points for token in point.categories)

    @property
    def tokens(self) -> tuple[str, ...]:
        return self._tokens

    def all_selected(self) -> set[str]:
        """Selection with every token checked."""
        return set(self._tokens)

    def none_selected(self) -> set[str]:
        return set()

    def __contains__(self, token: object) -> bool:
        return token in self._tokens

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __repr__(self) -> str:
        return f"CategoryIndex({list(self._tokens)!r})"


__all__ = ["CategoryIndex"]

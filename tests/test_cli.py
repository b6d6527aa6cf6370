from __future__ import annotations

from pathlib import Path

import pytest

from atlas.cli import inspect_family, main
from atlas.session import ExplorerSession
from types_models import ExplorerConfig


def test_inspect_family_prints_filtered_titles(
    explorer_config: ExplorerConfig, capsys: pytest.CaptureFixture[str]
) -> None:
    session = ExplorerSession(explorer_config, navigate=None)

    code = inspect_family(session, "Computer_Science", "attention", ["cs.CL", "bogus"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Unknown category ignored: bogus" in out
    assert "Relevant: 1" in out
    assert "Attention Is All You Need [https://arxiv.org/abs/1706.03762]" in out
    assert "Graph Attention Networks" not in out


def test_inspect_reports_load_failure(
    explorer_config: ExplorerConfig, capsys: pytest.CaptureFixture[str]
) -> None:
    session = ExplorerSession(explorer_config, navigate=None)

    assert inspect_family(session, "Mathematics") == 1
    assert "Could not load Mathematics" in capsys.readouterr().out


def test_main_inspect_exits_with_status(data_dir: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--data-dir", str(data_dir), "inspect", "Physics"])
    assert excinfo.value.code == 0

    with pytest.raises(SystemExit) as excinfo:
        main(["--data-dir", str(data_dir), "inspect", "Astrology"])
    assert excinfo.value.code == 2


def test_main_lists_families(capsys: pytest.CaptureFixture[str]) -> None:
    main(["families"])

    out = capsys.readouterr().out
    assert "Computer_Science (default)" in out
    assert "Physics" in out

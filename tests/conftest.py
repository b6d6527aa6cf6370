from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Callable

import pytest

from atlas.loader import LocalDataSource, cluster_file_name, umap_file_name
from types_models import ExplorerConfig

CS_PAPERS: list[dict[str, Any]] = [
    {
        "title": "Attention Is All You Need",
        "abstract": "The dominant sequence transduction models...",
        "arxiv_id": "1706.03762",
        "categories": "cs.CL, cs.LG",
    },
    {
        "title": "Deep Residual Learning for Image Recognition",
        "arxiv_id": "1512.03385",
        "categories": "cs.CV",
    },
    {
        "title": "A Survey of Reinforcement Learning",
        "categories": "cs.AI, cs.LG",
    },
    {
        "title": "Graph Attention Networks",
        "arxiv_id": "1710.10903",
        "categories": "stat.ML,cs.LG ,",
    },
]
CS_EMBEDDINGS = [[0.0, 0.0], [1.0, 2.0], [3.0, 1.0], [2.0, 3.0]]
CS_CLUSTERS = [0, 1, 7, 2]

PHYSICS_PAPERS: list[dict[str, Any]] = [
    {
        "title": "Quantum Supremacy Using a Programmable Superconducting Processor",
        "arxiv_id": "1910.11333",
        "categories": "quant-ph",
    },
    {
        "title": "Observation of Gravitational Waves",
        "arxiv_id": "1602.03837",
        "categories": "gr-qc, astro-ph.HE",
    },
]
PHYSICS_EMBEDDINGS = [[-1.0, 5.0], [4.0, -2.0]]
PHYSICS_CLUSTERS = [3, 4]

FAMILIES = ["Computer_Science", "Physics", "Mathematics"]

WriteFamily = Callable[..., None]


def _write_json(path: Path, payload: Any) -> None:
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(payload, handle)


@pytest.fixture
def write_family(tmp_path: Path) -> WriteFamily:
    """Write a umap/cluster document pair for one family into tmp_path."""

    def write(
        family: str,
        papers: list[dict[str, Any]],
        embeddings: list[list[float]],
        clusters: list[int | None],
    ) -> None:
        _write_json(
            tmp_path / umap_file_name(family),
            {"embeddings": embeddings, "additional_info": papers},
        )
        _write_json(tmp_path / cluster_file_name(family), {"clusters": clusters})

    return write


@pytest.fixture
def data_dir(tmp_path: Path, write_family: WriteFamily) -> Path:
    write_family("Computer_Science", CS_PAPERS, CS_EMBEDDINGS, CS_CLUSTERS)
    write_family("Physics", PHYSICS_PAPERS, PHYSICS_EMBEDDINGS, PHYSICS_CLUSTERS)
    return tmp_path


@pytest.fixture
def explorer_config(data_dir: Path) -> ExplorerConfig:
    return ExplorerConfig(
        data_dir=data_dir,
        data_base_url=None,
        request_timeout=5,
        families=list(FAMILIES),
        default_family="Computer_Science",
        point_radius=10.0,
        link_template="https://arxiv.org/abs/{arxiv_id}",
        chart_width=400,
        chart_height=300,
        chart_padding=20,
        tooltip_offset_x=20,
        tooltip_offset_y=20,
        tooltip_line_height=18,
        tooltip_chars_per_line=60,
    )


class GatedSource:
    """Local source whose reads for one family block until a gate opens."""

    def __init__(self, inner: LocalDataSource, blocked: str, gate: threading.Event) -> None:
        self.inner = inner
        self.blocked = blocked
        self.gate = gate

    def fetch_json(self, name: str) -> Any:
        if self.blocked in name:
            assert self.gate.wait(timeout=5), "gate never opened"
        return self.inner.fetch_json(name)


@pytest.fixture
def gated_source(data_dir: Path) -> Callable[[str, threading.Event], GatedSource]:
    def make(blocked: str, gate: threading.Event) -> GatedSource:
        return GatedSource(LocalDataSource(data_dir), blocked, gate)

    return make

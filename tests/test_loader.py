from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import pytest
import requests

from atlas.errors import DatasetFetchError, UnknownFamilyError
from atlas.loader import (
    DatasetLoader,
    HttpDataSource,
    LocalDataSource,
    create_data_source,
)
from types_models import ExplorerConfig


class _Response:
    def __init__(self, status_code: int, payload: Any = None, bad_json: bool = False) -> None:
        self.status_code = status_code
        self._payload = payload
        self._bad_json = bad_json

    def json(self) -> Any:
        if self._bad_json:
            raise ValueError("not json")
        return self._payload


def test_fetch_returns_both_documents(data_dir: Path) -> None:
    loader = DatasetLoader(LocalDataSource(data_dir), ["Computer_Science"])

    raw = asyncio.run(loader.fetch("Computer_Science"))

    assert len(raw.umap.embeddings) == 4
    assert raw.umap.additional_info[0].title == "Attention Is All You Need"
    assert raw.umap.additional_info[2].arxiv_id is None
    assert raw.clusters.clusters == [0, 1, 7, 2]


def test_unknown_family_is_rejected_before_fetching(data_dir: Path) -> None:
    loader = DatasetLoader(LocalDataSource(data_dir), ["Computer_Science"])

    with pytest.raises(UnknownFamilyError):
        asyncio.run(loader.fetch("Astrology"))


def test_missing_cluster_file_fails_whole_load(data_dir: Path) -> None:
    (data_dir / "cluster_data_Physics.json").unlink()
    loader = DatasetLoader(LocalDataSource(data_dir), ["Physics"])

    with pytest.raises(DatasetFetchError) as excinfo:
        asyncio.run(loader.fetch("Physics"))

    assert excinfo.value.name == "cluster_data_Physics.json"


def test_invalid_json_is_a_fetch_error(data_dir: Path) -> None:
    (data_dir / "umap_data_Physics.json").write_text("{not json", encoding="utf-8")
    loader = DatasetLoader(LocalDataSource(data_dir), ["Physics"])

    with pytest.raises(DatasetFetchError, match="invalid JSON"):
        asyncio.run(loader.fetch("Physics"))


def test_undecodable_bytes_are_a_fetch_error(data_dir: Path) -> None:
    (data_dir / "umap_data_Physics.json").write_bytes(b'{"embeddings": "\xff\xfe"}')
    loader = DatasetLoader(LocalDataSource(data_dir), ["Physics"])

    with pytest.raises(DatasetFetchError, match="UTF-8") as excinfo:
        asyncio.run(loader.fetch("Physics"))

    assert excinfo.value.name == "umap_data_Physics.json"


def test_schema_violation_is_a_fetch_error(data_dir: Path) -> None:
    with open(data_dir / "umap_data_Physics.json", "w", encoding="utf-8") as handle:
        json.dump({"embeddings": [[0.0, 0.0]], "additional_info": [{"abstract": "x"}]}, handle)
    loader = DatasetLoader(LocalDataSource(data_dir), ["Physics"])

    with pytest.raises(DatasetFetchError, match="malformed"):
        asyncio.run(loader.fetch("Physics"))


def test_http_source_fetches_json(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, float]] = []

    def fake_get(url: str, timeout: float) -> _Response:
        calls.append((url, timeout))
        return _Response(200, {"clusters": [1, 2]})

    monkeypatch.setattr(requests, "get", fake_get)
    source = HttpDataSource("https://example.org/atlas/", timeout=3)

    assert source.fetch_json("cluster_data_Physics.json") == {"clusters": [1, 2]}
    assert calls == [("https://example.org/atlas/cluster_data_Physics.json", 3)]


@pytest.mark.parametrize(
    ("outcome", "message"),
    [
        (requests.exceptions.ConnectionError("refused"), "request failed"),
        (requests.exceptions.Timeout("slow"), "no response"),
        (_Response(404), "HTTP 404"),
        (_Response(200, bad_json=True), "not valid JSON"),
    ],
)
def test_http_source_failures(
    monkeypatch: pytest.MonkeyPatch, outcome: Any, message: str
) -> None:
    def fake_get(url: str, timeout: float) -> _Response:
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(requests, "get", fake_get)

    with pytest.raises(DatasetFetchError, match=message):
        HttpDataSource("https://example.org").fetch_json("umap_data_Physics.json")


def test_create_data_source_prefers_base_url(explorer_config: ExplorerConfig) -> None:
    assert isinstance(create_data_source(explorer_config), LocalDataSource)

    explorer_config.data_base_url = "https://example.org/atlas"
    source = create_data_source(explorer_config)

    assert isinstance(source, HttpDataSource)
    assert source.timeout == explorer_config.request_timeout

"""Fetch the UMAP and cluster documents for a category family.

Both documents are requested concurrently and joined; a failure of either one
fails the whole load, so callers never see half a dataset.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, NamedTuple, Protocol, Sequence, runtime_checkable

import requests
from pydantic import ValidationError

from atlas.errors import DatasetFetchError, UnknownFamilyError
from types_models import ClusterDocument, ExplorerConfig, UmapDocument

logger = logging.getLogger(__name__)


def umap_file_name(family: str) -> str:
    return f"umap_data_{family}.json"


def cluster_file_name(family: str) -> str:
    return f"cluster_data_{family}.json"


@runtime_checkable
class DataSource(Protocol):
    """Anything that can return a parsed JSON document by file name.

    Implementations are blocking; the loader runs them in worker threads.
    """

    def fetch_json(self, name: str) -> Any: ...


class LocalDataSource:
    """Reads dataset documents from a directory."""

    def __init__(self, root: Path) -> None:
        super().__init__()
        self.root = root

    def fetch_json(self, name: str) -> Any:
        path = self.root / name
        try:
            with open(path, "r", encoding="utf-8") as handle:
                return json.load(handle)
        except OSError as exc:
            raise DatasetFetchError(name, f"could not read {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise DatasetFetchError(name, f"invalid JSON: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise DatasetFetchError(name, f"not valid UTF-8: {exc}") from exc

    def __repr__(self) -> str:
        return f"LocalDataSource({str(self.root)!r})"


class HttpDataSource:
    """Fetches dataset documents over HTTP; no retries."""

    def __init__(self, base_url: str, timeout: float = 30.0) -> None:
        super().__init__()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def fetch_json(self, name: str) -> Any:
        url = f"{self.base_url}/{name}"
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout as exc:
            raise DatasetFetchError(
                name, f"no response within {self.timeout} seconds"
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise DatasetFetchError(name, f"request failed: {exc}") from exc

        if response.status_code != 200:
            raise DatasetFetchError(
                name, f"{url} responded with HTTP {response.status_code}"
            )

        try:
            return response.json()
        except ValueError as exc:
            raise DatasetFetchError(name, "response is not valid JSON") from exc

    def __repr__(self) -> str:
        return f"HttpDataSource({self.base_url!r})"


def create_data_source(config_obj: ExplorerConfig) -> DataSource:
    if config_obj.data_base_url:
        return HttpDataSource(config_obj.data_base_url, config_obj.request_timeout)
    return LocalDataSource(config_obj.data_dir)


class RawDataset(NamedTuple):
    umap: UmapDocument
    clusters: ClusterDocument


class DatasetLoader:
    """Loads and validates the document pair for one family."""

    def __init__(self, source: DataSource, families: Sequence[str]) -> None:
        super().__init__()
        self._source = source
        self._families = tuple(families)

    @property
    def families(self) -> tuple[str, ...]:
        return self._families

    def check_family(self, family: str) -> None:
        if family not in self._families:
            raise UnknownFamilyError(
                f"Unknown category family '{family}'. Choose one of: "
                + ", ".join(self._families)
            )

    def _fetch_umap(self, family: str) -> UmapDocument:
        name = umap_file_name(family)
        payload = self._source.fetch_json(name)
        try:
            return UmapDocument.model_validate(payload)
        except ValidationError as exc:
            raise DatasetFetchError(name, f"malformed document: {exc}") from exc

    def _fetch_clusters(self, family: str) -> ClusterDocument:
        name = cluster_file_name(family)
        payload = self._source.fetch_json(name)
        try:
            return ClusterDocument.model_validate(payload)
        except ValidationError as exc:
            raise DatasetFetchError(name, f"malformed document: {exc}") from exc

    async def fetch(self, family: str) -> RawDataset:
        """Fetch both documents concurrently and return them together.

        Raises:
            UnknownFamilyError: ``family`` is not a configured family.
            DatasetFetchError: either document failed to load or validate.
        """
        self.check_family(family)
        logger.debug("Fetching %s from %r", family, self._source)

        umap_doc, cluster_doc = await asyncio.gather(
            asyncio.to_thread(self._fetch_umap, family),
            asyncio.to_thread(self._fetch_clusters, family),
        )
        return RawDataset(umap=umap_doc, clusters=cluster_doc)


__all__ = [
    "DataSource",
    "DatasetLoader",
    "HttpDataSource",
    "LocalDataSource",
    "RawDataset",
    "cluster_file_name",
    "create_data_source",
    "umap_file_name",
]

"""Exception hierarchy for dataset loading and filter input."""

from __future__ import annotations


class DatasetError(RuntimeError):
    """Base class for failures that abort a category-family load."""


class DatasetFetchError(DatasetError):
    """Raised when a dataset document cannot be retrieved or parsed."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(f"{name}: {message}")
        self.name = name


class AlignmentError(DatasetError):
    """Raised when embeddings, metadata and clusters differ in length."""

    def __init__(self, embeddings: int, metadata: int, clusters: int) -> None:
        super().__init__(
            "Index alignment mismatch: "
            + f"{embeddings} embeddings vs {metadata} metadata entries "
            + f"vs {clusters} cluster assignments"
        )
        self.embeddings = embeddings
        self.metadata = metadata
        self.clusters = clusters


class UnknownFamilyError(ValueError):
    """Raised for a category family outside the configured set."""


class UnknownCategoryError(KeyError):
    """Raised when toggling a category token absent from the loaded dataset."""


__all__ = [
    "AlignmentError",
    "DatasetError",
    "DatasetFetchError",
    "UnknownCategoryError",
    "UnknownFamilyError",
]

"""Domain models for the book generation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constraint import MARKDOWN_SUFFIX
from .logging import StageTimings
from .utils import slugify


@dataclass(frozen=True, slots=True)
class RepositoryReference:
    """Owner/project pair extracted from a repository URL."""

    owner: str
    project: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.project}"

    @property
    def book_filename(self) -> str:
        return f"{slugify(self.project)}-book.pdf"


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "dir"
    OTHER = "other"


class RemoteEntry(BaseModel):
    """One item of a repository contents listing."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    name: str
    kind: EntryKind = Field(validation_alias="type")
    content_url: str | None = Field(default=None, validation_alias="download_url")

    @field_validator("kind", mode="before")
    @classmethod
    def _coerce_kind(cls, value: object) -> EntryKind:
        if isinstance(value, EntryKind):
            return value
        try:
            return EntryKind(value)
        except (TypeError, ValueError):
            return EntryKind.OTHER

    @property
    def is_markdown(self) -> bool:
        return (
            self.kind is EntryKind.FILE
            and self.name.lower().endswith(MARKDOWN_SUFFIX)
            and bool(self.content_url)
        )


@dataclass(slots=True)
class FetchedDocument:
    source_name: str
    body: str


@dataclass(frozen=True, slots=True)
class AssembledBook:
    body: str


@dataclass(slots=True)
class BookResult:
    """Generated PDF plus metadata for the response boundary."""

    run_id: str
    reference: RepositoryReference
    content: bytes
    sources: list[str]
    timings: StageTimings

    @property
    def filename(self) -> str:
        return self.reference.book_filename

    @property
    def size_bytes(self) -> int:
        return len(self.content)


__all__ = [
    "RepositoryReference",
    "EntryKind",
    "RemoteEntry",
    "FetchedDocument",
    "AssembledBook",
    "BookResult",
]

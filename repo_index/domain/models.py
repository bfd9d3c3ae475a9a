"""
Pydantic models for the package index document.

This module defines the in-memory shape of a parsed index:
- Metadata: descriptive fields of one published version (name, version, ...)
- VersionRecord: one published version with its download locations
- IndexFile: the whole document, mapping package names to version records

In the serialized document the descriptive fields sit next to the
record-specific ones (urls, created, removed, digest). VersionRecord lifts
them into its ``metadata`` field during validation.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# Version Models
# ---------------------------------------------------------------------------


class Metadata(BaseModel):
    """
    Descriptive metadata of a single published version.

    Only ``version`` is read by sorting and lookup. Any additional keys found
    in the document are kept as extra fields.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    name: Optional[str] = Field(
        default=None,
        description="Package name as declared by the package itself.",
    )
    version: str = Field(
        default="",
        description="Version string (e.g., '1.2.3'). Unparseable values are tolerated.",
    )
    app_version: Optional[str] = Field(
        default=None,
        alias="appVersion",
        description="Version of the application the package delivers, if different.",
    )
    description: Optional[str] = Field(
        default=None,
        description="Short description of the package.",
    )
    maintainers: List[Any] = Field(
        default_factory=list,
        description="Maintainer entries, opaque to the index.",
    )
    url: Optional[str] = Field(
        default=None,
        description="Homepage or project URL.",
    )

    @field_validator("version", mode="before")
    @classmethod
    def _none_version_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


_RECORD_FIELDS = ("urls", "created", "removed", "digest")


class VersionRecord(BaseModel):
    """
    One published version of one package.

    ``urls`` is kept in document order (preferred location first).
    """

    metadata: Metadata = Field(
        default_factory=Metadata,
        description="Descriptive metadata, including the version string.",
    )
    urls: List[str] = Field(
        default_factory=list,
        description="Download locations for this version, preferred first.",
    )
    created: Optional[datetime] = Field(
        default=None,
        description="When this version was published.",
    )
    removed: bool = Field(
        default=False,
        description="True if the version has been withdrawn but kept for history.",
    )
    digest: Optional[str] = Field(
        default=None,
        description="Content-integrity string (e.g., a checksum). Opaque.",
    )

    @model_validator(mode="before")
    @classmethod
    def _lift_metadata(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if "metadata" in data and set(data) <= {"metadata", *_RECORD_FIELDS}:
            return data
        record = {key: value for key, value in data.items() if key in _RECORD_FIELDS}
        record["metadata"] = {key: value for key, value in data.items() if key not in _RECORD_FIELDS}
        return record

    @field_validator("urls", mode="before")
    @classmethod
    def _none_urls_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("removed", mode="before")
    @classmethod
    def _none_removed_is_false(cls, value: Any) -> Any:
        return False if value is None else value

    @property
    def version(self) -> str:
        return self.metadata.version


# ---------------------------------------------------------------------------
# Index Model
# ---------------------------------------------------------------------------


class IndexFile(BaseModel):
    """
    In-memory representation of a package index document.

    After parsing, every list in ``entries`` is in canonical order: newest
    version first, unparseable versions last. Nothing in this package mutates
    an index after that.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    api_version: str = Field(
        default="",
        alias="apiVersion",
        description="Schema version of the document. Required on a valid index.",
    )
    generated: Optional[datetime] = Field(
        default=None,
        description="When the document was generated. Informational only.",
    )
    entries: Dict[str, List[VersionRecord]] = Field(
        default_factory=dict,
        description="Dictionary mapping package names to their version records.",
    )

    @field_validator("api_version", mode="before")
    @classmethod
    def _none_api_version_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("entries", mode="before")
    @classmethod
    def _normalize_entries(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {name: [] if versions is None else versions for name, versions in value.items()}
        return value

    @field_validator("entries")
    @classmethod
    def _names_not_empty(cls, value: Dict[str, List[VersionRecord]]) -> Dict[str, List[VersionRecord]]:
        for name in value:
            if not name:
                raise ValueError("package name must not be empty")
        return value

    def package_names(self) -> List[str]:
        """Return the sorted list of package names in the index."""
        return sorted(self.entries)

    def versions_of(self, name: str) -> List[VersionRecord]:
        """Return the canonical version list for ``name`` (empty if unknown)."""
        return list(self.entries.get(name, []))

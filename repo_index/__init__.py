"""
Package index parsing and version resolution.

This package is responsible for:
* Parsing an index document (YAML) into pydantic models.
* Sorting every package's versions newest-first (canonical order).
* Resolving a package name plus an optional constraint to one version record.
"""

from repo_index.core.config import IndexSettings, configure_logging
from repo_index.data.canonical import sort_entries, sort_versions
from repo_index.data.parser import parse_index
from repo_index.data.resolver import IndexResolver, find_latest, find_version, resolve
from repo_index.domain.errors import (
    ConstraintFormatError,
    DecodeError,
    MissingSchemaVersionError,
    PackageNotFoundError,
    RepoIndexError,
    VersionFormatError,
    VersionNotFoundError,
)
from repo_index.domain.models import IndexFile, Metadata, VersionRecord
from repo_index.domain.versions import (
    ANY_CONSTRAINT,
    Constraint,
    compare_versions,
    parse_constraint,
    parse_version,
)

__all__ = [
    "ANY_CONSTRAINT",
    "Constraint",
    "ConstraintFormatError",
    "DecodeError",
    "IndexFile",
    "IndexResolver",
    "IndexSettings",
    "Metadata",
    "MissingSchemaVersionError",
    "PackageNotFoundError",
    "RepoIndexError",
    "VersionFormatError",
    "VersionNotFoundError",
    "VersionRecord",
    "compare_versions",
    "configure_logging",
    "find_latest",
    "find_version",
    "parse_constraint",
    "parse_index",
    "parse_version",
    "resolve",
    "sort_entries",
    "sort_versions",
]

"""
Exception types raised while parsing and querying a package index.

- DecodeError and MissingSchemaVersionError are raised by the parser and
  carry the (partial or canonicalized) index they were building.
- VersionFormatError and ConstraintFormatError come from the version
  comparator. The former is always absorbed by sorting and lookup.
- PackageNotFoundError and VersionNotFoundError are raised by the resolver
  and carry the queried name and constraint.
"""

from __future__ import annotations

from typing import Any, Optional

__all__ = [
    "RepoIndexError",
    "DecodeError",
    "MissingSchemaVersionError",
    "VersionFormatError",
    "ConstraintFormatError",
    "PackageNotFoundError",
    "VersionNotFoundError",
]


class RepoIndexError(Exception):
    """Base class for every error raised by repo_index."""


class DecodeError(RepoIndexError, ValueError):
    """The raw buffer is not a valid index document."""

    def __init__(self, message: str, index: Optional[Any] = None):
        super().__init__(message)
        self.index = index


class MissingSchemaVersionError(RepoIndexError, ValueError):
    """The document decoded fine but has no apiVersion."""

    def __init__(self, index: Optional[Any] = None):
        super().__init__("no API version specified")
        self.index = index


class VersionFormatError(RepoIndexError, ValueError):
    def __init__(self, version: str):
        super().__init__(f"invalid version: {version!r}")
        self.version = version


class ConstraintFormatError(RepoIndexError, ValueError):
    def __init__(self, constraint: str, reason: Optional[str] = None):
        message = f"invalid version constraint: {constraint!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.constraint = constraint


class PackageNotFoundError(RepoIndexError, LookupError):
    """No entries exist for the queried package name."""

    def __init__(self, name: str, constraint: Any):
        super().__init__(f"no package of given name {name} and version {constraint} found")
        self.name = name
        self.constraint = constraint


class VersionNotFoundError(RepoIndexError, LookupError):
    """The package exists but none of its versions satisfy the constraint."""

    def __init__(self, name: str, constraint: Any):
        super().__init__(f"no package version found for {name}-{constraint}")
        self.name = name
        self.constraint = constraint

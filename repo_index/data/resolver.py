"""
Resolve a package name and a version constraint to one version record.
"""
from __future__ import annotations

import logging

from repo_index.domain.errors import PackageNotFoundError, VersionNotFoundError
from repo_index.domain.models import IndexFile, VersionRecord
from repo_index.domain.versions import (
    ANY_CONSTRAINT,
    Constraint,
    parse_constraint,
    try_parse_version,
)

logger = logging.getLogger(__name__)


def find_latest(index: IndexFile, name: str) -> VersionRecord:
    """Return the newest version of ``name``."""
    return resolve(index, name, parse_constraint(ANY_CONSTRAINT))


def find_version(index: IndexFile, name: str, version: str) -> VersionRecord:
    """
    Return the newest version of ``name`` that satisfies ``version``.

    Args:
        index: Canonicalized index
        name: Package name
        version: Constraint expression (e.g., '1.2.3', '<2.0.0', '^1.4')

    Raises:
        ConstraintFormatError: if ``version`` is malformed (before any lookup)
        PackageNotFoundError: if the index has no versions of ``name``
        VersionNotFoundError: if no version satisfies the constraint
    """
    return resolve(index, name, parse_constraint(version))


def resolve(index: IndexFile, name: str, constraint: Constraint) -> VersionRecord:
    """
    Scan the canonical list of ``name`` and return the first match.

    Relies on the list being sorted newest-first: the first record that
    satisfies ``constraint`` is the highest satisfying version. Records
    whose version does not parse are skipped.
    """
    records = index.entries.get(name)
    if not records:
        logger.debug(f"Package not found: {name} ({constraint})")
        raise PackageNotFoundError(name, constraint)

    for record in records:
        parsed = try_parse_version(record.version)
        if parsed is None:
            continue
        if constraint.check(parsed):
            return record

    logger.debug(f"No version of {name} satisfies {constraint}")
    raise VersionNotFoundError(name, constraint)


class IndexResolver:
    """Query surface bound to one parsed index."""

    def __init__(self, index: IndexFile):
        self.index = index

    def find_latest(self, name: str) -> VersionRecord:
        """Return the newest version of ``name`` in the bound index."""
        return find_latest(self.index, name)

    def find_version(self, name: str, version: str) -> VersionRecord:
        """Return the newest version of ``name`` satisfying ``version``."""
        return find_version(self.index, name, version)

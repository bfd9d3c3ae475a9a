"""
Canonical ordering of version records.

In canonical form each package's records are sorted so the most recent
release sits at index 0. Tooling can then predict the newest version
without parsing anything. Records whose version cannot be parsed are pushed
to the back; among themselves they keep their input order.
"""

from __future__ import annotations

import functools
import logging
from typing import List, Optional, Tuple

from semver import Version

from repo_index.domain.models import IndexFile, VersionRecord
from repo_index.domain.versions import compare_versions, try_parse_version

logger = logging.getLogger(__name__)

_Decorated = Tuple[Optional[Version], VersionRecord]


def _compare_decorated(left: _Decorated, right: _Decorated) -> int:
    return compare_versions(left[0], right[0])


def sort_versions(records: List[VersionRecord]) -> int:
    """
    Sort ``records`` in place, newest version first.

    Returns:
        Number of records whose version failed to parse
    """
    decorated: List[_Decorated] = [(try_parse_version(r.version), r) for r in records]
    decorated.sort(key=functools.cmp_to_key(_compare_decorated), reverse=True)
    records[:] = [record for _, record in decorated]
    return sum(1 for parsed, _ in decorated if parsed is None)


def sort_entries(index: IndexFile) -> None:
    """Put every package's version list of ``index`` in canonical order."""
    for name, records in index.entries.items():
        invalid = sort_versions(records)
        if invalid:
            logger.debug(f"Package {name}: {invalid} of {len(records)} versions unparseable, moved to tail")

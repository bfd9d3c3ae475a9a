"""
Version parsing, ordering and constraint matching.

Versions are semantic versions parsed with the ``semver`` library; missing
minor/patch components and a leading ``v`` are accepted. Constraint
expressions use the range syntax common to package indexes (``^1.2``,
``~1.2.3``, ``1.2.x``, ``1.2 - 1.4``, ``>=1 <2 || 3.x``). Each ``||``
alternative becomes a list of comparators that must all hold.
"""

from __future__ import annotations

import re
from typing import List, NamedTuple, Optional

from semver import Version

from .errors import ConstraintFormatError, VersionFormatError

ANY_CONSTRAINT = "*"

_WILDCARDS = ("*", "x", "X")
_OPERATOR_GAP = re.compile(r"(==|!=|>=|<=|=|>|<|~|\^)\s+")
_HYPHEN_RANGE = re.compile(r"(\S+)\s+-\s+(\S+)")
_CLAUSE_SPLIT = re.compile(r"[\s,]+")
_CLAUSE = re.compile(r"^(==|!=|>=|<=|=|>|<|~|\^)?(.*)$")


def parse_version(text: str) -> Version:
    """Parse ``text`` or raise VersionFormatError."""
    if not isinstance(text, str):
        raise VersionFormatError(text)
    candidate = text[1:] if text[:1] in ("v", "V") else text
    try:
        return Version.parse(candidate, optional_minor_and_patch=True)
    except ValueError as e:
        raise VersionFormatError(text) from e


def try_parse_version(text: str) -> Optional[Version]:
    """Parse ``text``, returning None when it is not a valid version."""
    try:
        return parse_version(text)
    except VersionFormatError:
        return None


def compare_versions(left: Optional[Version], right: Optional[Version]) -> int:
    """
    Three-way comparison of two parse results.

    ``None`` stands for a version that failed to parse. Unparseable versions
    order before every parseable one and compare equal to each other.
    Parseable versions follow semver precedence; build metadata is ignored.

    Returns:
        -1, 0 or 1
    """
    if left is None and right is None:
        return 0
    if left is None:
        return -1
    if right is None:
        return 1
    return left.replace(build=None).compare(right.replace(build=None))


def _release(version: Version) -> Version:
    return version.replace(prerelease=None, build=None)


# ---------------------------------------------------------------------------
# Constraints
# ---------------------------------------------------------------------------


class _Comparator(NamedTuple):
    op: str
    version: Version
    # Exclusive upper end of a wildcard range negated with "!=".
    upper: Optional[Version] = None

    def check(self, version: Version) -> bool:
        cmp = compare_versions(version, self.version)
        if self.op == "==":
            return cmp == 0
        if self.op == "!=":
            if self.upper is not None:
                return cmp < 0 or compare_versions(version, self.upper) >= 0
            return cmp != 0
        if self.op == ">":
            return cmp > 0
        if self.op == ">=":
            return cmp >= 0
        if self.op == "<":
            return cmp < 0
        return cmp <= 0


class Constraint:
    """
    A parsed constraint expression: OR over AND-ed comparators.

    A pre-release version only satisfies an alternative that names a
    pre-release of the same major.minor.patch. An alternative with no
    comparators (``*``) matches every version, pre-releases included.
    """

    def __init__(self, expression: str, alternatives: List[List[_Comparator]]):
        self.expression = expression
        self.alternatives = alternatives

    def check(self, version: Version) -> bool:
        return any(_alternative_allows(comparators, version) for comparators in self.alternatives)

    def __str__(self) -> str:
        return self.expression

    def __repr__(self) -> str:
        return f"Constraint({self.expression!r})"


def _alternative_allows(comparators: List[_Comparator], version: Version) -> bool:
    if not all(c.check(version) for c in comparators):
        return False
    if version.prerelease and comparators:
        release = _release(version)
        return any(c.version.prerelease and _release(c.version) == release for c in comparators)
    return True


def parse_constraint(expression: str) -> Constraint:
    """
    Parse a constraint expression.

    Raises:
        ConstraintFormatError: if any clause is malformed
    """
    if not isinstance(expression, str):
        raise ConstraintFormatError(repr(expression), "expected a string")

    alternatives = [_translate_alternative(expression, alt) for alt in expression.split("||")]
    return Constraint(expression, alternatives)


def _translate_alternative(expression: str, alternative: str) -> List[_Comparator]:
    text = alternative.strip()
    if not text or text in _WILDCARDS:
        return []

    text = _HYPHEN_RANGE.sub(r">=\1,<=\2", text)
    text = _OPERATOR_GAP.sub(r"\1", text)

    comparators: List[_Comparator] = []
    for raw in _CLAUSE_SPLIT.split(text):
        if raw:
            comparators.extend(_translate_clause(expression, raw))
    return comparators


def _translate_clause(expression: str, clause: str) -> List[_Comparator]:
    match = _CLAUSE.match(clause)
    op, text = match.group(1) or "", match.group(2)
    if text[:1] in ("v", "V") and text[1:2].isdigit():
        text = text[1:]
    if not text:
        raise ConstraintFormatError(expression, f"missing version in {clause!r}")

    prefix = _wildcard_prefix(text)
    if prefix is None:
        version = _bound(expression, text)
        if op == "~":
            return [_Comparator(">=", version), _Comparator("<", Version(version.major, version.minor + 1, 0))]
        if op == "^":
            return [_Comparator(">=", version), _Comparator("<", Version(version.major + 1, 0, 0))]
        return [_Comparator("==" if op in ("", "=") else op, version)]

    if not prefix:
        if op in ("", "=", "==", ">=", "~", "^"):
            return []
        raise ConstraintFormatError(expression, f"nothing can satisfy {clause!r}")

    lower = Version(*(prefix + [0] * (3 - len(prefix))))
    bumped = prefix[:-1] + [prefix[-1] + 1]
    upper = Version(*(bumped + [0] * (3 - len(bumped))))

    if op in ("", "=", "==", "~"):
        return [_Comparator(">=", lower), _Comparator("<", upper)]
    if op == "^":
        return [_Comparator(">=", lower), _Comparator("<", Version(prefix[0] + 1, 0, 0))]
    if op == "!=":
        return [_Comparator("!=", lower, upper)]
    if op in (">=", "<"):
        return [_Comparator(op, lower)]
    if op == ">":
        return [_Comparator(">=", upper)]
    return [_Comparator("<", upper)]


def _wildcard_prefix(text: str) -> Optional[List[int]]:
    """
    Return the numeric prefix of a partial or wildcard version.

    ``1.2.x`` and ``1.2`` both give ``[1, 2]``; ``*`` gives ``[]``. Full
    versions and anything that is not purely numeric give None.
    """
    if "-" in text or "+" in text:
        return None
    parts = text.split(".")
    if len(parts) > 3:
        return None
    prefix: List[int] = []
    for part in parts:
        if part in _WILDCARDS:
            return prefix
        if not part.isdigit():
            return None
        prefix.append(int(part))
    if len(prefix) == 3:
        return None
    return prefix


def _bound(expression: str, text: str) -> Version:
    try:
        return parse_version(text)
    except VersionFormatError as e:
        raise ConstraintFormatError(expression, str(e)) from e

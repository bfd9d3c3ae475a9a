"""
Parse a package index document from raw bytes.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError

from repo_index.domain.errors import DecodeError, MissingSchemaVersionError
from repo_index.domain.models import IndexFile
from repo_index.data.canonical import sort_entries

logger = logging.getLogger(__name__)


def parse_index(raw: Union[bytes, str]) -> IndexFile:
    """
    Load an index document and do minimal validity checking.

    The entries are put in canonical order before the schema version is
    checked, so the index attached to MissingSchemaVersionError is already
    sorted.

    Args:
        raw: YAML document, as read by the caller

    Returns:
        Canonicalized IndexFile

    Raises:
        DecodeError: if the document is not valid YAML or does not have the
            shape of an index. ``.index`` holds the fields that did validate
            (partial, not canonicalized), or an empty IndexFile.
        MissingSchemaVersionError: if ``apiVersion`` is missing or empty.
            ``.index`` holds the parsed, canonicalized IndexFile.
    """
    index = IndexFile()
    try:
        document = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse index YAML: {e}")
        raise DecodeError(f"unmarshalling index file: {e}", index) from e

    if document is None:
        document = {}
    if not isinstance(document, dict):
        logger.warning(f"Index document is a {type(document).__name__}, expected a mapping")
        raise DecodeError(
            f"unmarshalling index file: expected a mapping, got {type(document).__name__}",
            index,
        )

    try:
        index = IndexFile.model_validate(document)
    except ValidationError as e:
        logger.warning(f"Index document failed validation: {e.error_count()} error(s)")
        raise DecodeError(f"unmarshalling index file: {e}", _partial_index(document)) from e

    sort_entries(index)

    if not index.api_version:
        raise MissingSchemaVersionError(index)

    logger.debug(
        f"Parsed index apiVersion={index.api_version}: "
        f"{len(index.entries)} packages, "
        f"{sum(len(v) for v in index.entries.values())} versions"
    )
    return index


def _partial_index(document: Dict[str, Any]) -> IndexFile:
    """Keep the top-level fields and packages of ``document`` that validate on their own."""
    partial: Dict[str, Any] = {}
    for key in ("apiVersion", "generated"):
        if key in document and _validates({key: document[key]}):
            partial[key] = document[key]
    entries = document.get("entries")
    if isinstance(entries, dict):
        partial["entries"] = {
            name: versions
            for name, versions in entries.items()
            if _validates({"entries": {name: versions}})
        }
    return IndexFile.model_validate(partial)


def _validates(fragment: Dict[str, Any]) -> bool:
    try:
        IndexFile.model_validate(fragment)
    except ValidationError:
        return False
    return True

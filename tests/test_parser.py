"""Tests for `repo_index.data.parser`."""

from __future__ import annotations

import logging
from datetime import datetime

import pytest
import yaml
from pydantic import ValidationError

from repo_index.data.parser import parse_index
from repo_index.domain.errors import DecodeError, MissingSchemaVersionError, RepoIndexError
from repo_index.domain.models import IndexFile


def test_parse_sample_index(sample_bytes: bytes) -> None:
    index = parse_index(sample_bytes)

    assert index.api_version == "v1"
    assert isinstance(index.generated, datetime)
    assert [r.version for r in index.entries["app"]] == ["2.0.0", "1.9.0", "1.2.0"]
    assert [r.version for r in index.entries["broken"]] == ["1.0.0", "not-a-version"]
    assert index.entries["empty"] == []


def test_parse_keeps_record_fields(sample_index: IndexFile) -> None:
    oldest = sample_index.entries["app"][-1]

    assert oldest.urls == [
        "https://mirror-a.example.com/app-1.2.0.tgz",
        "https://mirror-b.example.com/app-1.2.0.tgz",
    ]
    assert oldest.digest == "sha256:aaa"
    assert oldest.created is not None
    assert oldest.metadata.description == "Example application"
    assert sample_index.entries["app"][1].removed is True


def test_parse_accepts_str_input() -> None:
    index = parse_index("apiVersion: v1\nentries: {}\n")

    assert index.api_version == "v1"
    assert index.entries == {}


def test_missing_api_version_returns_sorted_index() -> None:
    raw = b"entries:\n  app:\n    - version: 1.0.0\n    - version: 3.0.0\n"

    with pytest.raises(MissingSchemaVersionError) as excinfo:
        parse_index(raw)

    index = excinfo.value.index
    assert isinstance(index, IndexFile)
    assert [r.version for r in index.entries["app"]] == ["3.0.0", "1.0.0"]
    assert str(excinfo.value) == "no API version specified"


def test_empty_api_version_is_missing() -> None:
    with pytest.raises(MissingSchemaVersionError):
        parse_index(b'apiVersion: ""\nentries: {}\n')


def test_empty_document_is_missing_api_version() -> None:
    with pytest.raises(MissingSchemaVersionError) as excinfo:
        parse_index(b"")

    assert excinfo.value.index.entries == {}


def test_invalid_yaml_raises_decode_error() -> None:
    with pytest.raises(DecodeError) as excinfo:
        parse_index(b"apiVersion: v1\nentries: [unclosed\n")

    assert isinstance(excinfo.value.__cause__, yaml.YAMLError)
    assert isinstance(excinfo.value.index, IndexFile)
    assert "unmarshalling index file" in str(excinfo.value)


def test_non_mapping_document_raises_decode_error() -> None:
    with pytest.raises(DecodeError, match="expected a mapping"):
        parse_index(b"- just\n- a list\n")


def test_wrong_field_type_raises_decode_error() -> None:
    with pytest.raises(DecodeError) as excinfo:
        parse_index(b"apiVersion: v1\nentries:\n  app:\n    - version: 1.0.0\n      urls: {a: b}\n")

    assert isinstance(excinfo.value.__cause__, ValidationError)
    assert isinstance(excinfo.value, RepoIndexError)


def test_no_structural_validation_of_records() -> None:
    raw = b"""
apiVersion: v1
entries:
  app:
    - version: 1.0.0
      urls: ["not a url"]
    - version: 1.0.0
      urls: ["not a url"]
    - version: garbage
"""
    index = parse_index(raw)

    assert [r.version for r in index.entries["app"]] == ["1.0.0", "1.0.0", "garbage"]


def test_unknown_top_level_keys_are_ignored() -> None:
    index = parse_index(b"apiVersion: v1\nkind: Index\nentries: {}\n")

    assert index.api_version == "v1"


def test_decode_failure_is_logged(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="repo_index"):
        with pytest.raises(DecodeError):
            parse_index(b"apiVersion: [\n")

    assert any("Failed to parse index YAML" in message for message in caplog.messages)


def test_decode_error_keeps_valid_parts() -> None:
    raw = b"""
apiVersion: v1
entries:
  good:
    - version: 1.0.0
      urls: ["https://a"]
  bad:
    - version: 1.0.0
      urls: {not: a-list}
"""
    with pytest.raises(DecodeError) as excinfo:
        parse_index(raw)

    partial = excinfo.value.index
    assert partial.api_version == "v1"
    assert list(partial.entries) == ["good"]
    assert partial.entries["good"][0].urls == ["https://a"]


def test_decode_error_with_bad_entries_shape_keeps_api_version() -> None:
    with pytest.raises(DecodeError) as excinfo:
        parse_index(b"apiVersion: v2\nentries: [1, 2]\n")

    assert excinfo.value.index.api_version == "v2"
    assert excinfo.value.index.entries == {}

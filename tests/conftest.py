from __future__ import annotations

import textwrap

import pytest

from repo_index.data.parser import parse_index


SAMPLE_INDEX = textwrap.dedent(
    """
    apiVersion: v1
    generated: 2024-03-01T10:00:00Z
    entries:
      app:
        - name: app
          version: 1.2.0
          description: Example application
          urls:
            - https://mirror-a.example.com/app-1.2.0.tgz
            - https://mirror-b.example.com/app-1.2.0.tgz
          created: 2023-01-10T08:00:00Z
          digest: sha256:aaa
        - name: app
          version: 2.0.0
          urls:
            - https://mirror-a.example.com/app-2.0.0.tgz
        - name: app
          version: 1.9.0
          urls:
            - https://mirror-a.example.com/app-1.9.0.tgz
          removed: true
      broken:
        - name: broken
          version: not-a-version
        - name: broken
          version: 1.0.0
      empty: []
    """
).encode("utf-8")


@pytest.fixture
def sample_bytes() -> bytes:
    return SAMPLE_INDEX


@pytest.fixture
def sample_index():
    return parse_index(SAMPLE_INDEX)

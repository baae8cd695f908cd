"""Shared fixtures: FluxHelmRelease manifests in each recognised image shape."""

import textwrap

import pytest

HEADER = """\
---
apiVersion: helm.integrations.flux.weave.works/v1alpha2
kind: FluxHelmRelease
metadata:
  name: mariadb
  namespace: maria
  labels:
    chart: mariadb
spec:
  chartGitPath: mariadb
  values:
"""


def release_manifest(values_yaml: str) -> str:
    """A FluxHelmRelease manifest whose spec.values is *values_yaml*."""
    return HEADER + textwrap.indent(textwrap.dedent(values_yaml), "    ")


@pytest.fixture
def image_only_manifest() -> str:
    return release_manifest("""\
        first: post
        image: bitnami/mariadb:10.1.30-r1
        persistence:
          enabled: false
        """)


@pytest.fixture
def image_tag_manifest() -> str:
    return release_manifest("""\
        first: post
        image: bitnami/mariadb
        tag: 10.1.30-r1
        persistence:
          enabled: false
        """)


@pytest.fixture
def named_image_manifest() -> str:
    return release_manifest("""\
        db:
          first: post
          image: bitnami/mariadb:10.1.30-r1
          persistence:
            enabled: false
        """)


@pytest.fixture
def named_image_tag_manifest() -> str:
    return release_manifest("""\
        other:
          not: "containing image"
        db:
          first: post
          image: bitnami/mariadb
          tag: 10.1.30-r1
          persistence:
            enabled: false
        """)


@pytest.fixture
def named_image_object_manifest() -> str:
    return release_manifest("""\
        other:
          not: "containing image"
        db:
          first: post
          image:
            repository: bitnami/mariadb
            tag: 10.1.30-r1
          persistence:
            enabled: false
        """)


@pytest.fixture
def image_object_manifest() -> str:
    return release_manifest("""\
        image:
          repository: bitnami/mariadb
          tag: 10.1.30-r1
        persistence:
          enabled: false
        """)

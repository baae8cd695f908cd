"""Tests for FluxHelmRelease containers and image updates."""

import copy

import pytest
import yaml

from fluxhelm.core.constants import RELEASE_CONTAINER_NAME
from fluxhelm.core.image import parse_ref
from fluxhelm.core.release import FluxHelmRelease, release_containers, set_release_image
from fluxhelm.io.parsing import parse_multidoc
from fluxhelm.pacts.errors import ContainerNotFoundError
from fluxhelm.pacts.types import Container, Workload

RESOURCE_ID = "maria:fluxhelmrelease/mariadb"
EXPECTED_IMAGE = "bitnami/mariadb:10.1.30-r1"


def _release(manifest: str) -> FluxHelmRelease:
    resources = parse_multidoc(list(yaml.safe_load_all(manifest)), "test")
    assert RESOURCE_ID in resources, resources
    return resources[RESOURCE_ID]


def _assert_retag(release: FluxHelmRelease, container: str) -> None:
    """Retag *container* and check it is the only container, with the new image."""
    new_image = release.containers()[0].image.with_new_tag("some-other-tag")
    release.set_container_image(container, new_image)
    containers = release.containers()
    assert len(containers) == 1
    assert containers[0].name == container
    assert str(containers[0].image) == str(new_image)


class TestParseFormats:
    """Each recognised shape, parsed from a manifest."""

    def test_image_only_format(self, image_only_manifest) -> None:
        release = _release(image_only_manifest)
        assert isinstance(release, Workload)
        containers = release.containers()
        assert len(containers) == 1
        assert containers[0].name == RELEASE_CONTAINER_NAME
        assert str(containers[0].image) == EXPECTED_IMAGE

    def test_image_tag_format(self, image_tag_manifest) -> None:
        release = _release(image_tag_manifest)
        containers = release.containers()
        assert len(containers) == 1
        assert str(containers[0].image) == EXPECTED_IMAGE

    def test_named_image_format(self, named_image_manifest) -> None:
        release = _release(named_image_manifest)
        containers = release.containers()
        assert containers == [Container("db", parse_ref(EXPECTED_IMAGE))]
        _assert_retag(release, "db")

    def test_named_image_tag_format(self, named_image_tag_manifest) -> None:
        release = _release(named_image_tag_manifest)
        containers = release.containers()
        assert len(containers) == 1
        assert containers[0].name == "db"
        assert str(containers[0].image) == EXPECTED_IMAGE
        _assert_retag(release, "db")
        assert release.values["other"] == {"not": "containing image"}
        assert release.values["db"]["image"] == "bitnami/mariadb"
        assert release.values["db"]["tag"] == "some-other-tag"

    def test_named_image_object_format(self, named_image_object_manifest) -> None:
        release = _release(named_image_object_manifest)
        assert str(release.containers()[0].image) == EXPECTED_IMAGE
        _assert_retag(release, "db")
        assert release.values["db"]["image"] == {
            "repository": "bitnami/mariadb", "tag": "some-other-tag"}
        assert release.values["db"]["persistence"] == {"enabled": False}

    def test_image_object_format_flat(self, image_object_manifest) -> None:
        release = _release(image_object_manifest)
        containers = release.containers()
        assert containers[0].name == RELEASE_CONTAINER_NAME
        assert str(containers[0].image) == EXPECTED_IMAGE
        _assert_retag(release, RELEASE_CONTAINER_NAME)


class TestSetContainerImage:
    """Image Mutator behaviour."""

    def test_split_shape_preserved(self) -> None:
        values = {"image": "repo", "tag": "t"}
        assert [str(c.image) for c in release_containers(values)] == ["repo:t"]
        set_release_image(values, RELEASE_CONTAINER_NAME, parse_ref("repo2:t2"))
        assert values == {"image": "repo2", "tag": "t2"}

    def test_writes_into_manifest_document(self, named_image_manifest) -> None:
        docs = list(yaml.safe_load_all(named_image_manifest))
        release = parse_multidoc(docs, "test")[RESOURCE_ID]
        release.set_container_image("db", parse_ref("bitnami/mariadb:10.2"))
        assert docs[0]["spec"]["values"]["db"]["image"] == "bitnami/mariadb:10.2"

    def test_not_found_leaves_values_unchanged(self, named_image_tag_manifest) -> None:
        release = _release(named_image_tag_manifest)
        before = copy.deepcopy(release.values)
        with pytest.raises(ContainerNotFoundError) as excinfo:
            release.set_container_image("web", parse_ref("repo/web:v1"))
        assert excinfo.value.container == "web"
        assert str(excinfo.value) == "did not find container web in FluxHelmRelease"
        assert release.values == before

    def test_not_found_is_lookup_error(self) -> None:
        with pytest.raises(LookupError):
            set_release_image({}, "db", parse_ref("a:1"))

    def test_only_named_container_changes(self) -> None:
        values = {"bar": {"image": "repo/bar:v1"}, "foo": {"image": "repo/foo:v1"}}
        set_release_image(values, "foo", parse_ref("repo/foo:v2"))
        assert values == {"bar": {"image": "repo/bar:v1"}, "foo": {"image": "repo/foo:v2"}}

    def test_containers_idempotent(self, named_image_object_manifest) -> None:
        release = _release(named_image_object_manifest)
        assert release.containers() == release.containers()


class TestResourceModel:
    """Resource ids and the values tree."""

    def test_resource_id_defaults_namespace(self) -> None:
        release = FluxHelmRelease({"kind": "HelmRelease", "metadata": {"name": "web"}})
        assert release.resource_id == "default:helmrelease/web"
        assert release.containers() == []

    def test_scalar_keys_interpreted_in_place(self) -> None:
        """Non-string keys are named by their string form but never rewritten."""
        values = {7: {"image": "repo/one:v1"}, True: "flag",
                  "ports": {80: "http", "80": "other"}}
        doc = {"kind": "FluxHelmRelease", "metadata": {"name": "x"},
               "spec": {"values": values}}
        release = FluxHelmRelease(doc)
        assert release.values is values
        assert release.containers() == [Container("7", parse_ref("repo/one:v1"))]
        release.set_container_image("7", parse_ref("repo/one:v2"))
        assert doc["spec"]["values"] == {7: {"image": "repo/one:v2"}, True: "flag",
                                         "ports": {80: "http", "80": "other"}}
        assert "7" not in doc["spec"]["values"]

    def test_repr(self) -> None:
        release = FluxHelmRelease({"kind": "FluxHelmRelease",
                                   "metadata": {"name": "m", "namespace": "n"}})
        assert repr(release) == "FluxHelmRelease('n:fluxhelmrelease/m')"

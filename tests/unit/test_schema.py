"""Unit tests for core schema definitions.

Tests cover:
- UpdateSpec construction and immutability
- Resource accessors over a manifest
- ResourceRef identity and display
"""

import pytest

from kubelabel.core.errors import ConflictingSpecError
from kubelabel.core.schema import Resource, ResourceRef, UpdateSpec

# ============================================================================
# Tests for UpdateSpec
# ============================================================================


class TestUpdateSpec:
    """Tests for UpdateSpec."""

    def test_defaults_are_empty(self):
        spec = UpdateSpec()

        assert spec.is_empty()
        assert spec.additions == {}
        assert spec.removals == frozenset()

    def test_not_empty_with_only_removals(self):
        assert not UpdateSpec(removals={"a"}).is_empty()

    def test_overlap_rejected(self):
        """Test that the add/remove invariant is enforced on construction."""
        with pytest.raises(ConflictingSpecError):
            UpdateSpec(additions={"a": "b"}, removals={"a"})

    def test_additions_are_read_only(self):
        spec = UpdateSpec(additions={"a": "b"})

        with pytest.raises(TypeError):
            spec.additions["c"] = "d"  # type: ignore

    def test_input_dict_is_copied(self):
        """Test that mutating the caller's dict does not change the spec."""
        additions = {"a": "b"}
        spec = UpdateSpec(additions=additions)

        additions["c"] = "d"

        assert spec.additions == {"a": "b"}

    def test_frozen(self):
        spec = UpdateSpec()

        with pytest.raises(AttributeError):
            spec.removals = frozenset({"x"})  # type: ignore

    def test_to_serializable(self):
        spec = UpdateSpec(additions={"a": "b"}, removals={"z", "y"})

        assert spec.to_serializable() == {"additions": {"a": "b"}, "removals": ["y", "z"]}


# ============================================================================
# Tests for Resource
# ============================================================================


class TestResource:
    """Tests for Resource accessors."""

    def test_fields(self):
        pod = Resource({
            "apiVersion": "v1",
            "kind": "Pod",
            "metadata": {
                "name": "foo",
                "namespace": "test",
                "labels": {"a": "b"},
                "resourceVersion": "10",
            },
        })

        assert pod.kind == "Pod"
        assert pod.api_version == "v1"
        assert pod.name == "foo"
        assert pod.namespace == "test"
        assert pod.labels == {"a": "b"}
        assert pod.resource_version == "10"
        assert pod.ref == ResourceRef("Pod", "foo", "test")

    def test_absent_labels_read_as_empty(self):
        pod = Resource({"kind": "Pod", "metadata": {"name": "foo"}})

        assert pod.labels == {}
        assert not pod.has_labels
        assert pod.resource_version is None
        assert pod.namespace is None

    def test_null_metadata(self):
        pod = Resource({"kind": "Pod", "metadata": None})

        assert pod.name == ""
        assert pod.labels == {}

    def test_unquoted_label_values_read_as_text(self):
        pod = Resource({"kind": "Pod", "metadata": {"labels": {"tier": 1, "canary": True, "ratio": 0.5}}})

        assert pod.labels == {"tier": "1", "canary": "true", "ratio": "0.5"}

    def test_numeric_resource_version_is_string(self):
        pod = Resource({"kind": "Pod", "metadata": {"name": "foo", "resourceVersion": 5}})

        assert pod.resource_version == "5"

    def test_labels_is_a_copy(self):
        manifest = {"kind": "Pod", "metadata": {"name": "foo", "labels": {"a": "b"}}}
        pod = Resource(manifest)

        pod.labels["x"] = "y"

        assert manifest["metadata"]["labels"] == {"a": "b"}

    def test_copy_manifest_is_deep(self):
        manifest = {"kind": "Pod", "metadata": {"name": "foo", "labels": {"a": "b"}}}
        pod = Resource(manifest)

        copied = pod.copy_manifest()
        copied["metadata"]["labels"]["a"] = "changed"

        assert pod.labels == {"a": "b"}

    def test_to_serializable(self):
        pod = Resource({"kind": "Pod", "metadata": {"name": "foo"}, "spec": {"ports": (80, 443)}})

        assert pod.to_serializable() == {"kind": "Pod", "metadata": {"name": "foo"}, "spec": {"ports": [80, 443]}}


class TestResourceRef:
    """Tests for ResourceRef."""

    def test_str_with_namespace(self):
        assert str(ResourceRef("pods", "foo", "test")) == "pods/foo (namespace test)"

    def test_str_cluster_scoped(self):
        assert str(ResourceRef("nodes", "node-1")) == "nodes/node-1"

    def test_hashable(self):
        refs = {ResourceRef("pods", "foo", "test"), ResourceRef("pods", "foo", "test")}

        assert len(refs) == 1

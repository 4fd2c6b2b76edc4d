"""Tests for ManifestAccessor."""

import tempfile
from pathlib import Path

import pytest

from kubelabel.core.errors import AccessorError, ResourceNotFoundError, VersionConflictError
from kubelabel.core.mutation import apply_labels
from kubelabel.core.schema.labels import UpdateSpec
from kubelabel.k8s.manifests import ManifestAccessor

SAMPLE_DEPLOYMENT = """# payments deployment
apiVersion: apps/v1
kind: Deployment
metadata:
  name: payments-api
  namespace: payments
  labels:
    app: payments-api  # owned by team payments
  resourceVersion: "3"
spec:
  replicas: 2
  selector:
    matchLabels:
      app: payments-api
"""

SAMPLE_PODS = """apiVersion: v1
kind: Pod
metadata:
  name: foo
---
apiVersion: v1
kind: Pod
metadata:
  name: bar
  labels:
    tier: web
"""


@pytest.fixture
def manifest_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "deployment.yaml").write_text(SAMPLE_DEPLOYMENT)
        (Path(tmpdir) / "pods.yaml").write_text(SAMPLE_PODS)
        yield Path(tmpdir)


class TestFetch:
    """Tests for fetching manifests."""

    def test_fetch_by_plural(self, manifest_dir):
        accessor = ManifestAccessor(str(manifest_dir))

        deployment = accessor.fetch("deployments", "payments", "payments-api")

        assert deployment.kind == "Deployment"
        assert deployment.labels == {"app": "payments-api"}
        assert deployment.resource_version == "3"

    def test_fetch_by_short_name_and_kind(self, manifest_dir):
        accessor = ManifestAccessor(str(manifest_dir))

        assert accessor.fetch("deploy", "payments", "payments-api").name == "payments-api"
        assert accessor.fetch("Deployment", "payments", "payments-api").name == "payments-api"

    def test_fetch_second_document(self, manifest_dir):
        accessor = ManifestAccessor(str(manifest_dir))

        pod = accessor.fetch("po", "default", "bar")

        assert pod.labels == {"tier": "web"}

    def test_wrong_namespace_not_found(self, manifest_dir):
        accessor = ManifestAccessor(str(manifest_dir))

        with pytest.raises(ResourceNotFoundError):
            accessor.fetch("deployments", "other", "payments-api")

    def test_missing_name_not_found(self, manifest_dir):
        accessor = ManifestAccessor(str(manifest_dir))

        with pytest.raises(ResourceNotFoundError):
            accessor.fetch("pods", "default", "nope")

    def test_missing_directory(self):
        with pytest.raises(AccessorError):
            ManifestAccessor("/nonexistent/manifests")

    def test_invalid_yaml(self, manifest_dir):
        (manifest_dir / "broken.yaml").write_text("kind: [unclosed\n")
        accessor = ManifestAccessor(str(manifest_dir))

        with pytest.raises(AccessorError, match="failed to read"):
            accessor.fetch("pods", "default", "foo")


class TestList:
    """Tests for listing manifests."""

    def test_list_pods(self, manifest_dir):
        accessor = ManifestAccessor(str(manifest_dir))

        pods = accessor.list("pods", "default")

        assert [p.name for p in pods] == ["foo", "bar"]

    def test_list_respects_namespace(self, manifest_dir):
        accessor = ManifestAccessor(str(manifest_dir))

        assert accessor.list("deployments", "other") == []
        assert len(accessor.list("deployments", "payments")) == 1


class TestPersist:
    """Tests for writing manifests back."""

    def test_persist_bumps_version_and_keeps_comments(self, manifest_dir):
        accessor = ManifestAccessor(str(manifest_dir))
        current = accessor.fetch("deployments", "payments", "payments-api")
        updated = apply_labels(current, UpdateSpec(additions={"team": "payments"}))

        saved = accessor.persist(updated, expected_version="3")

        assert saved.resource_version == "4"
        content = (manifest_dir / "deployment.yaml").read_text()
        assert "team: payments" in content
        assert "# owned by team payments" in content
        assert "# payments deployment" in content
        reloaded = accessor.fetch("deployments", "payments", "payments-api")
        assert reloaded.labels == {"app": "payments-api", "team": "payments"}
        assert reloaded.resource_version == "4"

    def test_persist_stale_version_conflicts(self, manifest_dir):
        accessor = ManifestAccessor(str(manifest_dir))
        current = accessor.fetch("deployments", "payments", "payments-api")
        updated = apply_labels(current, UpdateSpec(additions={"team": "payments"}))

        with pytest.raises(VersionConflictError) as exc_info:
            accessor.persist(updated, expected_version="2")

        assert exc_info.value.expected == "2"
        assert exc_info.value.actual == "3"
        assert "team" not in (manifest_dir / "deployment.yaml").read_text()

    def test_persist_detects_concurrent_write(self, manifest_dir):
        """Test that a write between fetch and persist is caught."""
        accessor = ManifestAccessor(str(manifest_dir))
        first = accessor.fetch("deployments", "payments", "payments-api")
        second = accessor.fetch("deployments", "payments", "payments-api")

        accessor.persist(apply_labels(first, UpdateSpec(additions={"a": "1"})), expected_version="3")

        with pytest.raises(VersionConflictError):
            accessor.persist(apply_labels(second, UpdateSpec(additions={"b": "2"})), expected_version="3")

    def test_persist_without_version_check(self, manifest_dir):
        accessor = ManifestAccessor(str(manifest_dir))
        pod = accessor.fetch("pods", "default", "foo")

        saved = accessor.persist(apply_labels(pod, UpdateSpec(additions={"a": "b"})))

        assert saved.resource_version == "1"
        content = (manifest_dir / "pods.yaml").read_text()
        assert "name: bar" in content
        assert accessor.fetch("pods", "default", "foo").labels == {"a": "b"}
        assert accessor.fetch("pods", "default", "bar").labels == {"tier": "web"}

    def test_persist_missing_resource(self, manifest_dir):
        accessor = ManifestAccessor(str(manifest_dir))
        pod = accessor.fetch("pods", "default", "foo")
        (manifest_dir / "pods.yaml").unlink()

        with pytest.raises(ResourceNotFoundError):
            accessor.persist(pod)

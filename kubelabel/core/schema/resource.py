"""Target resource model wrapping a Kubernetes object manifest."""

import copy
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from kubelabel.core.schema.labels import LabelMap


@dataclass(frozen=True)
class ResourceRef:
    """Identity of a resource: type name, object name and namespace.

    Attributes:
        kind: Resource type as given by the user or the manifest
              (e.g., "pods", "Deployment", "svc")
        name: Object name
        namespace: Namespace, or None for cluster-scoped objects
    """

    kind: str
    name: str
    namespace: Optional[str] = None

    def __str__(self) -> str:
        if self.namespace:
            return f"{self.kind}/{self.name} (namespace {self.namespace})"
        return f"{self.kind}/{self.name}"


@dataclass(frozen=True)
class Resource:
    """Cluster-managed object exposing a label map and a version token.

    Wraps the decoded manifest (``apiVersion``, ``kind``, ``metadata``, ...).
    Accessors return Resource values and the mutation engine produces new
    ones; callers treat the wrapped manifest as read-only.

    Attributes:
        manifest: Decoded object as a mapping

    Example:
        >>> pod = Resource({"kind": "Pod", "metadata": {"name": "foo", "labels": {"a": "b"}}})
        >>> pod.labels
        {'a': 'b'}
    """

    manifest: Mapping[str, Any]

    @property
    def metadata(self) -> Mapping[str, Any]:
        return self.manifest.get("metadata") or {}

    @property
    def kind(self) -> str:
        return self.manifest.get("kind", "")

    @property
    def api_version(self) -> str:
        return self.manifest.get("apiVersion", "")

    @property
    def name(self) -> str:
        return self.metadata.get("name", "")

    @property
    def namespace(self) -> Optional[str]:
        return self.metadata.get("namespace")

    @property
    def labels(self) -> LabelMap:
        """Copy of the label map as strings; an absent map reads as empty.

        Unquoted YAML scalars (``tier: 1``, ``canary: true``) decode as
        numbers or booleans and are rendered back to their label text.
        """
        labels = self.metadata.get("labels") or {}
        return {str(k): _label_text(v) for k, v in labels.items()}

    @property
    def has_labels(self) -> bool:
        """Whether ``metadata.labels`` is materialized (possibly empty)."""
        return self.metadata.get("labels") is not None

    @property
    def resource_version(self) -> Optional[str]:
        version = self.metadata.get("resourceVersion")
        return str(version) if version is not None else None

    @property
    def ref(self) -> ResourceRef:
        return ResourceRef(kind=self.kind, name=self.name, namespace=self.namespace)

    def copy_manifest(self) -> Dict[str, Any]:
        """Deep copy of the manifest, safe to mutate."""
        return copy.deepcopy(self.manifest)

    def to_serializable(self) -> Dict[str, Any]:
        """Convert resource to plain dicts/lists for JSON output or logging."""
        return _to_plain(self.manifest)


def _label_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _to_plain(value: Any) -> Any:
    # ruamel round-trip types (CommentedMap/Seq) subclass dict/list
    if isinstance(value, Mapping):
        return {str(k): _to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value

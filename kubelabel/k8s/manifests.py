"""Manifest directory accessor.

This module provides the ManifestAccessor class that treats a directory of
Kubernetes YAML manifests as a resource store. Manifests are edited with
ruamel.yaml in round-trip mode, so comments and key order survive a label
update. ``persist`` emulates the API server's optimistic concurrency: the
stored ``metadata.resourceVersion`` must match the expected version, and a
successful write bumps it.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Tuple

from ruamel.yaml import YAMLError

from kubelabel.core.errors import AccessorError, ResourceNotFoundError, VersionConflictError
from kubelabel.core.schema.resource import Resource, ResourceRef
from kubelabel.k8s.constants import INITIAL_RESOURCE_VERSION
from kubelabel.k8s.utils import create_yaml_instance, dump_documents, kind_matches

logger = logging.getLogger(__name__)


@dataclass
class _Location:
    path: Path
    documents: List[Any]
    index: int

    @property
    def document(self) -> Any:
        return self.documents[self.index]


class ManifestAccessor:
    """Resource accessor backed by YAML files in a directory.

    Every call re-reads the files, so edits made between a fetch and a
    persist are detected through ``metadata.resourceVersion``.

    Attributes:
        dir_path: Directory holding the manifests
        pattern: Glob pattern selecting manifest files (default: ``*.yaml``)

    Example:
        >>> accessor = ManifestAccessor("manifests/")
        >>> pod = accessor.fetch("pods", "default", "foo")
        >>> accessor.persist(pod, expected_version=pod.resource_version)
    """

    def __init__(self, dir_path: str, pattern: str = "*.yaml"):
        self.dir_path = Path(dir_path)
        self.pattern = pattern
        if not self.dir_path.is_dir():
            raise AccessorError(f"manifest directory not found: {self.dir_path}")

    def fetch(self, kind: str, namespace: Optional[str], name: str) -> Resource:
        """Return the manifest for ``kind/name`` in ``namespace``.

        Raises:
            ResourceNotFoundError: If no manifest matches
            AccessorError: If a manifest file cannot be read or parsed
        """
        ref = ResourceRef(kind=kind, name=name, namespace=namespace)
        location = self._locate(ref)
        logger.debug(f"Read {ref} from {location.path}")
        return Resource(location.document)

    def list(self, kind: str, namespace: Optional[str]) -> List[Resource]:
        """Return every manifest of ``kind`` in ``namespace``, sorted by file then position."""
        found = []
        for path, documents in self._load_all():
            for doc in documents:
                if _matches(doc, kind, namespace):
                    found.append(Resource(doc))
        logger.debug(f"Listed {len(found)} {kind} in {namespace or 'all namespaces'}")
        return found

    def persist(self, resource: Resource, expected_version: Optional[str] = None) -> Resource:
        """Write an updated manifest back to the file it came from.

        Args:
            resource: Updated resource
            expected_version: Stored version the caller expects; None skips the check

        Returns:
            Resource as written, with its version bumped

        Raises:
            ResourceNotFoundError: If the manifest disappeared
            VersionConflictError: If the stored version differs from ``expected_version``
            AccessorError: If the file cannot be written
        """
        ref = resource.ref
        location = self._locate(ref)
        stored_version = Resource(location.document).resource_version

        if expected_version is not None and stored_version != expected_version:
            raise VersionConflictError(
                f"the object has been modified; stored version is {stored_version},"
                f" expected {expected_version}",
                ref=ref,
                expected=expected_version,
                actual=stored_version,
            )

        manifest = resource.copy_manifest()
        manifest.setdefault("metadata", {})["resourceVersion"] = _next_version(stored_version)
        location.documents[location.index] = manifest

        try:
            location.path.write_text(dump_documents(location.documents), encoding="utf-8")
        except OSError as e:
            raise AccessorError(f"failed to write {location.path}: {e}", ref=ref) from e

        logger.debug(f"Wrote {ref} to {location.path} at version {manifest['metadata']['resourceVersion']}")
        return Resource(manifest)

    def _locate(self, ref: ResourceRef) -> _Location:
        for path, documents in self._load_all():
            for index, doc in enumerate(documents):
                if _matches(doc, ref.kind, ref.namespace) and _name_of(doc) == ref.name:
                    return _Location(path=path, documents=documents, index=index)
        raise ResourceNotFoundError(f"{ref} not found", ref=ref)

    def _load_all(self) -> List[Tuple[Path, List[Any]]]:
        yaml = create_yaml_instance()
        loaded = []
        for path in sorted(self.dir_path.glob(self.pattern)):
            if not path.is_file():
                continue
            try:
                content = path.read_text(encoding="utf-8")
                documents = [doc for doc in yaml.load_all(content) if doc is not None]
            except (OSError, YAMLError) as e:
                raise AccessorError(f"failed to read {path}: {e}") from e
            loaded.append((path, documents))
        return loaded


def _name_of(doc: Any) -> Optional[str]:
    metadata = doc.get("metadata") or {}
    return metadata.get("name")


def _matches(doc: Any, kind: str, namespace: Optional[str]) -> bool:
    if not isinstance(doc, dict):
        return False
    if not kind_matches(kind, doc.get("kind", "")):
        return False
    doc_namespace = (doc.get("metadata") or {}).get("namespace")
    # A manifest without a namespace applies to whatever namespace it is used in
    return namespace is None or doc_namespace is None or doc_namespace == namespace


def _next_version(stored: Optional[str]) -> str:
    if stored is not None and stored.isdigit():
        return str(int(stored) + 1)
    return INITIAL_RESOURCE_VERSION

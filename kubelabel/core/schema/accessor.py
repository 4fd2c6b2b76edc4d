"""Accessor and printer protocols consumed by the batch orchestrator."""

from typing import List, Optional, Protocol

from kubelabel.core.schema.resource import Resource


class ResourceAccessor(Protocol):
    """Read/write access to stored resources.

    An accessor owns transport, authentication, decoding and any retry
    policy. The orchestrator only calls ``fetch`` and ``persist``; ``list``
    is used by the command line to expand ``--all``.

    Implementations raise the kubelabel error taxonomy:
    ResourceNotFoundError from ``fetch``, VersionConflictError from
    ``persist`` when ``expected_version`` no longer matches, and
    AccessorError for anything else.

    Example:
        class DictAccessor:
            def fetch(self, kind, namespace, name):
                return self.store[(kind, namespace, name)]
            ...
    """

    def fetch(self, kind: str, namespace: Optional[str], name: str) -> Resource:
        """Return the current state of the named resource."""
        ...

    def persist(self, resource: Resource, expected_version: Optional[str] = None) -> Resource:
        """Store an updated resource and return what the store now holds.

        Args:
            resource: Updated resource
            expected_version: Version the caller believes is stored; None
                              skips the optimistic-concurrency check
        """
        ...

    def list(self, kind: str, namespace: Optional[str]) -> List[Resource]:
        """Return every resource of ``kind`` in ``namespace``."""
        ...


class ObjectPrinter(Protocol):
    """Emits a resource after it has been labeled. Return value is ignored."""

    def __call__(self, resource: Resource) -> None:
        ...

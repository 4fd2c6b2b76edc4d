"""Live cluster accessor.

This module implements the resource accessor protocol on top of the
kubernetes client's DynamicClient, so any resource type the API server
advertises (including custom resources) can be labeled. Type names are
resolved through API discovery by plural, singular, kind or short name.
"""

import logging
from typing import Any, Dict, List, Optional

from kubernetes import client, config, dynamic
from kubernetes.client.exceptions import ApiException
from kubernetes.dynamic.exceptions import ConflictError, DynamicApiError, NotFoundError
from kubernetes.dynamic.resource import ResourceList

from kubelabel.core.errors import AccessorError, ResourceNotFoundError, VersionConflictError
from kubelabel.core.schema.resource import Resource, ResourceRef
from kubelabel.k8s.utils import type_names_for_kind

logger = logging.getLogger(__name__)


def load_dynamic_client(*, kubeconfig: Optional[str] = None, context: Optional[str] = None) -> Any:
    """Create a DynamicClient using kubeconfig/context.

    This is the single place where we load kubeconfig so the accessor stays
    free of global client state.
    """
    config.load_kube_config(config_file=kubeconfig, context=context)
    return dynamic.DynamicClient(client.ApiClient())


class ClusterAccessor:
    """Resource accessor talking to a Kubernetes API server.

    Attributes:
        dynamic_client: kubernetes.dynamic.DynamicClient (or a compatible double)

    Example:
        >>> accessor = ClusterAccessor.from_kubeconfig(context="staging")
        >>> pod = accessor.fetch("pods", "default", "foo")
    """

    def __init__(self, dynamic_client: Any):
        self.dynamic_client = dynamic_client
        self._apis: Dict[str, Any] = {}

    @classmethod
    def from_kubeconfig(
        cls, kubeconfig: Optional[str] = None, context: Optional[str] = None
    ) -> "ClusterAccessor":
        """Build an accessor from a kubeconfig file and optional context."""
        try:
            return cls(load_dynamic_client(kubeconfig=kubeconfig, context=context))
        except (config.ConfigException, ApiException, OSError) as e:
            raise AccessorError(f"failed to load cluster configuration: {e}") from e

    def fetch(self, kind: str, namespace: Optional[str], name: str) -> Resource:
        ref = ResourceRef(kind=kind, name=name, namespace=namespace)
        api = self._resolve(kind)
        try:
            obj = api.get(name=name, namespace=self._namespace_for(api, namespace))
        except NotFoundError as e:
            raise ResourceNotFoundError(f"{ref} not found", ref=ref) from e
        except ApiException as e:
            raise AccessorError(f"failed to get {ref}: {_reason(e)}", ref=ref) from e
        logger.debug(f"GET {ref}")
        return Resource(obj.to_dict())

    def list(self, kind: str, namespace: Optional[str]) -> List[Resource]:
        api = self._resolve(kind)
        try:
            result = api.get(namespace=self._namespace_for(api, namespace))
        except ApiException as e:
            raise AccessorError(f"failed to list {kind}: {_reason(e)}") from e

        resources = []
        for item in result.to_dict().get("items", []):
            # List items come back without type information
            item.setdefault("kind", api.kind)
            item.setdefault("apiVersion", api.group_version)
            resources.append(Resource(item))
        logger.debug(f"LIST {kind} returned {len(resources)} item(s)")
        return resources

    def persist(self, resource: Resource, expected_version: Optional[str] = None) -> Resource:
        """Replace the object on the server.

        The body carries ``expected_version`` as ``metadata.resourceVersion``
        so the server rejects the write if the object changed since it was
        read. With no expected version the field is dropped and the write is
        unconditional.
        """
        ref = resource.ref
        api = self._resolve(resource.kind)
        body = resource.to_serializable()
        metadata = body.setdefault("metadata", {})
        if expected_version:
            metadata["resourceVersion"] = expected_version
        else:
            metadata.pop("resourceVersion", None)

        try:
            obj = api.replace(body=body, namespace=self._namespace_for(api, resource.namespace))
        except ConflictError as e:
            raise VersionConflictError(
                f"{ref} has been modified: {_reason(e)}", ref=ref, expected=expected_version
            ) from e
        except NotFoundError as e:
            raise ResourceNotFoundError(f"{ref} not found", ref=ref) from e
        except ApiException as e:
            raise AccessorError(f"failed to update {ref}: {_reason(e)}", ref=ref) from e
        logger.debug(f"PUT {ref}")
        return Resource(obj.to_dict())

    def _resolve(self, type_name: str) -> Any:
        key = type_name.lower()
        if key in self._apis:
            return self._apis[key]

        try:
            candidates = self.dynamic_client.resources.search()
        except ApiException as e:
            raise AccessorError(f"API discovery failed: {_reason(e)}") from e

        matches = [api for api in candidates if _is_labelable(api) and key in _names_of(api)]
        if not matches:
            raise AccessorError(f"the server doesn't have a resource type {type_name!r}")
        # Preferred group versions first, then core group
        matches.sort(key=lambda api: (not getattr(api, "preferred", False), bool(api.group)))
        self._apis[key] = matches[0]
        return matches[0]

    @staticmethod
    def _namespace_for(api: Any, namespace: Optional[str]) -> Optional[str]:
        return namespace if api.namespaced else None


def _is_labelable(api: Any) -> bool:
    # Discovery also returns the synthetic *List resources and subresources
    if isinstance(api, ResourceList):
        return False
    return bool(api.name) and "/" not in api.name


def _names_of(api: Any) -> set:
    names = type_names_for_kind(api.kind)
    names.add(api.name.lower())
    if getattr(api, "singular_name", None):
        names.add(api.singular_name.lower())
    names.update(n.lower() for n in (getattr(api, "short_names", None) or []))
    return names


def _reason(error: ApiException) -> str:
    if isinstance(error, DynamicApiError):
        return error.summary()
    return f"{error.status} {error.reason}"

"""Shared YAML and type-name helpers for the K8s adapters.

This module provides the ruamel.yaml setup and resource type-name matching
used by both the manifest accessor and the printers.
"""

from io import StringIO
from typing import Any, Iterable

from ruamel.yaml import YAML

from kubelabel.k8s.constants import SHORT_NAMES


def create_yaml_instance() -> YAML:
    """Create configured ruamel.yaml instance for manifest editing.

    Returns:
        YAML instance configured to:
        - Preserve quotes and formatting
        - Not wrap long strings (prevents image field splitting)
        - Use block style (not flow style)
    """
    yaml = YAML()
    yaml.preserve_quotes = True
    yaml.width = 4096  # Very wide to prevent wrapping long strings like ECR paths
    yaml.default_flow_style = False
    yaml.allow_unicode = True
    return yaml


def dump_documents(documents: Iterable[Any]) -> str:
    """Serialize one or more YAML documents to a string."""
    yaml = create_yaml_instance()
    stream = StringIO()
    yaml.dump_all(list(documents), stream)
    return stream.getvalue()


def type_names_for_kind(kind: str) -> set:
    """All names a user may type for ``kind``, lowercased.

    Includes the kind itself, its plural, and any well-known short names
    (e.g., "Deployment" -> {"deployment", "deployments", "deploy"}).
    """
    lower = kind.lower()
    names = {lower, _pluralize(lower)}
    names.update(SHORT_NAMES.get(lower, ()))
    return names


def kind_matches(type_name: str, kind: str) -> bool:
    """Whether a user-supplied type name refers to ``kind``.

    Example:
        >>> kind_matches("pods", "Pod")
        True
        >>> kind_matches("svc", "Service")
        True
    """
    if not kind:
        return False
    return type_name.lower() in type_names_for_kind(kind)


def _pluralize(lower_kind: str) -> str:
    if lower_kind.endswith("s"):
        return lower_kind + "es"
    if lower_kind.endswith("y") and not lower_kind.endswith(("ay", "ey", "oy", "uy")):
        return lower_kind[:-1] + "ies"
    return lower_kind + "s"

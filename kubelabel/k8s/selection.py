"""Resource argument parsing for the label command.

Positional arguments come in one of these shapes::

    TYPE/NAME [TYPE/NAME ...] key=value ...
    TYPE NAME [NAME ...] key=value ...
    TYPE --all key=value ...

Update tokens (``key=value`` / ``key-``) are split off first; whatever is
left selects resources.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from kubelabel.core.errors import UsageError
from kubelabel.core.parser import is_label_token
from kubelabel.core.schema.accessor import ResourceAccessor
from kubelabel.core.schema.resource import ResourceRef

logger = logging.getLogger(__name__)

NO_RESOURCES_MESSAGE = "one or more resources must be specified as <resource> <name> or <resource>/<name>"


def split_args(args: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Split positionals into (resource arguments, label update tokens).

    Example:
        >>> split_args(["pods", "foo", "a=b", "c-"])
        (['pods', 'foo'], ['a=b', 'c-'])
    """
    resource_args = [a for a in args if not is_label_token(a)]
    label_tokens = [a for a in args if is_label_token(a)]
    return resource_args, label_tokens


def resolve_refs(
    resource_args: Sequence[str],
    namespace: Optional[str],
    select_all: bool = False,
    accessor: Optional[ResourceAccessor] = None,
) -> List[ResourceRef]:
    """Turn resource arguments into ResourceRefs.

    Args:
        resource_args: Non-update positionals, in order
        namespace: Namespace applied to every ref
        select_all: Expand ``TYPE`` to every resource of that type (``--all``)
        accessor: Used to list resources when ``select_all`` is set

    Returns:
        Refs in argument order, without duplicates

    Raises:
        UsageError: If the arguments do not select any resource or mix shapes
    """
    if not resource_args:
        raise UsageError(NO_RESOURCES_MESSAGE)

    if select_all:
        return _resolve_all(resource_args, namespace, accessor)

    refs: List[ResourceRef] = []
    if all("/" in arg for arg in resource_args):
        for arg in resource_args:
            kind, _, name = arg.partition("/")
            if not kind or not name:
                raise UsageError(f"arguments in resource/name form must have a single resource and name: {arg!r}")
            refs.append(ResourceRef(kind=kind, name=name, namespace=namespace))
    elif any("/" in arg for arg in resource_args):
        raise UsageError("there is no need to specify a resource type as a separate argument when passing arguments in resource/name form")
    else:
        kind, names = resource_args[0], resource_args[1:]
        if not names:
            raise UsageError(NO_RESOURCES_MESSAGE)
        refs = [ResourceRef(kind=kind, name=name, namespace=namespace) for name in names]

    return _dedupe(refs)


def _resolve_all(
    resource_args: Sequence[str], namespace: Optional[str], accessor: Optional[ResourceAccessor]
) -> List[ResourceRef]:
    if len(resource_args) != 1 or "/" in resource_args[0]:
        raise UsageError("--all takes a single resource type and no names")
    if accessor is None:
        raise UsageError("--all requires a resource accessor to list resources")

    kind = resource_args[0]
    refs = [
        ResourceRef(kind=kind, name=resource.name, namespace=resource.namespace or namespace)
        for resource in accessor.list(kind, namespace)
    ]
    logger.info(f"--all selected {len(refs)} {kind}")
    if not refs:
        raise UsageError(f"no {kind} found in namespace {namespace}")
    return _dedupe(refs)


def _dedupe(refs: List[ResourceRef]) -> List[ResourceRef]:
    seen = set()
    unique = []
    for ref in refs:
        if ref not in seen:
            seen.add(ref)
            unique.append(ref)
    return unique

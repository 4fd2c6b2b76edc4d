"""Mutation engine: applies an UpdateSpec to a single resource.

The transformation is pure: the fetched resource is deep-copied, the copy is
edited, and a new Resource is returned. Nothing is written anywhere; the
batch orchestrator owns fetching and persisting.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from kubelabel.core.schema.labels import UpdateSpec
from kubelabel.core.schema.resource import Resource
from kubelabel.core.validator import validate_no_overwrites

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LabelOptions:
    """Flags controlling how an UpdateSpec is applied.

    Attributes:
        overwrite: Allow additions to replace existing, different values
        resource_version: If non-empty, stamped onto each updated resource as
                          ``metadata.resourceVersion`` and used as the expected
                          version when persisting
        dry_run: Compute and print updates without persisting them
    """

    overwrite: bool = False
    resource_version: Optional[str] = None
    dry_run: bool = False


def apply_labels(
    resource: Resource, spec: UpdateSpec, options: Optional[LabelOptions] = None
) -> Resource:
    """Apply label additions and removals to a resource.

    Steps:
    1. Unless ``options.overwrite``, check additions against current labels
    2. Materialize ``metadata.labels`` if absent
    3. Drop every key in ``spec.removals`` (missing keys are ignored)
    4. Set every key in ``spec.additions``
    5. Stamp ``options.resource_version`` if given

    Args:
        resource: Resource as fetched from the accessor
        spec: Parsed update
        options: Overwrite/version flags (defaults to LabelOptions())

    Returns:
        New Resource with the update applied (input unchanged)

    Raises:
        OverwriteConflictError: If a shared key differs and overwrite is off

    Example:
        >>> pod = Resource({"kind": "Pod", "metadata": {"name": "foo", "labels": {"a": "b"}}})
        >>> apply_labels(pod, UpdateSpec(additions={"c": "d"})).labels
        {'a': 'b', 'c': 'd'}
    """
    if options is None:
        options = LabelOptions()

    if not options.overwrite:
        validate_no_overwrites(resource.labels, spec.additions)

    manifest = resource.copy_manifest()
    if manifest.get("metadata") is None:
        manifest["metadata"] = {}
    metadata = manifest["metadata"]
    if metadata.get("labels") is None:
        metadata["labels"] = {}
    labels = metadata["labels"]

    for key in spec.removals:
        labels.pop(key, None)

    for key, value in spec.additions.items():
        labels[key] = value

    if options.resource_version:
        metadata["resourceVersion"] = options.resource_version

    logger.debug(f"Computed labels for {resource.ref}: {dict(labels)}")
    return Resource(manifest)

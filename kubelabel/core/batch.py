"""Batch orchestrator for labeling several resources.

This module provides the main entry point for a label run:
- label_resources: fetch, mutate, persist and print each selected resource,
  collecting per-resource failures instead of stopping at the first one
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from kubelabel.core.errors import BatchError, UsageError
from kubelabel.core.mutation import LabelOptions, apply_labels
from kubelabel.core.schema.accessor import ObjectPrinter, ResourceAccessor
from kubelabel.core.schema.labels import UpdateSpec
from kubelabel.core.schema.resource import Resource, ResourceRef

logger = logging.getLogger(__name__)


@dataclass
class LabelResult:
    """Outcome for one resource in a batch.

    Attributes:
        ref: Resource identity as selected by the caller
        resource: Resource after the update (persisted, or computed on dry run)
        error: Exception that stopped this resource, if any
    """

    ref: ResourceRef
    resource: Optional[Resource] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    """Outcome of a batch where at least one resource succeeded.

    Attributes:
        results: One LabelResult per selected resource, in input order
    """

    results: List[LabelResult] = field(default_factory=list)

    @property
    def succeeded(self) -> List[LabelResult]:
        return [r for r in self.results if r.ok]

    @property
    def failures(self) -> List[LabelResult]:
        return [r for r in self.results if not r.ok]

    @property
    def partial(self) -> bool:
        """True if some, but not all, resources failed."""
        return bool(self.failures)


def label_resources(
    refs: Sequence[ResourceRef],
    spec: UpdateSpec,
    accessor: ResourceAccessor,
    printer: ObjectPrinter,
    options: Optional[LabelOptions] = None,
) -> BatchResult:
    """Apply an UpdateSpec to every selected resource.

    Usage errors are checked before the loop, so nothing is fetched, persisted
    or printed when they fire. Inside the loop each resource is handled
    independently: fetch, apply_labels, persist (skipped on dry run), print.
    Any exception for one resource is recorded and the loop moves on. A
    printer failure is recorded too; its result keeps the persisted resource.

    Args:
        refs: Selected resources
        spec: Parsed update, applied unchanged to each resource
        accessor: Fetches and persists resources
        printer: Called with each successfully labeled resource
        options: Overwrite/version/dry-run flags (defaults to LabelOptions())

    Returns:
        BatchResult with per-resource results in input order. ``partial`` is
        True if some resources failed.

    Raises:
        UsageError: If ``refs`` is empty or ``spec`` has no updates
        BatchError: If every resource failed

    Example:
        >>> result = label_resources(
        ...     [ResourceRef("pods", "foo", "test")],
        ...     parse_labels(["a=b"]),
        ...     accessor,
        ...     NamePrinter(),
        ... )
    """
    if options is None:
        options = LabelOptions()

    if not refs:
        raise UsageError("one or more resources must be specified as <resource> <name> or <resource>/<name>")
    if spec.is_empty():
        raise UsageError("at least one label update is required")

    logger.info(f"Labeling {len(refs)} resource(s)")

    results: List[LabelResult] = []
    for ref in refs:
        try:
            labeled = _label_one(ref, spec, accessor, options)
        except Exception as e:
            logger.warning(f"Failed to label {ref}: {e}")
            results.append(LabelResult(ref=ref, error=e))
            continue

        try:
            printer(labeled)
        except Exception as e:
            # The update already went through; only the output failed
            logger.warning(f"Labeled {ref} but failed to print it: {e}")
            results.append(LabelResult(ref=ref, resource=labeled, error=e))
            continue

        logger.info(f"Labeled {ref}")
        results.append(LabelResult(ref=ref, resource=labeled))

    if not any(r.ok for r in results):
        raise BatchError(results)

    failed = sum(1 for r in results if not r.ok)
    if failed:
        logger.warning(f"{failed} of {len(results)} resource(s) failed")
    return BatchResult(results=results)


def _label_one(
    ref: ResourceRef, spec: UpdateSpec, accessor: ResourceAccessor, options: LabelOptions
) -> Resource:
    current = accessor.fetch(ref.kind, ref.namespace, ref.name)
    logger.debug(f"Fetched {ref} at version {current.resource_version}")

    updated = apply_labels(current, spec, options)
    if options.dry_run:
        return updated

    expected_version = options.resource_version or current.resource_version
    return accessor.persist(updated, expected_version=expected_version)

"""
Core schema definitions for label maps, update specs, resources and I/O.

These protocols and dataclasses are shared by the parser, the mutation
engine, the batch orchestrator and the Kubernetes adapters.
"""

from kubelabel.core.schema.accessor import ObjectPrinter, ResourceAccessor
from kubelabel.core.schema.labels import LabelMap, UpdateSpec
from kubelabel.core.schema.resource import Resource, ResourceRef

__all__ = [
    "LabelMap",
    "ObjectPrinter",
    "Resource",
    "ResourceAccessor",
    "ResourceRef",
    "UpdateSpec",
]

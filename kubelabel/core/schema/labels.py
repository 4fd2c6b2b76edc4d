"""Label map and update spec definitions."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping

from kubelabel.core.errors import ConflictingSpecError

LabelMap = Dict[str, str]


@dataclass(frozen=True)
class UpdateSpec:
    """Parsed label update request.

    Built once per invocation from the raw ``key=value`` / ``key-`` tokens and
    applied unchanged to every selected resource.

    Attributes:
        additions: Labels to set or overwrite (read-only mapping)
        removals: Label keys to delete

    Invariant: no key appears in both ``additions`` and ``removals``.
    """

    additions: Mapping[str, str] = field(default_factory=dict)
    removals: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        """Freeze the inputs so the spec cannot change after construction."""
        object.__setattr__(self, "additions", MappingProxyType(dict(self.additions)))
        object.__setattr__(self, "removals", frozenset(self.removals))
        overlap = set(self.additions) & self.removals
        if overlap:
            raise ConflictingSpecError(sorted(overlap)[0])

    def is_empty(self) -> bool:
        """Return True if the spec neither adds nor removes anything."""
        return not self.additions and not self.removals

    def to_serializable(self) -> Dict:
        """Convert spec to a JSON-serializable dict (removals sorted)."""
        return {"additions": dict(self.additions), "removals": sorted(self.removals)}

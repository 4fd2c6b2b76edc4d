"""Conflict validator for label additions."""

from typing import Mapping, Optional

from kubelabel.core.errors import OverwriteConflictError


def validate_no_overwrites(
    current: Optional[Mapping[str, str]], additions: Mapping[str, str]
) -> None:
    """Reject additions that would replace an existing, different value.

    Only shared keys can conflict, and only when their values differ; setting
    a label to the value it already has is allowed. An absent or empty
    current map never conflicts.

    Args:
        current: Labels currently on the resource (None if absent)
        additions: Labels the update wants to set

    Raises:
        OverwriteConflictError: For the first shared key with a differing value
    """
    if not current:
        return
    for key, new_value in additions.items():
        if key in current and current[key] != new_value:
            raise OverwriteConflictError(key, current[key], new_value)

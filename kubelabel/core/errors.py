"""Label-update exceptions for error handling.

Parse and usage errors are raised before any resource is touched. Per-resource
errors (conflicts, accessor failures) are collected by the batch orchestrator
and surfaced together in a BatchError or a partial BatchResult.
"""

from typing import Any, List, Optional


class LabelError(Exception):
    """Base class for all kubelabel errors."""


class InvalidSyntaxError(LabelError):
    """Raised when a label update token is malformed.

    Attributes:
        token: The offending raw token
        reason: Why the token was rejected (optional)
    """

    def __init__(self, token: str, reason: Optional[str] = None) -> None:
        message = f"invalid label spec: {token!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.token = token
        self.reason = reason


class ConflictingSpecError(LabelError):
    """Raised when the same key is both set and removed in one invocation."""

    def __init__(self, key: str) -> None:
        super().__init__(f"can not both modify and remove a label in the same command: {key}")
        self.key = key


class OverwriteConflictError(LabelError):
    """Raised when an addition would replace an existing, different label value.

    Attributes:
        key: Label key present on both sides
        old_value: Value currently on the resource
        new_value: Value requested by the update
    """

    def __init__(self, key: str, old_value: str, new_value: str) -> None:
        super().__init__(
            f"'{key}' already has a value ({old_value}), and --overwrite is false"
            f" (requested {new_value})"
        )
        self.key = key
        self.old_value = old_value
        self.new_value = new_value


class UsageError(LabelError):
    """Raised for invocation errors detected before any resource is fetched."""


class AccessorError(LabelError):
    """Raised by resource accessors for transport or storage failures.

    Attributes:
        ref: Identity of the resource involved (optional)
    """

    def __init__(self, message: str, ref: Optional[Any] = None) -> None:
        super().__init__(message)
        self.ref = ref


class ResourceNotFoundError(AccessorError):
    """Raised when the named resource does not exist."""


class VersionConflictError(AccessorError):
    """Raised when a persist is rejected because the stored version moved on.

    Attributes:
        expected: Version the caller expected to overwrite
        actual: Version currently stored (if known)
    """

    def __init__(
        self,
        message: str,
        ref: Optional[Any] = None,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
    ) -> None:
        super().__init__(message, ref=ref)
        self.expected = expected
        self.actual = actual


class BatchError(LabelError):
    """Raised when every resource in a batch failed.

    Attributes:
        results: Per-resource LabelResult list, in input order
    """

    def __init__(self, results: List[Any]) -> None:
        failures = [r for r in results if r.error is not None]
        lines = [f"{r.ref}: {r.error}" for r in failures]
        super().__init__(f"failed to label {len(failures)} resource(s):\n" + "\n".join(lines))
        self.results = results

    @property
    def errors(self) -> List[Exception]:
        return [r.error for r in self.results if r.error is not None]

"""Expression parser for label update tokens.

Turns the raw update arguments of a label command into an UpdateSpec:

- ``key=value`` sets ``key`` (the value may be empty)
- ``key-`` removes ``key``

Keys and values are checked against the Kubernetes label syntax:

- key: ``[prefix/]name`` where prefix is a DNS subdomain (at most 253 chars)
  and name is at most 63 alphanumerics, ``-``, ``_`` or ``.``, starting and
  ending with an alphanumeric
- value: empty, or the same rule as a key name
"""

import logging
import re
from typing import Dict, Iterable, Optional, Set

from kubelabel.core.errors import ConflictingSpecError, InvalidSyntaxError
from kubelabel.core.schema.labels import UpdateSpec

logger = logging.getLogger(__name__)

REMOVE_SUFFIX = "-"

QUALIFIED_NAME_MAX_LENGTH = 63
DNS_SUBDOMAIN_MAX_LENGTH = 253

_QUALIFIED_NAME_RE = re.compile(r"^([A-Za-z0-9][-A-Za-z0-9_.]*)?[A-Za-z0-9]$")
_DNS_SUBDOMAIN_RE = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$")


def is_label_token(arg: str) -> bool:
    """Return True if a positional argument looks like a label update.

    Used to split ``TYPE[/NAME] ... key=value key-`` argument lists. Anything
    with an ``=`` or a trailing ``-`` is an update token.
    """
    return "=" in arg or arg.endswith(REMOVE_SUFFIX)


def parse_labels(tokens: Iterable[str]) -> UpdateSpec:
    """Parse label update tokens into an UpdateSpec.

    Later ``key=value`` tokens for the same key replace earlier ones. An empty
    token list yields an empty spec; rejecting "no updates" is up to the
    caller.

    Args:
        tokens: Raw update tokens in command-line order

    Returns:
        UpdateSpec with additions and removals

    Raises:
        InvalidSyntaxError: If a token is neither form or has an invalid key/value
        ConflictingSpecError: If a key is both set and removed

    Example:
        >>> spec = parse_labels(["a=b", "c=d", "e-"])
        >>> dict(spec.additions), sorted(spec.removals)
        ({'a': 'b', 'c': 'd'}, ['e'])
    """
    additions: Dict[str, str] = {}
    removals: Set[str] = set()

    for token in tokens:
        if "=" in token:
            parts = token.split("=")
            if len(parts) != 2:
                raise InvalidSyntaxError(token, "expected exactly one '='")
            key, value = parts
            _check_key(token, key)
            _check_value(token, value)
            additions[key] = value
        elif token.endswith(REMOVE_SUFFIX):
            key = token[: -len(REMOVE_SUFFIX)]
            _check_key(token, key)
            removals.add(key)
        else:
            raise InvalidSyntaxError(token, "expected key=value or key-")

    for key in additions:
        if key in removals:
            raise ConflictingSpecError(key)

    logger.debug(f"Parsed {len(additions)} addition(s) and {len(removals)} removal(s)")
    return UpdateSpec(additions=additions, removals=frozenset(removals))


def validate_label_key(key: str) -> Optional[str]:
    """Check a label key; return a reason string if invalid, else None."""
    if not key:
        return "label key must not be empty"
    prefix, sep, name = key.rpartition("/")
    if sep:
        if not prefix:
            return "label key prefix must not be empty"
        if len(prefix) > DNS_SUBDOMAIN_MAX_LENGTH:
            return f"label key prefix must be no more than {DNS_SUBDOMAIN_MAX_LENGTH} characters"
        if not _DNS_SUBDOMAIN_RE.match(prefix):
            return f"label key prefix {prefix!r} must be a lowercase DNS subdomain"
    return _check_qualified_name(name, "label key name")


def validate_label_value(value: str) -> Optional[str]:
    """Check a label value; return a reason string if invalid, else None."""
    if value == "":
        return None
    return _check_qualified_name(value, "label value")


def _check_qualified_name(name: str, what: str) -> Optional[str]:
    if not name:
        return f"{what} must not be empty"
    if len(name) > QUALIFIED_NAME_MAX_LENGTH:
        return f"{what} must be no more than {QUALIFIED_NAME_MAX_LENGTH} characters"
    if not _QUALIFIED_NAME_RE.match(name):
        return (
            f"{what} {name!r} must consist of alphanumerics, '-', '_' or '.',"
            " and must start and end with an alphanumeric"
        )
    return None


def _check_key(token: str, key: str) -> None:
    reason = validate_label_key(key)
    if reason:
        raise InvalidSyntaxError(token, reason)


def _check_value(token: str, value: str) -> None:
    reason = validate_label_value(value)
    if reason:
        raise InvalidSyntaxError(token, reason)

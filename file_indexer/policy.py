"""
Policy resolver for per-extension limits.

A policy is written as one limit per line, optionally followed by the
extensions it applies to:

    1048576 pdf
    3145728 doc docx odf rtf
    5242880

A line without extensions sets the wildcard default. Later lines
overwrite earlier values for the same extension (or for the default).
"""

import re
import warnings
from collections.abc import Mapping
from typing import Iterator

from file_indexer.config import Settings

WILDCARD = "*"

POLICY_KEYS: tuple[str, ...] = ("max_file_size", "max_text_length")

_LINE_BREAK = re.compile(r"\r\n|\n|\r")


class PolicyWarning(UserWarning):
    """Issued for a policy row that cannot be parsed; the row is skipped."""


def parse_policy(raw_text: str | None, key: str = "policy") -> dict[str, int]:
    """
    Parse a multi-line policy definition.

    Args:
        raw_text: Raw policy text, any newline style.
        key: Name of the policy, used in warnings.

    Returns:
        Mapping of lowercase extension (or "*") to limit.
    """
    limits: dict[str, int] = {}
    if not raw_text:
        return limits

    for row in _LINE_BREAK.split(raw_text):
        parts = row.split()
        if not parts:
            continue

        try:
            value = int(parts[0])
        except ValueError:
            warnings.warn(
                f"Possible configuration issue with {key}, "
                f"first value of a row isn't numeric: {row.strip()}",
                PolicyWarning,
                stacklevel=2,
            )
            continue

        if value < 0:
            warnings.warn(
                f"Possible configuration issue with {key}, "
                f"first value of a row is negative: {row.strip()}",
                PolicyWarning,
                stacklevel=2,
            )
            continue

        extensions = parts[1:]
        if not extensions:
            limits[WILDCARD] = value
        for extension in extensions:
            limits[extension.lstrip(".").lower()] = value

    return limits


def resolve(policy: Mapping[str, int], extension: str) -> int | None:
    """
    Look up the limit for an extension.

    Falls back to the wildcard default, then to None ("no limit").
    A returned 0 is a valid value that callers treat as disabled.
    """
    extension = extension.lower()
    if extension in policy:
        return policy[extension]
    return policy.get(WILDCARD)


class PolicyTable(Mapping[str, dict[str, int]]):
    """
    Parsed policies keyed by policy name.

    Read-only after construction; safe to share between workers.
    """

    def __init__(self, raw_policies: Mapping[str, str | None]):
        self._policies = {key: parse_policy(raw, key) for key, raw in raw_policies.items()}

    @classmethod
    def from_settings(cls, settings: Settings) -> "PolicyTable":
        """Build the table from the policy keys of the given settings."""
        return cls({key: getattr(settings, key) for key in POLICY_KEYS})

    def __getitem__(self, key: str) -> dict[str, int]:
        return self._policies[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._policies)

    def __len__(self) -> int:
        return len(self._policies)

    def resolve(self, key: str, extension: str) -> int | None:
        """Resolve a policy for an extension; unknown keys mean no limit."""
        return resolve(self._policies.get(key, {}), extension)

    def limit(self, key: str, extension: str) -> int | None:
        """Like `resolve`, but a limit of 0 is reported as None (disabled)."""
        value = self.resolve(key, extension)
        return value or None

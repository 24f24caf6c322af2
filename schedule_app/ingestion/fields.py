"""Helpers for reading loosely-typed provider payloads."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable

_INT_PATTERN = re.compile(r"[+-]?\d+")


def dig(source: Any, *path: str) -> Any:
    """Return the value at ``path`` inside nested dicts, or None on any miss."""
    current = source
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def parse_loose_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        cleaned = value.strip()
        if _INT_PATTERN.fullmatch(cleaned):
            return int(cleaned)
    return None


def is_numeric_like(value: Any) -> bool:
    return parse_loose_int(value) is not None


def parse_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true"}
    if isinstance(value, bool):
        return value
    return value == 1


@dataclass(frozen=True)
class FieldRule:
    """One candidate source for a field: ``extract`` runs when ``predicate`` holds."""

    predicate: Callable[[Any], bool]
    extract: Callable[[Any], Any]


def present(*path: str) -> FieldRule:
    return FieldRule(
        predicate=lambda source: bool(dig(source, *path)),
        extract=lambda source: dig(source, *path),
    )


def first_match(rules: Iterable[FieldRule], source: Any, default: Any = None) -> Any:
    for rule in rules:
        if rule.predicate(source):
            return rule.extract(source)
    return default


def source_id(value: Any) -> int | str | None:
    """Keep a provider id as-is when it is a plain number or string."""
    if isinstance(value, bool) or value in (None, ""):
        return None
    if isinstance(value, (int, str)):
        return value
    return parse_loose_int(value)

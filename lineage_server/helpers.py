"""Utility functions shared by the indexer and query modules."""

from collections.abc import Iterable, Mapping

from .models import Person


def normalize_id(ref) -> str | None:
    """Normalize a person/house reference to a consistent ID string."""
    if ref is None:
        return None
    s = str(ref).strip()
    return s or None


def normalize_query(query: str | None) -> str:
    """Lowercase and collapse whitespace for case-insensitive matching."""
    if not query:
        return ""
    return " ".join(query.lower().split())


def append_unique(index: dict[str, list[str]], key: str, value: str) -> None:
    """Append value under key unless it is already present."""
    values = index.setdefault(key, [])
    if value not in values:
        values.append(value)


def resolve_persons(ids: Iterable[str], person_by_id: Mapping[str, Person]) -> list[Person]:
    """Map IDs to persons, silently dropping dangling references."""
    return [person_by_id[pid] for pid in ids if pid in person_by_id]

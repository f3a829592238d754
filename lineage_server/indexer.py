"""Adjacency indexes derived from a loaded family tree snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .constants import SPOUSE
from .helpers import append_unique
from .models import FamilyTreeData, House, ParentChild, Partnership, Person, Relationship

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreeIndex:
    """Read-only lookup bundle for one snapshot.

    Sequences are tuples and the bundle is frozen; consumers must treat the
    dicts as read-only too. A new snapshot gets a new index.
    """

    persons: tuple[Person, ...] = ()
    houses: tuple[House, ...] = ()
    relationships: tuple[Relationship, ...] = ()
    person_by_id: dict[str, Person] = field(default_factory=dict)
    house_by_id: dict[str, House] = field(default_factory=dict)
    parents_by_child: dict[str, tuple[str, ...]] = field(default_factory=dict)
    children_by_parent: dict[str, tuple[str, ...]] = field(default_factory=dict)
    spouses_by_person: dict[str, tuple[str, ...]] = field(default_factory=dict)
    partners_by_person: dict[str, tuple[str, ...]] = field(default_factory=dict)
    has_parent: frozenset[str] = frozenset()
    include_secrets: bool = True

    def dangling_ids(self) -> set[str]:
        """Person IDs referenced by relationships but absent from persons."""
        referenced: set[str] = set()
        referenced.update(self.parents_by_child)
        referenced.update(self.children_by_parent)
        referenced.update(self.partners_by_person)
        return referenced - self.person_by_id.keys()


def _freeze(index: dict[str, list[str]]) -> dict[str, tuple[str, ...]]:
    return {key: tuple(values) for key, values in index.items()}


def build_index(data: FamilyTreeData, include_secrets: bool = True) -> TreeIndex:
    """Build every adjacency map for the dataset in one pass over relationships.

    Duplicate relationship records collapse to a single adjacency entry.
    Relationships naming persons that do not exist are still indexed;
    query functions filter them out through ``person_by_id``.

    Args:
        data: Loaded dataset (not modified)
        include_secrets: When False, relationships flagged secret are skipped

    Returns:
        TreeIndex over the dataset
    """
    parents: dict[str, list[str]] = {}
    children: dict[str, list[str]] = {}
    spouses: dict[str, list[str]] = {}
    partners: dict[str, list[str]] = {}
    has_parent: set[str] = set()
    kept: list[Relationship] = []

    for rel in data.relationships:
        if rel.secret and not include_secrets:
            continue
        kept.append(rel)

        if isinstance(rel, ParentChild):
            append_unique(parents, rel.child, rel.parent)
            append_unique(children, rel.parent, rel.child)
            has_parent.add(rel.child)
        elif isinstance(rel, Partnership):
            for person_id in (rel.person1, rel.person2):
                append_unique(partners, person_id, rel.other(person_id))
                if rel.type == SPOUSE:
                    append_unique(spouses, person_id, rel.other(person_id))

    index = TreeIndex(
        persons=tuple(data.persons),
        houses=tuple(data.houses),
        relationships=tuple(kept),
        person_by_id={p.id: p for p in data.persons},
        house_by_id={h.id: h for h in data.houses},
        parents_by_child=_freeze(parents),
        children_by_parent=_freeze(children),
        spouses_by_person=_freeze(spouses),
        partners_by_person=_freeze(partners),
        has_parent=frozenset(has_parent),
        include_secrets=include_secrets,
    )

    dangling = index.dangling_ids()
    if dangling:
        logger.debug(f"{len(dangling)} relationship references do not resolve to a person")

    return index

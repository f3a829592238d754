"""Relationship lookups, house membership, search and colouring."""

import jellyfish
from rapidfuzz import fuzz, process

from .constants import (
    DECEASED_COLOR,
    HOUSE_COLORS,
    MAX_SEARCH_RESULTS,
    NEUTRAL_COLOR,
    STATUS_COLORS,
    STATUS_LABELS,
)
from .helpers import normalize_query, resolve_persons
from .indexer import TreeIndex
from .models import Person, Relationship


def get_parents(index: TreeIndex, person_id: str) -> list[Person]:
    return resolve_persons(index.parents_by_child.get(person_id, ()), index.person_by_id)


def get_children(index: TreeIndex, person_id: str) -> list[Person]:
    return resolve_persons(index.children_by_parent.get(person_id, ()), index.person_by_id)


def get_spouses(index: TreeIndex, person_id: str) -> list[Person]:
    return resolve_persons(index.spouses_by_person.get(person_id, ()), index.person_by_id)


def get_partners(index: TreeIndex, person_id: str) -> list[Person]:
    """Spouses and betrothed partners, in relationship order."""
    return resolve_persons(index.partners_by_person.get(person_id, ()), index.person_by_id)


def get_siblings(index: TreeIndex, person_id: str) -> list[Person]:
    """Persons sharing at least one parent, full and half siblings alike."""
    sibling_ids: list[str] = []
    for parent_id in index.parents_by_child.get(person_id, ()):
        for child_id in index.children_by_parent.get(parent_id, ()):
            if child_id != person_id and child_id not in sibling_ids:
                sibling_ids.append(child_id)
    return resolve_persons(sibling_ids, index.person_by_id)


def get_house_members(index: TreeIndex, house_id: str) -> list[Person]:
    """All persons affiliated with a house by birth, marriage, true blood or upbringing."""
    return [p for p in index.persons if house_id in p.house_ids()]


def get_person_relationships(index: TreeIndex, person_id: str) -> list[Relationship]:
    return [rel for rel in index.relationships if rel.involves(person_id)]


def search_persons(
    index: TreeIndex, query: str, max_results: int = MAX_SEARCH_RESULTS
) -> list[Person]:
    """Case-insensitive substring search over names and aliases.

    Results keep dataset order; the first ``max_results`` matches win.
    """
    query_norm = query.lower().strip() if query else ""
    if not query_norm or max_results <= 0:
        return []

    results = []
    for person in index.persons:
        name = person.name.lower()
        alias = person.alias.lower() if person.alias else ""
        if query_norm in name or query_norm in alias:
            results.append(person)
            if len(results) >= max_results:
                break
    return results


def _phonetic_codes(text: str) -> set[str]:
    return {jellyfish.metaphone(word) for word in text.split() if word.isalpha()}


def fuzzy_search_persons(
    index: TreeIndex,
    query: str,
    threshold: int = 70,
    max_results: int = MAX_SEARCH_RESULTS,
) -> list[tuple[Person, float]]:
    """Search names and aliases tolerating typos and spelling variants.

    Uses a multi-strategy approach:
    1. Exact substring match (score 100)
    2. Fuzzy string matching (typo tolerance)
    3. Phonetic matching on individual words (pronunciation similarity)

    Returns (person, score) pairs, best first, dataset order among ties.
    """
    query_norm = normalize_query(query)
    if not query_norm or max_results <= 0:
        return []

    scores: dict[str, float] = {}

    # Strategy 1: substring
    for person in search_persons(index, query_norm, max_results=len(index.persons)):
        scores[person.id] = 100.0

    # Strategy 2: fuzzy
    names = {p.id: normalize_query(p.name) for p in index.persons}
    aliases = {p.id: normalize_query(p.alias) for p in index.persons if p.alias}
    for choices in (names, aliases):
        if not choices:
            continue
        matches = process.extract(
            query_norm,
            choices,
            scorer=fuzz.WRatio,
            limit=len(choices),
            score_cutoff=threshold,
        )
        for _text, score, person_id in matches:
            if scores.get(person_id, 0.0) < score:
                scores[person_id] = score

    # Strategy 3: phonetic
    query_codes = _phonetic_codes(query_norm)
    if query_codes:
        for person in index.persons:
            if person.id in scores:
                continue
            codes = _phonetic_codes(names[person.id]) | _phonetic_codes(aliases.get(person.id, ""))
            if query_codes & codes:
                scores[person.id] = 60.0  # Base score for phonetic match

    order = {p.id: i for i, p in enumerate(index.persons)}
    ranked = sorted(scores.items(), key=lambda item: (-item[1], order[item[0]]))
    return [(index.person_by_id[pid], score) for pid, score in ranked[:max_results]]


def get_house_color(index: TreeIndex, house_id: str | None) -> str:
    """Resolve a house color: reference palette, then the house record, then gray."""
    if not house_id:
        return NEUTRAL_COLOR
    if house_id in HOUSE_COLORS:
        return HOUSE_COLORS[house_id]
    house = index.house_by_id.get(house_id)
    if house and house.color:
        return house.color
    return NEUTRAL_COLOR


def get_person_color(index: TreeIndex, person: Person) -> str:
    """Node color for a person: muted when deceased, otherwise by blood house."""
    if person.status == "deceased":
        return DECEASED_COLOR
    return get_house_color(index, person.true_house or person.house)


def get_status_color(status: str | None) -> str:
    return STATUS_COLORS.get(status or "unknown", STATUS_COLORS["unknown"])


def get_status_label(status: str | None) -> str:
    return STATUS_LABELS.get(status or "unknown", STATUS_LABELS["unknown"])

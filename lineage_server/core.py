"""Core logic functions for querying family tree data."""

from collections import Counter

from . import state
from .constants import DEFAULT_MAX_DEPTH, MAX_SEARCH_RESULTS
from .hierarchy import FilterState, build_forest
from .indexer import TreeIndex
from .models import Person
from .parsing import load_family_tree
from .pathfinding import find_path, get_ancestors, get_connection_degree, get_descendants
from .relations import (
    fuzzy_search_persons,
    get_children,
    get_house_color,
    get_house_members,
    get_parents,
    get_partners,
    get_person_color,
    get_person_relationships,
    get_siblings,
    get_spouses,
    get_status_color,
    get_status_label,
    search_persons,
)


def _normalize_lookup_id(id_str: str) -> str:
    """Normalize an ID for lookup in the indexes (IDs are stored trimmed)."""
    return id_str.strip()


def _summaries(persons: list[Person]) -> list[dict]:
    return [p.to_summary() for p in persons]


def _id_summaries(index: TreeIndex, person_ids: list[str]) -> list[dict]:
    """Summaries for IDs, keeping unresolved IDs with no name."""
    results = []
    for pid in person_ids:
        person = index.person_by_id.get(pid)
        results.append(person.to_summary() if person else {"id": pid, "name": None})
    return results


def _get_person(person_id: str) -> dict | None:
    index = state.current().index
    person = index.person_by_id.get(_normalize_lookup_id(person_id))
    if not person:
        return None

    result = person.to_dict()
    result["color"] = get_person_color(index, person)
    result["status_label"] = get_status_label(person.status)
    result["status_color"] = get_status_color(person.status)
    return result


def _get_house(house_id: str) -> dict | None:
    index = state.current().index
    lookup_id = _normalize_lookup_id(house_id)
    house = index.house_by_id.get(lookup_id)
    if not house:
        return None

    result = house.to_dict()
    result["color"] = get_house_color(index, lookup_id)
    result["member_count"] = len(get_house_members(index, lookup_id))
    return result


def _list_houses() -> list[dict]:
    return [h.to_summary() for h in state.current().index.houses]


def _get_parents(person_id: str) -> list[dict]:
    return _summaries(get_parents(state.current().index, _normalize_lookup_id(person_id)))


def _get_children(person_id: str) -> list[dict]:
    return _summaries(get_children(state.current().index, _normalize_lookup_id(person_id)))


def _get_spouses(person_id: str) -> list[dict]:
    return _summaries(get_spouses(state.current().index, _normalize_lookup_id(person_id)))


def _get_partners(person_id: str) -> list[dict]:
    return _summaries(get_partners(state.current().index, _normalize_lookup_id(person_id)))


def _get_siblings(person_id: str) -> list[dict]:
    return _summaries(get_siblings(state.current().index, _normalize_lookup_id(person_id)))


def _get_house_members(house_id: str) -> list[dict]:
    return _summaries(get_house_members(state.current().index, _normalize_lookup_id(house_id)))


def _get_person_relationships(person_id: str, include_secrets: bool = True) -> list[dict]:
    index = state.index_for(include_secrets)
    relationships = get_person_relationships(index, _normalize_lookup_id(person_id))
    return [rel.to_dict() for rel in relationships]


def _get_house_color(house_id: str | None) -> str:
    lookup_id = _normalize_lookup_id(house_id) if house_id else None
    return get_house_color(state.current().index, lookup_id)


def _search_persons(query: str, max_results: int = MAX_SEARCH_RESULTS) -> list[dict]:
    max_results = max(0, min(max_results, MAX_SEARCH_RESULTS))
    return _summaries(search_persons(state.current().index, query, max_results))


def _fuzzy_search_persons(
    query: str, threshold: int = 70, max_results: int = MAX_SEARCH_RESULTS
) -> list[dict]:
    max_results = max(0, min(max_results, MAX_SEARCH_RESULTS))
    results = []
    for person, score in fuzzy_search_persons(
        state.current().index, query, threshold=threshold, max_results=max_results
    ):
        info = person.to_summary()
        info["match_score"] = score
        results.append(info)
    return results


def _find_path(person1_id: str, person2_id: str) -> dict:
    snapshot = state.current()
    result = find_path(
        snapshot.index,
        _normalize_lookup_id(person1_id),
        _normalize_lookup_id(person2_id),
        graph=snapshot.graph,
    )
    return result.to_dict()


def _get_connection_degree(person1_id: str, person2_id: str) -> int:
    snapshot = state.current()
    return get_connection_degree(
        snapshot.index,
        _normalize_lookup_id(person1_id),
        _normalize_lookup_id(person2_id),
        graph=snapshot.graph,
    )


def _get_ancestors(person_id: str, max_depth: int = DEFAULT_MAX_DEPTH) -> list[dict]:
    max_depth = min(max_depth, DEFAULT_MAX_DEPTH)  # Cap to prevent huge responses
    index = state.current().index
    ids = get_ancestors(index, _normalize_lookup_id(person_id), max_depth)
    return _id_summaries(index, ids)


def _get_descendants(person_id: str, max_depth: int = DEFAULT_MAX_DEPTH) -> list[dict]:
    max_depth = min(max_depth, DEFAULT_MAX_DEPTH)
    index = state.current().index
    ids = get_descendants(index, _normalize_lookup_id(person_id), max_depth)
    return _id_summaries(index, ids)


def _build_forest(
    selected_houses: list[str],
    show_deceased: bool = True,
    show_secrets: bool = True,
    show_bastards: bool = True,
) -> dict:
    """Build the filtered display forest.

    ``trees`` is None when no house is selected, which callers should treat
    as "prompt for a selection" rather than as an empty view.
    """
    filters = FilterState(
        selected_houses=[_normalize_lookup_id(h) for h in selected_houses],
        show_deceased=show_deceased,
        show_secrets=show_secrets,
        show_bastards=show_bastards,
    )
    snapshot = state.current()
    forest = build_forest(snapshot.data, filters, index=snapshot.index_for(show_secrets))

    if forest is None:
        return {"status": "no_selection", "trees": None, "tree_count": 0, "person_count": 0}

    return {
        "status": "ok" if forest else "empty",
        "trees": [tree.to_dict() for tree in forest],
        "tree_count": len(forest),
        "person_count": sum(tree.size() for tree in forest),
    }


def _get_statistics() -> dict:
    snapshot = state.current()
    index = snapshot.index

    status_counts = Counter(p.status for p in index.persons)
    gender_counts = Counter(p.gender for p in index.persons)
    house_counts = Counter(p.house for p in index.persons if p.house)
    relationship_counts = Counter(rel.type for rel in index.relationships)

    return {
        "generation": snapshot.generation,
        "total_persons": len(index.persons),
        "total_houses": len(index.houses),
        "total_relationships": len(index.relationships),
        "by_status": dict(status_counts),
        "by_gender": dict(gender_counts),
        "by_relationship_type": dict(relationship_counts),
        "secret_relationships": sum(1 for rel in index.relationships if rel.secret),
        "bastards": sum(1 for p in index.persons if p.bastard),
        "dangling_references": len(index.dangling_ids()),
        "largest_houses": [
            {"house": house, "count": count} for house, count in house_counts.most_common(10)
        ],
    }


def _get_home_person() -> dict | None:
    """Get the home person (most connected, or configured) record."""
    if not state.HOME_PERSON_ID:
        return None
    return _get_person(state.HOME_PERSON_ID)


def _reload_family_tree() -> dict:
    """Re-read the dataset file and replace the snapshot."""
    snapshot = load_family_tree()
    return {
        "generation": snapshot.generation,
        "persons": len(snapshot.data.persons),
        "houses": len(snapshot.data.houses),
        "relationships": len(snapshot.data.relationships),
    }

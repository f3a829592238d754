"""Filtered display forests: roots, descendants and co-displayed partners."""

from __future__ import annotations

from dataclasses import dataclass, field

from .indexer import TreeIndex, build_index
from .models import FamilyTreeData, HierarchyNode, Person


@dataclass
class FilterState:
    selected_houses: list[str] = field(default_factory=list)
    show_deceased: bool = True
    show_secrets: bool = True
    show_bastards: bool = True


def visible_person_ids(index: TreeIndex, filters: FilterState) -> list[str]:
    """IDs of persons passing the house, status and bastard filters, in dataset order.

    House filtering uses the birth house only; persons who joined a house by
    marriage show up as partners rather than as members of the tree.
    """
    selected = set(filters.selected_houses)
    visible = []
    for person in index.persons:
        if not person.house or person.house not in selected:
            continue
        if not filters.show_deceased and person.status == "deceased":
            continue
        if not filters.show_bastards and person.bastard:
            continue
        visible.append(person.id)
    return visible


def find_roots(index: TreeIndex, visible_ids: list[str]) -> list[Person]:
    """Visible persons with no visible parent.

    A person whose parents were all filtered out becomes a root of the view.
    """
    visible = set(visible_ids)
    roots = []
    for person_id in visible_ids:
        parent_ids = index.parents_by_child.get(person_id, ())
        if not any(pid in visible for pid in parent_ids):
            roots.append(index.person_by_id[person_id])
    return roots


def _first_partner(index: TreeIndex, person_id: str) -> Person | None:
    for partner_id in index.partners_by_person.get(person_id, ()):
        partner = index.person_by_id.get(partner_id)
        if partner:
            return partner
    return None


def build_forest(
    data: FamilyTreeData | None,
    filters: FilterState,
    index: TreeIndex | None = None,
) -> list[HierarchyNode] | None:
    """Build the display forest for the current filters.

    Args:
        data: Loaded dataset, or None while nothing is loaded
        filters: House selection and visibility toggles
        index: Prebuilt index for ``data``; its ``include_secrets`` must match
            ``filters.show_secrets``. Built on demand if omitted.

    Returns:
        None when there is no data or no house is selected, otherwise the
        list of trees (possibly empty). Every visible person appears as
        exactly one node.
    """
    if data is None or not filters.selected_houses:
        return None

    if index is None:
        index = build_index(data, include_secrets=filters.show_secrets)
    elif index.include_secrets != filters.show_secrets:
        raise ValueError("index secret visibility does not match filters.show_secrets")

    visible_ids = visible_person_ids(index, filters)
    visible = set(visible_ids)
    visiting: set[str] = set()
    rendered: set[str] = set()

    def build_node(person: Person) -> HierarchyNode | None:
        if person.id not in visible or person.id in visiting or person.id in rendered:
            return None
        visiting.add(person.id)

        children = []
        for child_id in index.children_by_parent.get(person.id, ()):
            child = index.person_by_id.get(child_id)
            if child is None or child_id not in visible:
                continue
            node = build_node(child)
            if node is not None:
                children.append(node)

        visiting.discard(person.id)
        rendered.add(person.id)
        return HierarchyNode(
            id=person.id,
            person=person,
            children=children,
            partner=_first_partner(index, person.id),
        )

    trees = []
    for root in find_roots(index, visible_ids):
        node = build_node(root)
        if node is not None:
            trees.append(node)

    # Parent links that loop among visible persons leave no root to start from
    for person_id in visible_ids:
        if person_id not in rendered:
            node = build_node(index.person_by_id[person_id])
            if node is not None:
                trees.append(node)

    return trees

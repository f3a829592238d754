"""Data models for houses, persons and relationships."""

from dataclasses import dataclass, field

from .constants import PARENT_CHILD


@dataclass
class House:
    id: str
    name: str
    seat: str
    region: str
    sigil: str
    words: str | None = None
    color: str | None = None  # hex, e.g. "#5c7689"
    status: str | None = None  # active, extinct

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "seat": self.seat,
            "region": self.region,
            "words": self.words,
            "sigil": self.sigil,
            "color": self.color,
            "status": self.status,
        }

    def to_summary(self) -> dict:
        """Short summary for list views."""
        return {
            "id": self.id,
            "name": self.name,
            "region": self.region,
            "status": self.status,
        }


@dataclass
class Person:
    id: str
    name: str
    gender: str  # male, female
    status: str  # alive, deceased, imprisoned, unknown
    house: str | None = None
    alias: str | None = None
    married_into: str | None = None
    true_house: str | None = None  # hidden parentage
    raised_as: str | None = None  # fostering or disguise
    titles: list[str] = field(default_factory=list)
    death_cause: str | None = None
    bastard: bool = False
    legitimized: bool = False

    def house_ids(self) -> list[str]:
        """Every house this person belongs to, through any affiliation."""
        houses = []
        for house_id in (self.house, self.married_into, self.true_house, self.raised_as):
            if house_id and house_id not in houses:
                houses.append(house_id)
        return houses

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "alias": self.alias,
            "house": self.house,
            "married_into": self.married_into,
            "true_house": self.true_house,
            "raised_as": self.raised_as,
            "gender": self.gender,
            "titles": self.titles,
            "status": self.status,
            "death_cause": self.death_cause,
            "bastard": self.bastard,
            "legitimized": self.legitimized,
        }

    def to_summary(self) -> dict:
        """Short summary for list views."""
        return {
            "id": self.id,
            "name": self.name,
            "alias": self.alias,
            "house": self.house,
            "status": self.status,
        }


@dataclass
class ParentChild:
    """Directed parent -> child link."""

    parent: str
    child: str
    id: str | None = None
    secret: bool = False

    @property
    def type(self) -> str:
        return PARENT_CHILD

    def involves(self, person_id: str) -> bool:
        return person_id in (self.parent, self.child)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "parent": self.parent,
            "child": self.child,
            "secret": self.secret,
        }


@dataclass
class Partnership:
    """Undirected spouse or betrothed link."""

    type: str  # spouse, betrothed
    person1: str
    person2: str
    id: str | None = None
    secret: bool = False

    def involves(self, person_id: str) -> bool:
        return person_id in (self.person1, self.person2)

    def other(self, person_id: str) -> str:
        return self.person2 if self.person1 == person_id else self.person1

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "person1": self.person1,
            "person2": self.person2,
            "secret": self.secret,
        }


Relationship = ParentChild | Partnership


@dataclass
class FamilyTreeData:
    houses: list[House] = field(default_factory=list)
    persons: list[Person] = field(default_factory=list)
    relationships: list[Relationship] = field(default_factory=list)


@dataclass
class HierarchyNode:
    """One person in a display forest, with an optional co-displayed partner."""

    id: str
    person: Person
    children: list["HierarchyNode"] = field(default_factory=list)
    partner: Person | None = None

    def size(self) -> int:
        return 1 + sum(child.size() for child in self.children)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "person": self.person.to_summary(),
            "partner": self.partner.to_summary() if self.partner else None,
            "children": [child.to_dict() for child in self.children],
        }


@dataclass
class PathStep:
    person_id: str  # person reached by this step
    relation: str  # parent, child, spouse, betrothed

    def to_dict(self) -> dict:
        return {"person_id": self.person_id, "relation": self.relation}


@dataclass
class PathResult:
    found: bool
    steps: list[PathStep] = field(default_factory=list)
    description: list[str] = field(default_factory=list)

    @property
    def degree(self) -> int:
        return len(self.steps)

    def to_dict(self) -> dict:
        return {
            "found": self.found,
            "degree": self.degree if self.found else None,
            "steps": [s.to_dict() for s in self.steps],
            "description": self.description,
        }

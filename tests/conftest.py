"""Shared fixtures for Lineage server tests."""

import os
from pathlib import Path

import pytest

# Set env vars BEFORE importing any lineage_server modules
# This is critical because modules are imported at collection time
# Set explicit test values so .env doesn't override them (load_dotenv won't override existing)
_TEST_DATA = Path(__file__).parent / "fixtures" / "sample.json"
os.environ["FAMILY_TREE_FILE"] = str(_TEST_DATA)
os.environ["FAMILY_TREE_HOME_PERSON_ID"] = ""  # Empty string = auto-detect in sample.json

# Now import and initialize lineage_server (safe because env var is set)
from lineage_server import initialize  # noqa: E402

initialize()

from lineage_server import state  # noqa: E402
from lineage_server.models import (  # noqa: E402
    FamilyTreeData,
    House,
    ParentChild,
    Partnership,
    Person,
)


@pytest.fixture
def sample_data_path():
    """Path to the sample dataset."""
    return _TEST_DATA


@pytest.fixture
def snapshot():
    """The snapshot loaded from sample.json."""
    return state.current()


@pytest.fixture
def index(snapshot):
    """Index over every relationship, secrets included."""
    return snapshot.index


@pytest.fixture
def public_index(snapshot):
    """Index with secret relationships left out."""
    return snapshot.public_index


@pytest.fixture
def graph(snapshot):
    """Path finding graph for the sample snapshot."""
    return snapshot.graph


@pytest.fixture
def make_tree():
    """Factory for small in-memory datasets.

    Persons are given as (id, house) pairs or full Person objects;
    relationships as ("parent-child", parent, child) or
    ("spouse" | "betrothed", person1, person2) tuples.
    """

    def _make(persons, relationships=(), houses=("stark",)):
        built_persons = []
        for p in persons:
            if isinstance(p, Person):
                built_persons.append(p)
            else:
                person_id, house = p
                built_persons.append(
                    Person(
                        id=person_id,
                        name=person_id.replace("_", " ").title(),
                        gender="male",
                        status="alive",
                        house=house,
                    )
                )

        built_rels = []
        for i, (rel_type, a, b) in enumerate(relationships):
            if rel_type == "parent-child":
                built_rels.append(ParentChild(parent=a, child=b, id=f"rel_{i}"))
            else:
                built_rels.append(Partnership(type=rel_type, person1=a, person2=b, id=f"rel_{i}"))

        built_houses = [
            House(id=h, name=f"House {h.title()}", seat="", region="", sigil="") for h in houses
        ]
        return FamilyTreeData(houses=built_houses, persons=built_persons, relationships=built_rels)

    return _make

"""Family tree JSON parsing, validation and loading."""

import json
import logging
import os
from pathlib import Path

from . import state
from .constants import (
    GENDERS,
    HOUSE_STATUSES,
    PARENT_CHILD,
    PARTNER_TYPES,
    PERSON_STATUSES,
    RELATIONSHIP_TYPES,
)
from .helpers import normalize_id
from .models import FamilyTreeData, House, ParentChild, Partnership, Person, Relationship
from .telemetry import get_tracer

logger = logging.getLogger(__name__)


class DataValidationError(ValueError):
    """Raised when the family tree document is malformed."""


def _expect_record(value, where: str) -> dict:
    if not isinstance(value, dict):
        raise DataValidationError(f"{where}: expected object")
    return value


def _expect_string(record: dict, key: str, where: str) -> str:
    value = record.get(key)
    if not isinstance(value, str):
        raise DataValidationError(f"{where}.{key}: expected string")
    return value


def _optional_string(record: dict, key: str, where: str) -> str | None:
    value = record.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DataValidationError(f"{where}.{key}: expected string")
    return value


def _optional_bool(record: dict, key: str, where: str) -> bool:
    value = record.get(key, False)
    if not isinstance(value, bool):
        raise DataValidationError(f"{where}.{key}: expected boolean")
    return value


def _expect_choice(record: dict, key: str, choices: tuple[str, ...], where: str) -> str:
    value = record.get(key)
    if value not in choices:
        raise DataValidationError(f"{where}.{key}: expected one of {', '.join(choices)}")
    return value


def parse_house(raw, index: int) -> House:
    where = f"houses[{index}]"
    record = _expect_record(raw, where)

    status = record.get("status")
    if status is not None:
        status = _expect_choice(record, "status", HOUSE_STATUSES, where)

    return House(
        id=_expect_string(record, "id", where),
        name=_expect_string(record, "name", where),
        seat=_expect_string(record, "seat", where),
        region=_expect_string(record, "region", where),
        sigil=_expect_string(record, "sigil", where),
        words=_optional_string(record, "words", where),
        color=_optional_string(record, "color", where),
        status=status,
    )


def parse_person(raw, index: int) -> Person:
    where = f"persons[{index}]"
    record = _expect_record(raw, where)

    titles = record.get("titles")
    if titles is None:
        titles = []
    elif not isinstance(titles, list) or not all(isinstance(t, str) for t in titles):
        raise DataValidationError(f"{where}.titles: expected list of strings")

    person = Person(
        id=_expect_string(record, "id", where),
        name=_expect_string(record, "name", where),
        gender=_expect_choice(record, "gender", GENDERS, where),
        status=_expect_choice(record, "status", PERSON_STATUSES, where),
        house=normalize_id(_optional_string(record, "house", where)),
        alias=_optional_string(record, "alias", where),
        married_into=normalize_id(_optional_string(record, "marriedInto", where)),
        true_house=normalize_id(_optional_string(record, "trueHouse", where)),
        raised_as=normalize_id(_optional_string(record, "raisedAs", where)),
        titles=list(titles),
        death_cause=_optional_string(record, "deathCause", where),
        bastard=_optional_bool(record, "bastard", where),
        legitimized=_optional_bool(record, "legitimized", where),
    )

    if person.legitimized and not person.bastard:
        logger.warning(f"{where} ({person.id}): legitimized without bastard flag, ignoring")
        person.legitimized = False

    return person


def parse_relationship(raw, index: int) -> Relationship:
    """Parse one relationship record, dispatching on its type tag.

    Records without an id get the synthetic id ``rel_<index>``.
    """
    where = f"relationships[{index}]"
    record = _expect_record(raw, where)

    rel_type = _expect_choice(record, "type", RELATIONSHIP_TYPES, where)
    rel_id = _optional_string(record, "id", where) or f"rel_{index}"
    secret = _optional_bool(record, "secret", where)

    if rel_type == PARENT_CHILD:
        return ParentChild(
            parent=_expect_string(record, "parent", where),
            child=_expect_string(record, "child", where),
            id=rel_id,
            secret=secret,
        )
    if rel_type in PARTNER_TYPES:
        return Partnership(
            type=rel_type,
            person1=_expect_string(record, "person1", where),
            person2=_expect_string(record, "person2", where),
            id=rel_id,
            secret=secret,
        )
    raise DataValidationError(f"{where}.type: unsupported relationship type {rel_type!r}")


def parse_family_tree_data(raw) -> FamilyTreeData:
    """Validate a decoded family tree document and build the data model.

    Raises:
        DataValidationError: Naming the offending collection, index and field.
    """
    record = _expect_record(raw, "family tree data")
    for key in ("houses", "persons", "relationships"):
        if not isinstance(record.get(key), list):
            raise DataValidationError(f"{key}: expected array")

    return FamilyTreeData(
        houses=[parse_house(h, i) for i, h in enumerate(record["houses"])],
        persons=[parse_person(p, i) for i, p in enumerate(record["persons"])],
        relationships=[parse_relationship(r, i) for i, r in enumerate(record["relationships"])],
    )


def read_family_tree(path: Path) -> FamilyTreeData:
    """Read and validate a family tree JSON file."""
    with open(path, encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise DataValidationError(f"{path}: invalid JSON ({e})") from e
    return parse_family_tree_data(raw)


def load_family_tree() -> state.Snapshot:
    """Parse the configured dataset and install it as the current snapshot.

    Requires configure() to be called first to set state.DATA_FILE. Calling
    again reloads the file and replaces every index at once; if the file
    fails validation the previous snapshot stays in place.
    """
    if state.DATA_FILE is None:
        raise RuntimeError("configure() must be called before load_family_tree()")
    if not state.DATA_FILE.exists():
        raise FileNotFoundError(f"Family tree file not found: {state.DATA_FILE}")

    with get_tracer().start_as_current_span("load_family_tree") as span:
        span.set_attribute("lineage.file", str(state.DATA_FILE))
        data = read_family_tree(state.DATA_FILE)
        snapshot = state.install(data)

    # Set home person from env var or auto-detect
    env_home = normalize_id(os.getenv("FAMILY_TREE_HOME_PERSON_ID"))
    if env_home:
        state.HOME_PERSON_ID = env_home
    else:
        state.HOME_PERSON_ID = state._detect_home_person()

    return snapshot

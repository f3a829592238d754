"""Tests for family tree document parsing and validation."""

import json

import pytest

from lineage_server.models import ParentChild, Partnership
from lineage_server.parsing import (
    DataValidationError,
    parse_family_tree_data,
    parse_person,
    parse_relationship,
    read_family_tree,
)


def _person(**overrides):
    record = {"id": "p1", "name": "Someone", "gender": "male", "status": "alive", "house": None}
    record.update(overrides)
    return record


def _document(houses=None, persons=None, relationships=None):
    return {
        "houses": houses or [],
        "persons": persons or [],
        "relationships": relationships or [],
    }


class TestParseRelationship:
    """Tests for tagged relationship parsing."""

    def test_parent_child_variant(self):
        rel = parse_relationship({"type": "parent-child", "parent": "a", "child": "b"}, 0)
        assert isinstance(rel, ParentChild)
        assert (rel.parent, rel.child) == ("a", "b")
        assert rel.type == "parent-child"

    def test_partnership_variants(self):
        for rel_type in ("spouse", "betrothed"):
            rel = parse_relationship({"type": rel_type, "person1": "a", "person2": "b"}, 0)
            assert isinstance(rel, Partnership)
            assert rel.type == rel_type
            assert rel.other("a") == "b"
            assert rel.other("b") == "a"

    def test_synthetic_id_assigned(self):
        rel = parse_relationship({"type": "spouse", "person1": "a", "person2": "b"}, 7)
        assert rel.id == "rel_7"

    def test_explicit_id_kept(self):
        rel = parse_relationship(
            {"id": "wedding", "type": "spouse", "person1": "a", "person2": "b"}, 7
        )
        assert rel.id == "wedding"

    def test_secret_defaults_false(self):
        rel = parse_relationship({"type": "parent-child", "parent": "a", "child": "b"}, 0)
        assert rel.secret is False

    def test_unknown_type_rejected(self):
        with pytest.raises(DataValidationError, match=r"relationships\[3\]\.type"):
            parse_relationship({"type": "sibling", "person1": "a", "person2": "b"}, 3)

    def test_missing_variant_field_rejected(self):
        """A parent-child record must carry parent and child, not person1/person2."""
        with pytest.raises(DataValidationError, match=r"relationships\[0\]\.parent"):
            parse_relationship({"type": "parent-child", "person1": "a", "person2": "b"}, 0)

    def test_non_boolean_secret_rejected(self):
        with pytest.raises(DataValidationError, match="secret: expected boolean"):
            parse_relationship(
                {"type": "spouse", "person1": "a", "person2": "b", "secret": "yes"}, 0
            )


class TestParsePerson:
    """Tests for person record parsing."""

    def test_camel_case_house_fields(self):
        person = parse_person(
            _person(house="stark", marriedInto="tully", trueHouse="targaryen", raisedAs="stark"),
            0,
        )
        assert person.house == "stark"
        assert person.married_into == "tully"
        assert person.true_house == "targaryen"
        assert person.raised_as == "stark"
        assert person.house_ids() == ["stark", "tully", "targaryen"]

    def test_null_house(self):
        assert parse_person(_person(house=None), 0).house is None

    def test_invalid_gender_rejected(self):
        with pytest.raises(DataValidationError, match=r"persons\[2\]\.gender"):
            parse_person(_person(gender="other"), 2)

    def test_invalid_status_rejected(self):
        with pytest.raises(DataValidationError, match=r"persons\[0\]\.status"):
            parse_person(_person(status="missing"), 0)

    def test_titles_must_be_strings(self):
        with pytest.raises(DataValidationError, match="titles"):
            parse_person(_person(titles=["Lord", 3]), 0)

    def test_legitimized_without_bastard_is_cleared(self, caplog):
        person = parse_person(_person(legitimized=True), 0)
        assert person.legitimized is False
        assert "legitimized without bastard" in caplog.text

    def test_legitimized_bastard_kept(self):
        person = parse_person(_person(bastard=True, legitimized=True), 0)
        assert person.bastard is True
        assert person.legitimized is True


class TestParseDocument:
    """Tests for whole-document validation."""

    def test_missing_collection_rejected(self):
        with pytest.raises(DataValidationError, match="persons: expected array"):
            parse_family_tree_data({"houses": [], "relationships": []})

    def test_non_object_rejected(self):
        with pytest.raises(DataValidationError):
            parse_family_tree_data([])

    def test_invalid_house_status_rejected(self):
        house = {"id": "h", "name": "H", "seat": "s", "region": "r", "sigil": "x", "status": "gone"}
        with pytest.raises(DataValidationError, match=r"houses\[0\]\.status"):
            parse_family_tree_data(_document(houses=[house]))

    def test_error_names_offending_index(self):
        persons = [_person(id="ok"), _person(id="bad", name=None)]
        with pytest.raises(DataValidationError, match=r"persons\[1\]\.name"):
            parse_family_tree_data(_document(persons=persons))

    def test_dangling_references_accepted(self):
        """Relationships may reference persons missing from the dataset."""
        data = parse_family_tree_data(
            _document(relationships=[{"type": "parent-child", "parent": "x", "child": "y"}])
        )
        assert len(data.relationships) == 1

    def test_validation_error_is_value_error(self):
        assert issubclass(DataValidationError, ValueError)


class TestReadFamilyTree:
    """Tests for reading JSON files."""

    def test_reads_sample(self, sample_data_path):
        data = read_family_tree(sample_data_path)
        assert data.relationships[0].id == "rel_0"
        assert data.relationships[2].id == "ned_cat_marriage"
        assert data.relationships[19].id == "robb_dup"

    def test_sample_legitimized_flags(self, sample_data_path):
        data = read_family_tree(sample_data_path)
        by_id = {p.id: p for p in data.persons}
        assert by_id["joffrey_baratheon"].legitimized is True
        assert by_id["howland_reed"].legitimized is False

    def test_invalid_json_rejected(self, tmp_path):
        bad = tmp_path / "broken.json"
        bad.write_text("{not json")
        with pytest.raises(DataValidationError, match="invalid JSON"):
            read_family_tree(bad)

    def test_round_trip_through_file(self, tmp_path):
        path = tmp_path / "tree.json"
        path.write_text(json.dumps(_document(persons=[_person(id="solo", house="stark")])))
        data = read_family_tree(path)
        assert [p.id for p in data.persons] == ["solo"]

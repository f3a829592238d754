"""Tests for adjacency index construction."""

from lineage_server.indexer import build_index


class TestBuildIndex:
    """Tests for the maps built from the sample dataset."""

    def test_parents_by_child(self, index):
        assert index.parents_by_child["robb_stark"] == ("eddard_stark", "catelyn_tully")
        assert index.parents_by_child["joffrey_baratheon"] == (
            "cersei_lannister",
            "jaime_lannister",
        )

    def test_children_by_parent_keeps_record_order(self, index):
        assert index.children_by_parent["eddard_stark"] == (
            "robb_stark",
            "sansa_stark",
            "arya_stark",
        )
        assert index.children_by_parent["rickard_stark"] == (
            "eddard_stark",
            "lyanna_stark",
            "benjen_stark",
        )

    def test_duplicate_records_collapse(self, index):
        """The duplicated Eddard -> Robb record adds no second entry."""
        assert index.children_by_parent["eddard_stark"].count("robb_stark") == 1
        assert index.parents_by_child["robb_stark"].count("eddard_stark") == 1

    def test_spouses_exclude_betrothals(self, index):
        assert "sansa_stark" not in index.spouses_by_person
        assert index.spouses_by_person["eddard_stark"] == ("catelyn_tully",)

    def test_partners_include_betrothals(self, index):
        assert index.partners_by_person["sansa_stark"] == ("joffrey_baratheon",)
        assert index.partners_by_person["joffrey_baratheon"] == ("sansa_stark",)

    def test_has_parent(self, index):
        assert "robb_stark" in index.has_parent
        assert "rickard_stark" not in index.has_parent

    def test_lookup_maps(self, index):
        assert index.person_by_id["eddard_stark"].alias == "Ned"
        assert index.house_by_id["stark"].seat == "Winterfell"

    def test_dangling_references_still_indexed(self, index):
        assert "benjen_stark" in index.has_parent
        assert "benjen_stark" not in index.person_by_id
        assert index.dangling_ids() == {"benjen_stark"}


class TestSecretFiltering:
    """Tests for indexes built without secret relationships."""

    def test_secret_parentage_hidden(self, public_index):
        assert "jon_snow" not in public_index.parents_by_child
        assert "jon_snow" not in public_index.has_parent

    def test_secret_marriage_hidden(self, public_index):
        assert "lyanna_stark" not in public_index.partners_by_person

    def test_public_relationships_kept(self, public_index):
        assert public_index.parents_by_child["joffrey_baratheon"] == ("cersei_lannister",)
        assert len(public_index.relationships) == 17

    def test_full_index_keeps_secrets(self, index):
        assert index.parents_by_child["jon_snow"] == ("lyanna_stark", "rhaegar_targaryen")
        assert len(index.relationships) == 21


class TestIndexPurity:
    """Tests that indexing leaves its input alone."""

    def test_input_not_mutated(self, make_tree):
        data = make_tree(
            [("a", "stark"), ("b", "stark")],
            [("parent-child", "a", "b"), ("parent-child", "a", "b"), ("spouse", "a", "b")],
        )
        before = [r.to_dict() for r in data.relationships]
        build_index(data)
        assert [r.to_dict() for r in data.relationships] == before
        assert len(data.persons) == 2

    def test_rebuild_is_equivalent(self, make_tree):
        data = make_tree([("a", "stark"), ("b", "stark")], [("betrothed", "a", "b")])
        first = build_index(data)
        second = build_index(data)
        assert first is not second
        assert first.partners_by_person == second.partners_by_person

    def test_empty_dataset(self, make_tree):
        index = build_index(make_tree([], [], houses=()))
        assert index.persons == ()
        assert index.parents_by_child == {}
        assert index.dangling_ids() == set()

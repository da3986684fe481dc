from __future__ import annotations

import json

import pytest

from genealogy.models import RelationType
from genealogy.mutations import add_relation, new_member
from genealogy.store import FamilyStore, StorageError


def test_save_then_load_restores_family(store: FamilyStore, clan) -> None:
    store.save(clan)

    loaded = store.load(clan.id)
    assert loaded is not None
    assert loaded.to_dict() == clan.to_dict()
    assert list(loaded.members) == clan.graph.ids()


def test_file_layout_uses_camel_case_keys(store: FamilyStore, trio) -> None:
    store.save(trio)
    raw = json.loads((store.data_dir / "fam1.json").read_text(encoding="utf-8"))

    assert raw["memberIndexMap"] == {"M1": 0, "M2": 1, "M3": 2}
    assert raw["relationMatrix"] == {"size": 3, "values": [[0, 1, 0], [0, 0, 2], [0, 2, 0]]}
    assert raw["members"][1]["parents"] == ["M1"]
    assert raw["members"][1]["firstName"] == "m2"


def test_missing_family_is_none(store: FamilyStore) -> None:
    assert store.load("nope") is None
    assert store.load("../etc/passwd") is None
    assert store.exists("nope") is False
    assert store.delete("nope") is False


def test_corrupt_file_raises_storage_error(store: FamilyStore) -> None:
    store.data_dir.mkdir(parents=True)
    (store.data_dir / "bad.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        store.load("bad")


def test_matrix_that_breaks_invariants_raises_storage_error(store: FamilyStore, trio) -> None:
    payload = trio.to_dict()
    payload["relationMatrix"]["values"][0][0] = 1
    store.data_dir.mkdir(parents=True)
    (store.data_dir / "fam1.json").write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(StorageError):
        store.load("fam1")


def _write(store: FamilyStore, payload: dict) -> None:
    store.data_dir.mkdir(parents=True, exist_ok=True)
    (store.data_dir / f"{payload['id']}.json").write_text(json.dumps(payload), encoding="utf-8")


def test_unknown_weight_raises_storage_error(store: FamilyStore, trio) -> None:
    payload = trio.to_dict()
    payload["relationMatrix"]["values"][0][1] = 3
    _write(store, payload)
    with pytest.raises(StorageError):
        store.load("fam1")


def test_one_sided_spouse_cell_raises_storage_error(store: FamilyStore, trio) -> None:
    payload = trio.to_dict()
    payload["relationMatrix"]["values"][2][1] = 0
    _write(store, payload)
    with pytest.raises(StorageError):
        store.load("fam1")


def test_lists_disagreeing_with_matrix_raise_storage_error(store: FamilyStore, trio) -> None:
    # Matrix edge M1 -> M2 with no matching children/parents entries.
    payload = trio.to_dict()
    payload["members"][0]["children"] = []
    payload["members"][1]["parents"] = []
    _write(store, payload)
    with pytest.raises(StorageError):
        store.load("fam1")


def test_half_recorded_parent_link_raises_storage_error(store: FamilyStore, trio) -> None:
    payload = trio.to_dict()
    payload["members"][1]["parents"] = []
    _write(store, payload)
    with pytest.raises(StorageError):
        store.load("fam1")


def test_dangling_member_reference_raises_storage_error(store: FamilyStore, trio) -> None:
    payload = trio.to_dict()
    payload["members"][0]["parents"] = ["ghost"]
    _write(store, payload)
    with pytest.raises(StorageError):
        store.load("fam1")


def test_list_find_and_delete(store: FamilyStore, build_family) -> None:
    store.save(build_family(["A"], family_id="f1", name="Smith"))
    store.save(build_family(["B"], family_id="f2", name="Jones"))

    assert [f.id for f in store.list_families()] == ["f1", "f2"]
    assert store.find_by_name("  jones ").id == "f2"
    assert store.find_by_name("nobody") is None

    assert store.delete("f1") is True
    assert [f.id for f in store.list_families()] == ["f2"]


def test_list_on_missing_dir_is_empty(store: FamilyStore) -> None:
    assert store.list_families() == []


def test_edit_saves_on_clean_exit(store: FamilyStore, trio) -> None:
    store.save(trio)

    with store.edit("fam1") as family:
        m = new_member(family, first_name="Kid", last_name="Doe", birth_date="2020-01-01", gender="M")
        add_relation(family, "M2", m.id, RelationType.PARENT_CHILD)

    loaded = store.load("fam1")
    assert loaded.graph.size() == 4
    assert loaded.get("M2").children == [m.id]


def test_edit_discards_changes_on_error(store: FamilyStore, trio) -> None:
    store.save(trio)

    with pytest.raises(RuntimeError):
        with store.edit("fam1") as family:
            family.name = "Changed"
            raise RuntimeError("boom")

    assert store.load("fam1").name == trio.name


def test_edit_missing_family_yields_none(store: FamilyStore) -> None:
    with store.edit("ghost") as family:
        assert family is None
    assert store.exists("ghost") is False

from __future__ import annotations

import pytest

from genealogy.models import Gender, Member, RelationType
from genealogy.mutations import (
    MemberNotFoundError,
    RelationConflictError,
    add_member,
    add_relation,
    create_family,
    new_member,
    remove_member,
    remove_relation,
    search_members,
    update_family,
    update_member,
)


def test_create_family_with_initial_member() -> None:
    family = create_family(
        "Doe",
        "test",
        {"first_name": "Jane", "last_name": "Doe", "birth_date": "1970-02-03", "gender": "F"},
    )
    assert family.name == "Doe"
    assert len(family.members) == 1
    (member,) = family.members.values()
    assert member.gender == Gender.FEMALE
    assert member.family_id == family.id
    assert family.graph.size() == 1


def test_update_family_only_touches_given_fields() -> None:
    family = create_family("Doe", "old")
    update_family(family, description="new")
    assert family.name == "Doe"
    assert family.description == "new"


def test_new_member_gets_next_index(trio) -> None:
    m = new_member(trio, first_name="Ann", last_name="Doe", birth_date="2000-01-01", gender="FEMALE")
    assert trio.graph.index_of(m.id) == 3
    assert trio.graph.size() == 4


def test_add_member_rejects_duplicates_and_prelinked(trio) -> None:
    with pytest.raises(RelationConflictError):
        add_member(trio, Member(id="M1", family_id="x", first_name="a", last_name="b", birth_date="", gender=Gender.MALE))
    with pytest.raises(RelationConflictError):
        add_member(
            trio,
            Member(id="M9", family_id="x", first_name="a", last_name="b", birth_date="", gender=Gender.MALE, parents=["M1"]),
        )
    assert "M9" not in trio.members


def test_parent_relation_updates_lists_and_matrix(trio) -> None:
    g = trio.graph
    assert trio.get("M1").children == ["M2"]
    assert trio.get("M2").parents == ["M1"]
    assert g.weight(g.index_of("M1"), g.index_of("M2")) == RelationType.PARENT_CHILD
    assert g.weight(g.index_of("M2"), g.index_of("M1")) == 0


def test_spouse_relation_is_symmetric(trio) -> None:
    g = trio.graph
    i, j = g.index_of("M2"), g.index_of("M3")
    assert g.weight(i, j) == g.weight(j, i) == RelationType.SPOUSE
    assert trio.get("M2").spouse == "M3"
    assert trio.get("M3").spouse == "M2"


def test_add_existing_relation_returns_false(trio) -> None:
    assert add_relation(trio, "M1", "M2", RelationType.PARENT_CHILD) is False
    assert add_relation(trio, "M3", "M2", 2) is False
    assert trio.get("M1").children == ["M2"]


def test_relation_conflicts(trio, build_family) -> None:
    with pytest.raises(RelationConflictError):
        add_relation(trio, "M1", "M1", RelationType.SPOUSE)
    with pytest.raises(RelationConflictError):
        add_relation(trio, "M2", "M1", RelationType.PARENT_CHILD)
    with pytest.raises(RelationConflictError):
        add_relation(trio, "M1", "M2", RelationType.SPOUSE)
    with pytest.raises(RelationConflictError):
        add_relation(trio, "M2", "M3", RelationType.PARENT_CHILD)
    with pytest.raises(MemberNotFoundError):
        add_relation(trio, "M1", "ghost", RelationType.PARENT_CHILD)

    # A second spouse is refused on either side.
    family = build_family(["A", "B", "C"], spouses=[("A", "B")])
    with pytest.raises(RelationConflictError):
        add_relation(family, "C", "A", RelationType.SPOUSE)


def test_remove_relation_clears_both_sides(trio) -> None:
    g = trio.graph
    assert remove_relation(trio, "M3", "M2") is True
    assert trio.get("M2").spouse is None
    assert trio.get("M3").spouse is None
    assert g.weight(g.index_of("M2"), g.index_of("M3")) == 0
    assert g.weight(g.index_of("M3"), g.index_of("M2")) == 0

    # Argument order does not matter for parent/child either.
    assert remove_relation(trio, "M2", "M1") is True
    assert trio.get("M1").children == []
    assert g.values == [[0, 0, 0], [0, 0, 0], [0, 0, 0]]

    assert remove_relation(trio, "M1", "M2") is False


def test_remove_member_shrinks_matrix_and_drops_references(clan) -> None:
    n = clan.graph.size()
    assert remove_member(clan, "P") is True

    assert clan.graph.size() == n - 1
    assert clan.graph.index_of("P") is None
    assert "P" not in clan.get("GP").children
    assert clan.get("ME").parents == ["PS"]
    assert clan.get("PS").spouse is None

    # Matrix still agrees with the lists after the shift.
    g = clan.graph
    assert g.weight(g.index_of("PS"), g.index_of("ME")) == RelationType.PARENT_CHILD
    assert g.weight(g.index_of("GP"), g.index_of("U")) == RelationType.PARENT_CHILD
    assert g.weight(g.index_of("U"), g.index_of("US")) == RelationType.SPOUSE
    assert sorted(clan.members) == sorted(g.ids())

    assert remove_member(clan, "P") is False


def test_update_member_descriptive_fields_only(trio) -> None:
    m = update_member(trio, "M1", first_name="Karel", gender="F", death_date="2001-01-01")
    assert m.first_name == "Karel"
    assert m.gender == Gender.FEMALE
    assert m.death_date == "2001-01-01"

    update_member(trio, "M1", death_date=None)
    assert trio.get("M1").death_date is None

    with pytest.raises(ValueError):
        update_member(trio, "M1", spouse="M3")
    assert update_member(trio, "ghost", first_name="x") is None


def test_search_members(clan) -> None:
    assert [m.id for m in search_members(clan, first_name="ME")] == ["ME"]
    assert len(search_members(clan, last_name="DOE")) == len(clan.members)
    assert search_members(clan, first_name="me", gender="F") == []
    assert len(search_members(clan)) == len(clan.members)

    with pytest.raises(ValueError):
        search_members(clan, spouse="P")

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

import pytest

from genealogy.models import Family, Gender, Member, RelationType
from genealogy.mutations import add_member, add_relation
from genealogy.store import FamilyStore

FamilyBuilder = Callable[..., Family]


def _build(
    ids: list[str],
    *,
    parent_child: Iterable[tuple[str, str]] = (),
    spouses: Iterable[tuple[str, str]] = (),
    family_id: str = "fam1",
    name: str = "Test family",
) -> Family:
    family = Family(id=family_id, name=name)
    for mid in ids:
        add_member(
            family,
            Member(
                id=mid,
                family_id=family_id,
                first_name=mid.lower(),
                last_name="doe",
                birth_date="1950-01-01",
                gender=Gender.FEMALE if mid.endswith("f") else Gender.MALE,
            ),
        )
    for parent, child in parent_child:
        add_relation(family, parent, child, RelationType.PARENT_CHILD)
    for a, b in spouses:
        add_relation(family, a, b, RelationType.SPOUSE)
    return family


@pytest.fixture()
def build_family() -> FamilyBuilder:
    return _build


@pytest.fixture()
def trio() -> Family:
    # M1 -> M2 (parent/child), M2 <-> M3 (spouses); indices 0, 1, 2.
    return _build(["M1", "M2", "M3"], parent_child=[("M1", "M2")], spouses=[("M2", "M3")])


@pytest.fixture()
def clan() -> Family:
    """Three generations.

        GP ==== GM
        |       |
        +---+---+------+
            |          |
            P ==== PS  U ==== US
            |          |
        +---+---+      C1
        |       |
        ME      SIB
    """

    return _build(
        ["GP", "GM", "P", "PS", "U", "US", "ME", "SIB", "C1"],
        parent_child=[
            ("GP", "P"), ("GM", "P"),
            ("GP", "U"), ("GM", "U"),
            ("P", "ME"), ("PS", "ME"),
            ("P", "SIB"), ("PS", "SIB"),
            ("U", "C1"), ("US", "C1"),
        ],
        spouses=[("GP", "GM"), ("P", "PS"), ("U", "US")],
    )


@pytest.fixture()
def store(tmp_path: Path) -> FamilyStore:
    return FamilyStore(tmp_path / "data")

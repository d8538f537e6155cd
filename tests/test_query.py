"""Unit tests for the list-query, patch and enum helpers"""

from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Optional

import pytest
from pydantic import Field

from sales_api.models.reservation import ReservationStatus
from sales_api.models.table import Table, TableStatus
from sales_api.query.enums import parse_or_ignore, enum_label
from sales_api.query.listing import (
    PageRequest,
    ListSpec,
    ContainsFilter,
    EqualsFilter,
    EnumFilter,
    parse_int,
    parse_datetime,
    DEFAULT_LIMIT,
)
from sales_api.query import patching
from sales_api.query.patching import FieldUpdate, UpdateState, apply_patch, collect_updates, resolve
from sales_api.schemas.common import CamelModel


# Enums

@pytest.mark.parametrize("raw", ["confirmed", "CONFIRMED", " Confirmed "])
def test_parse_or_ignore_matches_names_case_insensitively(raw):
    assert parse_or_ignore(ReservationStatus, raw) is ReservationStatus.CONFIRMED


@pytest.mark.parametrize("raw", [None, "", "   ", "bogus", "no show"])
def test_parse_or_ignore_returns_none(raw):
    assert parse_or_ignore(ReservationStatus, raw) is None


def test_enum_label_is_lowercase_member_name():
    assert enum_label(ReservationStatus.NO_SHOW) == "no_show"
    assert enum_label(TableStatus.AVAILABLE) == "available"
    assert enum_label(None) is None


# Listing

def test_page_request_clamps_to_defaults():
    request = PageRequest.build(0, -5)
    assert (request.page, request.limit) == (1, DEFAULT_LIMIT)
    assert request.offset == 0

    request = PageRequest.build(3, 10)
    assert request.offset == 20


def test_parse_int():
    assert parse_int("42") == 42
    assert parse_int(" 7 ") == 7
    assert parse_int("4.5") is None
    assert parse_int("") is None
    assert parse_int(None) is None


def test_parse_datetime():
    assert parse_datetime("2030-01-15T17:00:00Z") == datetime(2030, 1, 15, 17, tzinfo=timezone.utc)
    assert parse_datetime("2030-01-15T19:00:00+02:00") == datetime(2030, 1, 15, 17, tzinfo=timezone.utc)
    assert parse_datetime("tomorrow") is None
    assert parse_datetime("  ") is None


def test_filters_skip_unusable_values():
    assert ContainsFilter(Table.name).clause("  ") is None
    assert ContainsFilter(Table.name).clause(None) is None
    assert EqualsFilter(Table.capacity).clause("many") is None
    assert EnumFilter(Table.status, TableStatus).clause("broken") is None

    assert ContainsFilter(Table.name).clause("Patio") is not None
    assert EqualsFilter(Table.capacity).clause("4") is not None
    assert EnumFilter(Table.status, TableStatus).clause("Occupied") is not None


@pytest.fixture
def table_spec():
    return ListSpec(
        model=Table,
        filters={
            "name": ContainsFilter(Table.name),
            "capacity": EqualsFilter(Table.capacity),
        },
        sort_keys={"name": Table.name, "capacity": Table.capacity},
        default_sort="name",
    )


def test_where_collects_only_parsed_filters(table_spec):
    assert table_spec.where({}) == []
    assert len(table_spec.where({"name": "Bar", "capacity": "x"})) == 1
    assert len(table_spec.where({"name": "Bar", "capacity": "2", "unknown": "1"})) == 2


def test_sort_key_lookup(table_spec):
    assert table_spec.sort_column("CAPACITY") is Table.capacity
    assert table_spec.sort_column("colour") is Table.name
    assert table_spec.sort_column(None) is Table.name


@pytest.mark.parametrize(
    "direction, ascending",
    [(None, True), ("asc", True), ("ASC", True), ("desc", False), ("up", False), ("", False)],
)
def test_sort_direction(table_spec, direction, ascending):
    assert table_spec.is_ascending(direction) is ascending


def test_order_by_breaks_ties_on_id(table_spec):
    clauses = table_spec.order_by(PageRequest.build(sort_by="capacity", sort_direction="desc"))
    rendered = [str(clause) for clause in clauses]
    assert rendered == ["tables.capacity DESC", "tables.id DESC"]


# Patching

class SamplePatch(CamelModel):
    name: Optional[str] = None
    note: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=1)
    owner: Optional[int] = None
    status: Optional[str] = None


SAMPLE_RULES = {
    "name": patching.TEXT,
    "note": patching.OPTIONAL_TEXT,
    "capacity": patching.REQUIRED,
    "owner": patching.NULLABLE,
    "status": patching.enum_rule(TableStatus),
}


def sample_entity():
    return SimpleNamespace(name="T1", note="corner", capacity=4, owner=3, status=TableStatus.AVAILABLE)


def test_collect_updates_distinguishes_absent_from_null():
    updates = collect_updates(SamplePatch.model_validate({"note": None, "capacity": 6}))

    assert updates["note"].state is UpdateState.NULL
    assert updates["capacity"] == FieldUpdate(UpdateState.VALUE, 6)
    assert "name" not in updates


@pytest.mark.parametrize(
    "rule, update, expected",
    [
        (patching.REQUIRED, patching.ABSENT, (False, None)),
        (patching.REQUIRED, patching.NULL, (False, None)),
        (patching.NULLABLE, patching.NULL, (True, None)),
        (patching.TEXT, FieldUpdate.of(" "), (False, None)),
        (patching.TEXT, patching.NULL, (False, None)),
        (patching.OPTIONAL_TEXT, patching.NULL, (True, None)),
        (patching.OPTIONAL_TEXT, FieldUpdate.of("hi"), (True, "hi")),
        (patching.enum_rule(TableStatus), FieldUpdate.of("reserved"), (True, TableStatus.RESERVED)),
        (patching.enum_rule(TableStatus), FieldUpdate.of("gone"), (False, None)),
    ],
)
def test_resolve(rule, update, expected):
    assert resolve(rule, update) == expected


def test_apply_patch_empty_is_no_op():
    entity = sample_entity()
    before = vars(entity).copy()

    assert apply_patch(entity, collect_updates(SamplePatch()), SAMPLE_RULES) == []
    assert vars(entity) == before


def test_apply_patch_mixed_updates():
    entity = sample_entity()
    payload = SamplePatch.model_validate(
        {"name": "", "note": None, "capacity": None, "owner": None, "status": "OCCUPIED"}
    )

    changed = apply_patch(entity, collect_updates(payload), SAMPLE_RULES)

    assert changed == ["note", "owner", "status"]
    assert entity.name == "T1"
    assert entity.note is None
    assert entity.capacity == 4
    assert entity.owner is None
    assert entity.status is TableStatus.OCCUPIED


def test_apply_patch_skips_unchanged_values():
    entity = sample_entity()
    payload = SamplePatch.model_validate({"name": "T1", "capacity": 8})

    assert apply_patch(entity, collect_updates(payload), SAMPLE_RULES) == ["capacity"]

"""
Regression tests for filter engine invariants.
"""

from datetime import datetime
from itertools import permutations

import pytest

from zosale.components.filtering import FilterSpec, filter_records
from zosale.components.filtering._impl import build_predicates
from zosale.domain.entities import ServiceRecord

CREATED = datetime(2025, 1, 1)


def make_record(record_id, employee, vendor, status, expires, package_name="Unlimited Voice"):
    return ServiceRecord(
        id=record_id,
        ref_no=f"#ref-{record_id.lower()}",
        employee=employee,
        type="Packages",
        package_name=package_name,
        ser_number="+2519" + record_id[-3:],
        vendor=vendor,
        status=status,
        expires=expires,
        created_at=CREATED,
        updated_at=CREATED,
    )


@pytest.fixture
def records():
    return [
        make_record("SER-001", "Aman Buze", "ETHIO_TELE", "Active", "02/10/2026"),
        make_record("SER-002", "Aman Buze", "SAFARICOM", "Exp_soon", "2025-08-01"),
        make_record("SER-003", "Selam Tesfaye", "ETHIO_TELE", "Expired", "not-a-date"),
        make_record("SER-004", "Selam Tesfaye", "SAFARICOM", "Active", "25/12/2024", "Daily Data"),
        make_record("SER-005", "Dawit Alemu", "Ethio_Tele", "Active", "2027-05-05"),
    ]


SPECS = [
    FilterSpec.build(search_query="aman"),
    FilterSpec.build(vendor=["ETHIO_TELE"]),
    FilterSpec.build(status=["Active", "Expired"]),
    FilterSpec.build(date_from="2025-01-01", date_to="2026-12-31"),
    FilterSpec.build(ref_no="SER-00"),
    FilterSpec.build(employee=["Selam Tesfaye"], package_name=["Daily Data"]),
]


def ids(records):
    return [r.id for r in records]


# --- F1: Idempotence ---
@pytest.mark.parametrize("spec", SPECS)
def test_F1_filtering_is_idempotent(records, spec):
    """F1: Filtering an already filtered list changes nothing."""
    once = filter_records(records, spec)
    assert ids(filter_records(once, spec)) == ids(once)


# --- F2: Commutativity ---
def test_F2_nested_filters_commute(records):
    """F2: Applying two specs in either order gives the same result."""
    for first in SPECS:
        for second in SPECS:
            a = filter_records(filter_records(records, first), second)
            b = filter_records(filter_records(records, second), first)
            assert ids(a) == ids(b)


def test_F2_predicate_order_does_not_matter(records):
    """F2: Within one call, evaluating predicates in any order gives the same result."""
    spec = FilterSpec.build(
        search_query="ser",
        status=["Active", "Expired"],
        ser_number="+2519",
        ref_no="#REF",
        date_from="2024-01-01",
        date_to="2026-12-31",
    )
    predicates = build_predicates(spec)
    assert len(predicates) == 5

    expected = ids(filter_records(records, spec))
    assert expected == ["SER-001", "SER-003", "SER-004"]
    for ordering in permutations(predicates):
        result = [r for r in records if all(p(r) for p in ordering)]
        assert ids(result) == expected


# --- F3: Identity ---
def test_F3_empty_spec_is_identity(records):
    """F3: An empty spec keeps every record in order."""
    assert ids(filter_records(records, FilterSpec())) == ids(records)
    assert ids(filter_records(records, FilterSpec.build(ser_number="", date_to=""))) == ids(
        records
    )


# --- F4: Output is an ordered subset ---
@pytest.mark.parametrize("spec", SPECS)
def test_F4_output_is_ordered_subset(records, spec):
    """F4: Results preserve input order and never invent records."""
    result = ids(filter_records(records, spec))
    positions = [ids(records).index(record_id) for record_id in result]
    assert positions == sorted(positions)


# --- F5: Fail-open dates ---
def test_F5_unparseable_expiry_passes_date_filter(records):
    """F5: A record whose expiry cannot be read is kept by any date range."""
    result = ids(filter_records(records, FilterSpec.build(date_from="2024-01-01")))
    assert "SER-003" in result

    result = ids(filter_records(records, FilterSpec.build(date_to="1990-01-01")))
    assert result == ["SER-003"]


def test_F5_day_first_values(records):
    """F5: DD/MM/YYYY expiries land on the right day."""
    spec = FilterSpec.build(date_from="2024-12-01", date_to="2024-12-31")
    result = ids(filter_records(records, spec))
    assert result == ["SER-003", "SER-004"]


# --- F6: Case handling ---
def test_F6_text_matching_is_case_insensitive(records):
    """F6: Search and text patterns ignore case."""
    upper = ids(filter_records(records, FilterSpec.build(search_query="AMAN BUZE")))
    lower = ids(filter_records(records, FilterSpec.build(search_query="aman buze")))
    assert upper == lower == ["SER-001", "SER-002"]

    assert ids(filter_records(records, FilterSpec.build(ref_no="#REF-SER-004"))) == ["SER-004"]


def test_F6_categorical_match_is_exact(records):
    """F6: Multi-select values match exactly, including case."""
    result = ids(filter_records(records, FilterSpec.build(vendor=["ETHIO_TELE"])))
    assert result == ["SER-001", "SER-003"]

    assert ids(filter_records(records, FilterSpec.build(vendor=["ETHIO"]))) == []

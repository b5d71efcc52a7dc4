from datetime import date

import pytest

from finreport.data.errors import DuplicateId, NotFound
from finreport.data.mock_data import (
    MAX_RECORDS,
    MIN_RECORDS,
    MOCK_ORGANIZATIONS,
    PRODUCT_CATEGORIES,
    generate_report_records,
    mock_organizations,
    summarize_report,
)
from finreport.data.models import Organization
from finreport.data.repository import OrganizationRepository


def test_five_fixed_organizations():
    orgs = mock_organizations()

    assert len(orgs) == 5
    assert orgs[0].id == "11111111-1111-1111-1111-111111111111"
    assert orgs[4].created_at == "2024-01-05T16:45:00Z"


def test_mock_organizations_are_copies():
    orgs = mock_organizations()
    orgs[0].name = "changed"

    assert MOCK_ORGANIZATIONS[0]["name"] == "Romashka LLC"


def test_record_fields_within_ranges():
    records = generate_report_records(date(2024, 1, 1), date(2024, 3, 31), "org-1", seed=7)

    assert MIN_RECORDS <= len(records) <= MAX_RECORDS
    for r in records:
        assert r.category in PRODUCT_CATEGORIES
        assert 1 <= r.quantity <= 1000
        assert 100 <= r.price <= 10100
        assert 50 <= r.cost <= 8050
        assert r.profit == round(r.price - r.cost, 2)
        assert r.profitability == round(r.profit / r.cost * 100, 2)
        assert "2024-01-01" <= r.date <= "2024-03-31"
        assert r.organization_id == "org-1"


def test_product_ids_are_sequential():
    records = generate_report_records("2024-01-01", "2024-01-02", "org-1", seed=1)

    assert records[0].product_id == "PRD-000001"
    assert records[-1].product_id == f"PRD-{len(records):06d}"


def test_seed_is_reproducible():
    a = generate_report_records("2024-01-01", "2024-01-31", "org-1", seed=3)
    b = generate_report_records("2024-01-01", "2024-01-31", "org-1", seed=3)

    assert [r.name for r in a] == [r.name for r in b]
    assert [r.price for r in a] == [r.price for r in b]


def test_organization_name_resolved_from_list():
    records = generate_report_records("2024-01-01", "2024-01-01", MOCK_ORGANIZATIONS[1]["id"], mock_organizations(), seed=2)

    assert {r.organization for r in records} == {"TechnoProm JSC"}


def test_record_wire_format():
    record = generate_report_records("2024-01-01", "2024-01-01", "org-1", seed=5)[0]

    wire = record.to_api()

    assert set(wire) == {
        "id", "productId", "name", "category", "quantity", "price", "cost",
        "profit", "profitability", "date", "organization", "organizationId",
    }


def test_summarize_empty():
    assert summarize_report([]) == {"totalRecords": 0, "totalProfit": 0.0, "averageProfitability": 0.0}


def test_summarize_values():
    rows = [{"profit": 10.0, "profitability": 20.0}, {"profit": -4.5, "profitability": -10.0}]

    assert summarize_report(rows) == {"totalRecords": 2, "totalProfit": 5.5, "averageProfitability": 5.0}


def test_repository_add_and_duplicate():
    repo = OrganizationRepository()
    repo.add(Organization(id="x", name="X"))

    with pytest.raises(DuplicateId):
        repo.add(Organization(id="x", name="Other"))
    assert len(repo) == 6


def test_repository_update_keeps_identity():
    repo = OrganizationRepository(seed=[Organization(id="x", name="X", created_at="t0", updated_at="t0")])

    updated = repo.update("x", {"id": "y", "name": "Y"}, updated_at="t1")

    assert updated.id == "x"
    assert updated.name == "Y"
    assert updated.created_at == "t0"
    assert updated.updated_at == "t1"


def test_repository_remove_and_reset():
    repo = OrganizationRepository()
    repo.remove(MOCK_ORGANIZATIONS[0]["id"])
    assert len(repo) == 4

    with pytest.raises(NotFound):
        repo.remove(MOCK_ORGANIZATIONS[0]["id"])
    with pytest.raises(NotFound):
        repo.update("missing", {}, updated_at="t")

    repo.reset()
    assert len(repo) == 5

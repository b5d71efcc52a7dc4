from __future__ import annotations

import random
import time
from datetime import date, timedelta
from typing import Iterable, Optional

import pandas as pd
from faker import Faker

from finreport.data.models import Organization, ReportRecord


MOCK_ORGANIZATIONS = [
    {"id": "11111111-1111-1111-1111-111111111111", "name": 'Romashka LLC', "createdAt": "2024-01-01T10:00:00Z", "updatedAt": "2024-01-01T10:00:00Z"},
    {"id": "22222222-2222-2222-2222-222222222222", "name": 'TechnoProm JSC', "createdAt": "2024-01-02T11:30:00Z", "updatedAt": "2024-01-02T11:30:00Z"},
    {"id": "33333333-3333-3333-3333-333333333333", "name": 'Alliance LLC', "createdAt": "2024-01-03T09:15:00Z", "updatedAt": "2024-01-03T09:15:00Z"},
    {"id": "44444444-4444-4444-4444-444444444444", "name": 'Ivanov Sole Proprietor', "createdAt": "2024-01-04T14:20:00Z", "updatedAt": "2024-01-04T14:20:00Z"},
    {"id": "55555555-5555-5555-5555-555555555555", "name": 'StroyInvest CJSC', "createdAt": "2024-01-05T16:45:00Z", "updatedAt": "2024-01-05T16:45:00Z"},
]

PRODUCT_CATEGORIES = [
    "Electronics",
    "Clothing",
    "Groceries",
    "Furniture",
    "Stationery",
    "Auto parts",
    "Cosmetics",
    "Books",
    "Toys",
    "Sporting goods",
]

UNKNOWN_ORGANIZATION_NAME = "Test organization"

MIN_RECORDS = 50
MAX_RECORDS = 1000


def mock_organizations() -> list[Organization]:
    """Fresh copies of the five built-in organizations."""
    return [Organization.from_api(dict(o)) for o in MOCK_ORGANIZATIONS]


def _as_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def organization_name(organization_id: str, organizations: Iterable[Organization]) -> str:
    for org in organizations:
        if org.id == organization_id:
            return org.name
    return UNKNOWN_ORGANIZATION_NAME


def generate_report_records(
    start: date | str,
    end: date | str,
    organization_id: str,
    organizations: Iterable[Organization] = (),
    seed: Optional[int] = None,
) -> list[ReportRecord]:
    """
    Synthetic report line items for one organization and an inclusive date range.
    - Record count is uniform in [MIN_RECORDS, MAX_RECORDS]
    - `seed` makes the output reproducible (random + Faker), otherwise every call differs
    """
    rng = random.Random(seed)
    fake = Faker()
    if seed is not None:
        fake.seed_instance(seed)

    start_d, end_d = _as_date(start), _as_date(end)
    days = (end_d - start_d).days
    org_name = organization_name(organization_id, organizations)
    stamp = int(time.time() * 1000)

    rows = []
    for i in range(rng.randint(MIN_RECORDS, MAX_RECORDS)):
        price = round(rng.uniform(100, 10100), 2)
        cost = round(rng.uniform(50, 8050), 2)
        profit = round(price - cost, 2)
        rows.append(
            ReportRecord(
                id=f"{organization_id}-{i + 1}-{stamp}",
                product_id=f"PRD-{i + 1:06d}",
                name=fake.catch_phrase(),
                category=rng.choice(PRODUCT_CATEGORIES),
                quantity=rng.randint(1, 1000),
                price=price,
                cost=cost,
                profit=profit,
                profitability=round(profit / cost * 100, 2),
                date=(start_d + timedelta(days=rng.randint(0, days))).isoformat(),
                organization=org_name,
                organization_id=organization_id,
            )
        )
    return rows


def summarize_report(records: list[dict]) -> dict:
    """Totals for the report meta block."""
    if not records:
        return {"totalRecords": 0, "totalProfit": 0.0, "averageProfitability": 0.0}
    df = pd.DataFrame(records)
    return {
        "totalRecords": int(len(df)),
        "totalProfit": round(float(df["profit"].sum()), 2),
        "averageProfitability": round(float(df["profitability"].mean()), 2),
    }

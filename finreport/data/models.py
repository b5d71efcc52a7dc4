from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

import pandas as pd

from finreport.data.errors import InvalidResponseShape


def now_iso() -> str:
    """Current UTC time as `2024-01-01T10:00:00.000Z`."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# camelCase on the wire, snake_case in Python
_ORG_FIELDS = {"id": "id", "name": "name", "createdAt": "created_at", "updatedAt": "updated_at"}


@dataclass
class Organization:
    id: str
    name: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    # Anything else the server (or a patch) sent along
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Organization":
        known = {attr: payload.get(key) for key, attr in _ORG_FIELDS.items()}
        extra = {k: v for k, v in payload.items() if k not in _ORG_FIELDS}
        return cls(
            id=str(known["id"]) if known["id"] is not None else "",
            name=known["name"] or "",
            created_at=known["created_at"],
            updated_at=known["updated_at"],
            extra=extra,
        )

    def to_api(self) -> dict[str, Any]:
        out = dict(self.extra)
        out.update(
            {
                "id": self.id,
                "name": self.name,
                "createdAt": self.created_at,
                "updatedAt": self.updated_at,
            }
        )
        return out

    def merged(self, patch: dict[str, Any], updated_at: str) -> "Organization":
        """Return a copy with `patch` (wire-format keys) applied over this record."""
        data = self.to_api()
        data.update(patch)
        # the id is the identity; a patch cannot move a record
        data["id"] = self.id
        data["updatedAt"] = updated_at
        return Organization.from_api(data)

    def copy(self) -> "Organization":
        return Organization.from_api(self.to_api())


@dataclass(frozen=True)
class ReportRecord:
    id: str
    product_id: str
    name: str
    category: str
    quantity: int
    price: float
    cost: float
    profit: float
    profitability: float
    date: str
    organization: str
    organization_id: str

    def to_api(self) -> dict[str, Any]:
        d = asdict(self)
        return {
            "id": d["id"],
            "productId": d["product_id"],
            "name": d["name"],
            "category": d["category"],
            "quantity": d["quantity"],
            "price": d["price"],
            "cost": d["cost"],
            "profit": d["profit"],
            "profitability": d["profitability"],
            "date": d["date"],
            "organization": d["organization"],
            "organizationId": d["organization_id"],
        }


REPORT_COLUMNS = [
    "id",
    "productId",
    "name",
    "category",
    "quantity",
    "price",
    "cost",
    "profit",
    "profitability",
    "date",
    "organization",
    "organizationId",
]


@dataclass(frozen=True)
class Report:
    data: list[dict[str, Any]]
    meta: dict[str, Any]
    source: str  # "mock" | "api"

    @classmethod
    def from_api(cls, payload: Any) -> "Report":
        # The server may answer with a bare list of records
        if isinstance(payload, list):
            return cls(data=payload, meta={}, source="api")
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise InvalidResponseShape(payload)
        return cls(data=list(payload.get("data") or []), meta=dict(payload.get("meta") or {}), source="api")

    def to_frame(self) -> pd.DataFrame:
        if not self.data:
            return pd.DataFrame(columns=REPORT_COLUMNS)
        return pd.DataFrame(self.data)

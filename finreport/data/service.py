from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional, Union

from finreport.config import AppConfig
from finreport.data import mock_data
from finreport.data.cache import ORGANIZATIONS, CacheStore
from finreport.data.connection import CallResult, CancelToken, HttpClient, get_http_client
from finreport.data.errors import InvalidRange, InvalidResponseShape, MissingPeriod, NotFound
from finreport.data.models import Organization, Report, now_iso
from finreport.data.repository import OrganizationRepository
from finreport.data.status import ServerStatus

logger = logging.getLogger("finreport.data.service")

DateLike = Union[date, str]


@dataclass
class ClientContext:
    """Shared mutable state of one running app: cache, server status, fallback store."""

    cache: CacheStore
    status: ServerStatus = field(default_factory=ServerStatus)
    repository: OrganizationRepository = field(default_factory=OrganizationRepository)

    @classmethod
    def from_config(cls, cfg: AppConfig) -> "ClientContext":
        return cls(cache=CacheStore(duration_ms=cfg.cache_duration_ms))


def _normalize_organizations(payload: Any) -> list[Organization]:
    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, dict) and isinstance(payload.get("data"), list):
        items = payload["data"]
    else:
        raise InvalidResponseShape(payload)
    if not all(isinstance(o, dict) for o in items):
        raise InvalidResponseShape(payload)
    return [Organization.from_api(o) for o in items]


def _organization_from(payload: Any) -> Organization:
    if not isinstance(payload, dict):
        raise InvalidResponseShape(payload)
    return Organization.from_api(payload)


def _copies(orgs: list[Organization]) -> list[Organization]:
    # callers get their own records; the cache and the local store stay untouched
    return [o.copy() for o in orgs]


def _parse_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class ApiClient:
    """
    Single entry point for organization and report operations.

    Every call goes to the remote API first. When the server cannot be reached
    the client switches to demo mode: reads are answered from the local store
    or from generated data, writes are applied to the local store, and the
    status tracker flips to unavailable so views can show a banner.
    """

    def __init__(self, cfg: AppConfig, context: Optional[ClientContext] = None, http: Optional[HttpClient] = None):
        self.cfg = cfg
        self.context = context or ClientContext.from_config(cfg)
        self.http = http or get_http_client(cfg)

    @property
    def cache(self) -> CacheStore:
        return self.context.cache

    @property
    def status(self) -> ServerStatus:
        return self.context.status

    @property
    def repository(self) -> OrganizationRepository:
        return self.context.repository

    def _track(self, result: CallResult) -> CallResult:
        if result.ok:
            self.status.mark_available()
        else:
            self.status.mark_unavailable()
        return result

    # --- organizations ---

    def get_organizations(self, force_refresh: bool = False, cancel_token: Optional[CancelToken] = None) -> list[Organization]:
        cached = None if force_refresh else self.cache.get(ORGANIZATIONS)
        if cached is not None:
            logger.info("Returning cached organizations")
            return _copies(cached)

        # Cancelled raises out of here before any state is touched
        result = self.http.request("GET", "/get", cancel_token=cancel_token)
        self._track(result)

        if result.ok:
            orgs = _normalize_organizations(result.data)
            self.cache.set(ORGANIZATIONS, orgs)
            return _copies(orgs)

        logger.warning(f"API unavailable, using local organizations: {result.error}")
        orgs = _copies(self.repository.list_all())
        self.cache.set(ORGANIZATIONS, orgs)
        return _copies(orgs)

    def get_organization_by_id(self, org_id: str) -> Organization:
        for org in self.cache.get(ORGANIZATIONS) or []:
            if org.id == org_id:
                return org.copy()

        result = self._track(self.http.request("GET", f"/get/{org_id}"))
        if result.ok:
            return _organization_from(result.data)

        logger.warning(f"API unavailable, looking up organization {org_id} locally")
        org = self.repository.get(org_id)
        if org is None:
            raise NotFound(org_id)
        return org.copy()

    def create_organization(self, payload: Union[Organization, Mapping[str, Any]]) -> Organization:
        data = payload.to_api() if isinstance(payload, Organization) else dict(payload)
        stamp = now_iso()
        data["id"] = data.get("id") or str(uuid.uuid4())
        data["createdAt"] = stamp
        data["updatedAt"] = stamp
        new_org = Organization.from_api(data)

        result = self._track(self.http.request("POST", "/create", json=new_org.to_api()))
        if result.ok:
            self.clear_organizations_cache()
            return Organization.from_api(result.data) if isinstance(result.data, dict) else new_org

        logger.warning(f"API unavailable, creating organization {new_org.id} locally")
        self.repository.add(new_org.copy())
        self.clear_organizations_cache()
        return new_org

    def update_organization(self, org_id: str, patch: Mapping[str, Any]) -> Organization:
        body = dict(patch)
        body["updatedAt"] = now_iso()

        result = self._track(self.http.request("PUT", f"/update/{org_id}", json=body))
        if result.ok:
            self.clear_organizations_cache()
            return _organization_from(result.data)

        logger.warning(f"API unavailable, updating organization {org_id} locally")
        updated = self.repository.update(org_id, dict(patch), updated_at=now_iso())
        self.clear_organizations_cache()
        return updated.copy()

    def delete_organization(self, org_id: str) -> dict:
        result = self._track(self.http.request("DELETE", f"/delete/{org_id}"))
        if result.ok:
            self.clear_organizations_cache()
            return result.data if isinstance(result.data, dict) else {"success": True, "id": org_id}

        logger.warning(f"API unavailable, deleting organization {org_id} locally")
        self.repository.remove(org_id)
        self.clear_organizations_cache()
        return {"success": True, "id": org_id, "deletedAt": now_iso()}

    # --- reports ---

    def calculate_report(self, period: Mapping[str, Optional[DateLike]], organization_id: str) -> Report:
        start_raw, end_raw = period.get("startDate"), period.get("endDate")
        if not start_raw or not end_raw:
            raise MissingPeriod()
        start, end = _parse_date(start_raw), _parse_date(end_raw)
        if end < start:
            raise InvalidRange(start.isoformat(), end.isoformat())

        body = {
            "startDate": start.isoformat(),
            "endDate": end.isoformat(),
            "organizationId": organization_id,
        }
        result = self._track(self.http.request("POST", "/calculate", json=body))
        if result.ok:
            return Report.from_api(result.data)

        logger.warning("API unavailable, generating demo report data")
        return self._mock_report(start, end, organization_id)

    def _mock_report(self, start: date, end: date, organization_id: str) -> Report:
        known = self.repository.list_all()
        records = [
            r.to_api()
            for r in mock_data.generate_report_records(start, end, organization_id, known, seed=self.cfg.mock_seed)
        ]
        meta = {
            "organizationId": organization_id,
            "organizationName": mock_data.organization_name(organization_id, known),
            "period": {"startDate": start.isoformat(), "endDate": end.isoformat()},
            "generatedAt": now_iso(),
        }
        meta.update(mock_data.summarize_report(records))
        return Report(data=records, meta=meta, source="mock")

    # --- status / cache ---

    def get_server_status(self) -> bool:
        return self.status.available

    def check_server_connection(self) -> bool:
        result = self._track(self.http.request("GET", "/health", timeout_ms=self.cfg.health_timeout_ms))
        return result.ok

    def clear_organizations_cache(self) -> None:
        self.cache.clear(ORGANIZATIONS)


def get_api_client(cfg: AppConfig) -> ApiClient:
    return ApiClient(cfg)

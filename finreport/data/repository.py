"""
In-memory organization store used while the server is unreachable.

Seeded from the built-in mock organizations; changes made in fallback mode live
for as long as the owning ApiClient does (one Streamlit process), never longer.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from finreport.data.errors import DuplicateId, NotFound
from finreport.data.mock_data import mock_organizations
from finreport.data.models import Organization

logger = logging.getLogger("finreport.data.repository")


class OrganizationRepository:
    def __init__(self, seed: Optional[Iterable[Organization]] = None):
        self._seed = list(seed) if seed is not None else None
        self._items: list[Organization] = []
        self.reset()

    def reset(self) -> None:
        """Back to the initial organization list."""
        source = self._seed if self._seed is not None else mock_organizations()
        self._items = [Organization.from_api(o.to_api()) for o in source]

    def list_all(self) -> list[Organization]:
        return list(self._items)

    def get(self, org_id: str) -> Optional[Organization]:
        for org in self._items:
            if org.id == org_id:
                return org
        return None

    def add(self, org: Organization) -> Organization:
        if self.get(org.id) is not None:
            raise DuplicateId(org.id)
        self._items.append(org)
        logger.info(f"Added organization {org.id} to local store")
        return org

    def update(self, org_id: str, patch: dict[str, Any], updated_at: str) -> Organization:
        for idx, org in enumerate(self._items):
            if org.id == org_id:
                self._items[idx] = org.merged(patch, updated_at)
                logger.info(f"Updated organization {org_id} in local store")
                return self._items[idx]
        raise NotFound(org_id)

    def remove(self, org_id: str) -> Organization:
        for idx, org in enumerate(self._items):
            if org.id == org_id:
                logger.info(f"Removed organization {org_id} from local store")
                return self._items.pop(idx)
        raise NotFound(org_id)

    def __len__(self) -> int:
        return len(self._items)

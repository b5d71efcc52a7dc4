"""
Static-credential login.

There is no real authentication: the submitted pair is compared with the
values configured in the environment, and the match decides the role.
"""
from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import Optional

from finreport.config import AppConfig

ROLE_ADMIN = "admin"
ROLE_USER = "user"


@dataclass(frozen=True)
class User:
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def _matches(expected: Optional[str], given: str) -> bool:
    # unset credentials never match, not even an empty submission
    if not expected:
        return False
    return hmac.compare_digest(expected.encode("utf-8"), (given or "").encode("utf-8"))


def authenticate(cfg: AppConfig, username: str, password: str) -> Optional[User]:
    if _matches(cfg.admin_login, username) and _matches(cfg.admin_password, password):
        return User(username=ROLE_ADMIN, role=ROLE_ADMIN)
    if _matches(cfg.user_login, username) and _matches(cfg.user_password, password):
        return User(username=ROLE_USER, role=ROLE_USER)
    return None


def can_access(user: Optional[User], required_role: Optional[str] = None) -> bool:
    if user is None:
        return False
    return required_role is None or user.role == required_role

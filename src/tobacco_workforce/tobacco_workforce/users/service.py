from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .model import Account
from .repository import AccountRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    email: str
    full_name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class AuthService:
    """Use case: authenticate an account (login)."""

    def __init__(self, accounts: AccountRepository, *, fallback: Optional[Account] = None):
        self._accounts = accounts
        self._fallback = fallback

    @staticmethod
    def _password_ok(account: Account, password: str) -> bool:
        try:
            return check_password_hash(account.password_hash, password)
        except ValueError:
            # placeholder or corrupted hashes
            return False

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = require_non_empty(email, "Email").lower()
        require_non_empty(password, "Password")

        if self._fallback and self._fallback.email == email:
            account: Optional[Account] = self._fallback
        else:
            account = self._accounts.get_by_email(email)

        if not account or not account.is_active or not self._password_ok(account, password):
            logger.info("Failed login for %s", email)
            raise AuthenticationError("Invalid email or password")

        logger.info("Login %s (%s)", account.email, account.role.value)
        return SessionUser(email=account.email, full_name=account.full_name, role=account.role)

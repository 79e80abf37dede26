from __future__ import annotations

import hmac
from dataclasses import dataclass

from tokenauth.services._shared.ports import CredentialValidator


@dataclass(frozen=True, slots=True)
class StaticCredentialValidator(CredentialValidator):
    """
    Accept exactly one configured username/password pair.

    Stand-in for a real identity store. Both fields are always compared in
    constant time, and an empty field never matches.
    """

    username: str
    password: str

    def validate(self, username: str, password: str) -> bool:
        if not username or not password:
            return False
        user_ok = hmac.compare_digest(username.encode(), self.username.encode())
        pass_ok = hmac.compare_digest(password.encode(), self.password.encode())
        return user_ok and pass_ok

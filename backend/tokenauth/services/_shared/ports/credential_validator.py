from __future__ import annotations

from typing import Protocol


class CredentialValidator(Protocol):
    """
    Port for checking a submitted username/password pair.

    Implementations return a plain boolean so callers cannot tell which of the
    two fields caused a mismatch.
    """

    def validate(self, username: str, password: str) -> bool: ...

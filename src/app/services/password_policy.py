"""
Password strength policy.

A policy is any object with ``validate(password) -> Result[None]``; sign-up and
password reset both take one by injection instead of re-implementing rules.
"""

import re
from abc import ABC, abstractmethod
from typing import Callable, List, Tuple

from libs.result import Error, Result, Return

SPECIAL_CHARACTERS = "@$!%*?&"

# bcrypt ignores everything past 72 bytes
BCRYPT_MAX_BYTES = 72


class PasswordPolicy(ABC):
    @abstractmethod
    def validate(self, password: str) -> Result[None]:
        pass


class StrengthPasswordPolicy(PasswordPolicy):
    """
    Default policy:
    - non-empty, at least ``min_length`` characters, at most 72 bytes
    - at least one upper-case letter, lower-case letter, digit and
      special character from ``@$!%*?&``
    """

    def __init__(self, min_length: int = 8):
        self.min_length = min_length
        self.rules: List[Tuple[Callable[[str], bool], str]] = [
            (
                lambda p: len(p) >= self.min_length,
                f"Password must be at least {self.min_length} characters",
            ),
            (
                lambda p: len(p.encode("utf-8")) <= BCRYPT_MAX_BYTES,
                f"Password must be at most {BCRYPT_MAX_BYTES} bytes",
            ),
            (
                lambda p: re.search(r"[A-Z]", p) is not None,
                "Password must contain at least one uppercase letter",
            ),
            (
                lambda p: re.search(r"[a-z]", p) is not None,
                "Password must contain at least one lowercase letter",
            ),
            (
                lambda p: re.search(r"\d", p) is not None,
                "Password must contain at least one digit",
            ),
            (
                lambda p: any(c in SPECIAL_CHARACTERS for c in p),
                f"Password must contain at least one special character ({SPECIAL_CHARACTERS})",
            ),
        ]

    def validate(self, password: str) -> Result[None]:
        if not password:
            return Return.err(Error("WEAK_PASSWORD", "Password is required"))

        for predicate, message in self.rules:
            if not predicate(password):
                return Return.err(Error("WEAK_PASSWORD", message))

        return Return.ok(None)

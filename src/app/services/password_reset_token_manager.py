"""
Password Reset Token Manager

Issues and redeems single-use, time-bound password reset tokens.
"""

import hashlib
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Tuple

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.app.services.errors import TRANSIENT_STORE_ERRORS, store_unavailable
from src.app.services.password_hasher import BcryptPasswordHasher
from src.app.services.password_policy import PasswordPolicy
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, PasswordResetToken, User

logger = logging.getLogger(__name__)


class PasswordResetSettings(BaseModel):
    """Reset token policy values, built from configuration at wiring time"""

    token_ttl: timedelta = timedelta(hours=24)
    token_bytes: int = 32
    max_issue_attempts: int = 3
    # Whether a new token voids the user's earlier outstanding ones
    invalidate_outstanding: bool = False


@dataclass(frozen=True)
class IssuedResetToken:
    """Plaintext token for delivery plus the persisted row (which only holds its hash)"""

    token: str
    record: PasswordResetToken


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


class PasswordResetTokenManager:
    """
    Business Rules:
    - Token is a URL-safe random string (32 bytes by default), stored as SHA-256
    - Valid iff not used and now < expires_at, re-checked on every call
    - Consumption flips used exactly once via a conditional update, in the
      same transaction as the password change
    - Weak passwords are refused before the token is touched
    - Rows are never deleted here
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: BcryptPasswordHasher,
        policy: PasswordPolicy,
        settings: PasswordResetSettings,
        clock: Callable[[], datetime] = utcnow,
        token_factory: Callable[[int], str] = secrets.token_urlsafe,
    ):
        self.uow = uow
        self.hasher = hasher
        self.policy = policy
        self.settings = settings
        self.clock = clock
        self.token_factory = token_factory

    async def issue(self, user: User) -> Result[IssuedResetToken]:
        """
        Issue a fresh token for a resolved account.

        Call inside an open unit of work: the deleted flag is read from the
        given user, so it must be attached to the current session.

        Errors:
            - USER_NOT_FOUND: account is soft-deleted
            - STORE_UNAVAILABLE: store unreachable, or no unique token after
              max_issue_attempts
        """
        if user.is_deleted:
            return Return.err(Error("USER_NOT_FOUND", "User not found"))

        try:
            async with self.uow:
                now = self.clock()

                if self.settings.invalidate_outstanding:
                    voided = await self.uow.password_reset_tokens.invalidate_outstanding(user.id, now)
                    if voided:
                        logger.info("Voided %d outstanding reset tokens for user %s", voided, user.id)

                generated = await self._generate_unique_token()
                if generated is None:
                    logger.error(
                        "No unique reset token after %d attempts for user %s",
                        self.settings.max_issue_attempts,
                        user.id,
                    )
                    return Return.err(store_unavailable("Could not generate a unique reset token"))
                token, token_hash = generated

                record = await self.uow.password_reset_tokens.create(
                    PasswordResetToken(
                        user_id=user.id,
                        token_hash=token_hash,
                        used=False,
                        expires_at=now + self.settings.token_ttl,
                        created_at=now,
                    )
                )

                await self.uow.audit_events.create(
                    AuditEvent(
                        user_id=user.id,
                        action="password_reset_requested",
                        event_metadata={"token_id": str(record.id)},
                    )
                )

                await self.uow.commit()
        except TRANSIENT_STORE_ERRORS:
            logger.exception("Identity store unavailable while issuing reset token")
            return Return.err(store_unavailable())

        logger.info("Issued reset token %s for user %s", record.id, user.id)
        return Return.ok(IssuedResetToken(token=token, record=record))

    async def validate(self, token: str) -> Result[User]:
        """
        Check a token without consuming it.

        Errors:
            - TOKEN_NOT_FOUND, TOKEN_ALREADY_USED, TOKEN_EXPIRED (in that order)
            - USER_NOT_FOUND: owning account gone or soft-deleted
            - STORE_UNAVAILABLE
        """
        try:
            async with self.uow:
                checked = await self._load_valid(token, self.clock())
        except TRANSIENT_STORE_ERRORS:
            logger.exception("Identity store unavailable while validating reset token")
            return Return.err(store_unavailable())

        if checked.is_err():
            return Return.err(checked.error)
        _, user = checked.value
        return Return.ok(user)

    async def consume(self, token: str, new_password: str) -> Result[User]:
        """
        Redeem a token and replace the account's password.

        Errors:
            - WEAK_PASSWORD: policy rejected new_password; token untouched
            - TOKEN_NOT_FOUND, TOKEN_ALREADY_USED, TOKEN_EXPIRED, USER_NOT_FOUND
            - STORE_UNAVAILABLE
        """
        password_check = self.policy.validate(new_password)
        if password_check.is_err():
            return Return.err(password_check.error)

        # Hash outside the transaction to keep the row lock short
        new_password_hash = self.hasher.hash(new_password)

        try:
            async with self.uow:
                now = self.clock()
                checked = await self._load_valid(token, now)
                if checked.is_err():
                    return Return.err(checked.error)
                reset_token, user = checked.value

                claimed = await self.uow.password_reset_tokens.mark_used_if_unused(reset_token.id, now)
                if not claimed:
                    logger.warning("Reset token %s was redeemed by a concurrent request", reset_token.id)
                    return Return.err(_already_used())

                user.password_hash = new_password_hash
                user.last_modified_at = now
                await self.uow.users.update(user)

                await self.uow.audit_events.create(
                    AuditEvent(
                        user_id=user.id,
                        action="password_reset_confirmed",
                        event_metadata={"token_id": str(reset_token.id)},
                    )
                )

                await self.uow.commit()
        except TRANSIENT_STORE_ERRORS:
            logger.exception("Identity store unavailable while consuming reset token")
            return Return.err(store_unavailable())

        logger.info("Password reset completed for user %s", user.id)
        return Return.ok(user)

    async def _generate_unique_token(self):
        for attempt in range(1, self.settings.max_issue_attempts + 1):
            candidate = self.token_factory(self.settings.token_bytes)
            candidate_hash = hash_reset_token(candidate)
            if not await self.uow.password_reset_tokens.exists_by_token_hash(candidate_hash):
                return candidate, candidate_hash
            logger.warning("Reset token collision on attempt %d", attempt)
        return None

    async def _load_valid(self, token: str, now: datetime) -> Result[Tuple[PasswordResetToken, User]]:
        reset_token = await self.uow.password_reset_tokens.get_by_token_hash(hash_reset_token(token))

        if reset_token is None:
            return Return.err(Error("TOKEN_NOT_FOUND", "Invalid password reset token"))

        if not reset_token.is_valid_at(now):
            if reset_token.used:
                return Return.err(_already_used())
            return Return.err(Error("TOKEN_EXPIRED", "Password reset token has expired"))

        user = await self.uow.users.get_by_id(reset_token.user_id)
        if user is None:
            return Return.err(Error("USER_NOT_FOUND", "User not found"))

        return Return.ok((reset_token, user))


def _already_used() -> Error:
    return Error("TOKEN_ALREADY_USED", "Password reset token has already been used")

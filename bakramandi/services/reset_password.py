from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone

from bakramandi.core.errors import InvalidTokenError, ValidationError
from bakramandi.core.security import hash_password
from bakramandi.schemas.auth import ResetPasswordIn, ResetPasswordOut
from bakramandi.services.accounts import AccountStore, ResetTokenStore

log = logging.getLogger(__name__)

_LETTER = re.compile(r"[^\W\d_]")
_DIGIT = re.compile(r"\d")


def check_password_strength(payload: ResetPasswordIn, *, min_length: int) -> None:
    problems: list[dict] = []
    pw = payload.new_password
    if len(pw) < min_length:
        problems.append({"field": "new_password", "reason": f"must be at least {min_length} characters"})
    if not _LETTER.search(pw):
        problems.append({"field": "new_password", "reason": "must contain a letter"})
    if not _DIGIT.search(pw):
        problems.append({"field": "new_password", "reason": "must contain a digit"})
    if payload.confirm_password != pw:
        problems.append({"field": "confirm_password", "reason": "does not match new_password"})
    if problems:
        raise ValidationError("New password does not meet requirements", details=problems)


class ResetPasswordService:
    def __init__(
        self,
        *,
        accounts: AccountStore,
        tokens: ResetTokenStore,
        token_ttl: timedelta = timedelta(minutes=60),
        min_password_length: int = 8,
    ) -> None:
        self._accounts = accounts
        self._tokens = tokens
        self._token_ttl = token_ttl
        self._min_password_length = min_password_length

    async def issue_token(self, user_id: int) -> str:
        return await self._tokens.issue(user_id, ttl=self._token_ttl)

    async def reset_password(self, token: str | None, payload: ResetPasswordIn) -> ResetPasswordOut:
        if not token:
            raise InvalidTokenError("Reset token is missing")

        # before touching the token so a weak password never burns it
        check_password_strength(payload, min_length=self._min_password_length)

        now = datetime.now(timezone.utc)
        record = await self._tokens.get(token)
        if record is None:
            raise InvalidTokenError("Reset token is invalid")
        if record.used_at is not None:
            raise InvalidTokenError("Reset token has already been used")
        if record.is_expired(now):
            raise InvalidTokenError("Reset token has expired")

        account = await self._accounts.get(record.user_id)
        if account is None:
            raise InvalidTokenError("Reset token is invalid")

        password_hash = hash_password(payload.new_password)
        if not await self._tokens.redeem(token, password_hash=password_hash, now=now):
            # a concurrent request redeemed it first
            raise InvalidTokenError("Reset token has already been used")

        log.info("password reset: user_id=%s", account.id)
        return ResetPasswordOut()

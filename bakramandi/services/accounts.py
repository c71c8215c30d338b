from __future__ import annotations

import asyncio
import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bakramandi.core.security import generate_reset_token, hash_reset_token
from bakramandi.models.account import PasswordResetToken, User


@dataclass(frozen=True)
class Account:
    id: int
    email: str
    password_hash: str


@dataclass(frozen=True)
class ResetToken:
    token_hash: str
    user_id: int
    expires_at: datetime
    used_at: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


class AccountStore(ABC):
    @abstractmethod
    async def add(self, email: str, password_hash: str) -> Account: ...

    @abstractmethod
    async def get(self, user_id: int) -> Account | None: ...

    @abstractmethod
    async def set_password_hash(self, user_id: int, password_hash: str) -> None: ...


class ResetTokenStore(ABC):
    """
    Reset tokens keyed by their peppered hash.
    Callers pass the plain token; only the hash is kept.
    """

    def __init__(self, pepper: str | None = None) -> None:
        self._pepper = pepper

    def _hash(self, token: str) -> str:
        return hash_reset_token(token, self._pepper)

    @abstractmethod
    async def issue(self, user_id: int, *, ttl: timedelta, now: datetime | None = None) -> str:
        """Create a token for user_id and return the plain value to hand out."""

    @abstractmethod
    async def get(self, token: str) -> ResetToken | None: ...

    @abstractmethod
    async def redeem(self, token: str, *, password_hash: str, now: datetime) -> bool:
        """
        Mark the token used and store password_hash on its account, both or neither.
        False if the token was already used, expired or unknown.
        """


class InMemoryAccountStore(AccountStore):
    def __init__(self) -> None:
        self._accounts: dict[int, Account] = {}
        self._ids = itertools.count(1)

    async def add(self, email: str, password_hash: str) -> Account:
        account = Account(id=next(self._ids), email=email, password_hash=password_hash)
        self._accounts[account.id] = account
        return account

    async def get(self, user_id: int) -> Account | None:
        return self._accounts.get(user_id)

    async def set_password_hash(self, user_id: int, password_hash: str) -> None:
        self._accounts[user_id] = replace(self._accounts[user_id], password_hash=password_hash)


class InMemoryResetTokenStore(ResetTokenStore):
    def __init__(self, accounts: AccountStore, pepper: str | None = None) -> None:
        super().__init__(pepper)
        self._accounts = accounts
        self._tokens: dict[str, ResetToken] = {}
        self._lock = asyncio.Lock()

    async def issue(self, user_id: int, *, ttl: timedelta, now: datetime | None = None) -> str:
        parts = generate_reset_token(self._pepper)
        issued_at = now or datetime.now(timezone.utc)
        self._tokens[parts.hashed] = ResetToken(token_hash=parts.hashed, user_id=user_id, expires_at=issued_at + ttl)
        return parts.plain

    async def get(self, token: str) -> ResetToken | None:
        return self._tokens.get(self._hash(token))

    async def redeem(self, token: str, *, password_hash: str, now: datetime) -> bool:
        key = self._hash(token)
        async with self._lock:
            record = self._tokens.get(key)
            if record is None or record.used_at is not None or record.is_expired(now):
                return False
            # a failed write leaves the token unused
            await self._accounts.set_password_hash(record.user_id, password_hash)
            self._tokens[key] = replace(record, used_at=now)
            return True


class SqlAccountStore(AccountStore):
    def __init__(self, sessions: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = sessions

    async def add(self, email: str, password_hash: str) -> Account:
        async with self._sessions() as db:
            row = User(email=email, password_hash=password_hash)
            db.add(row)
            await db.commit()
            return Account(id=row.id, email=row.email, password_hash=row.password_hash)

    async def get(self, user_id: int) -> Account | None:
        async with self._sessions() as db:
            row = (await db.execute(select(User).where(User.id == user_id))).scalar_one_or_none()
            if row is None:
                return None
            return Account(id=row.id, email=row.email, password_hash=row.password_hash)

    async def set_password_hash(self, user_id: int, password_hash: str) -> None:
        async with self._sessions() as db:
            await db.execute(update(User).where(User.id == user_id).values(password_hash=password_hash))
            await db.commit()


class SqlResetTokenStore(ResetTokenStore):
    def __init__(self, sessions: async_sessionmaker[AsyncSession], pepper: str | None = None) -> None:
        super().__init__(pepper)
        self._sessions = sessions

    async def issue(self, user_id: int, *, ttl: timedelta, now: datetime | None = None) -> str:
        parts = generate_reset_token(self._pepper)
        issued_at = now or datetime.now(timezone.utc)
        async with self._sessions() as db:
            db.add(PasswordResetToken(user_id=user_id, token_hash=parts.hashed, expires_at=issued_at + ttl))
            await db.commit()
        return parts.plain

    async def get(self, token: str) -> ResetToken | None:
        stmt = select(PasswordResetToken).where(PasswordResetToken.token_hash == self._hash(token))
        async with self._sessions() as db:
            row = (await db.execute(stmt)).scalar_one_or_none()
            if row is None:
                return None
            return ResetToken(
                token_hash=row.token_hash,
                user_id=row.user_id,
                expires_at=row.expires_at,
                used_at=row.used_at,
            )

    async def redeem(self, token: str, *, password_hash: str, now: datetime) -> bool:
        # conditional update: only one concurrent caller can flip used_at
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.token_hash == self._hash(token),
                PasswordResetToken.used_at.is_(None),
                PasswordResetToken.expires_at > now,
            )
            .values(used_at=now)
            .returning(PasswordResetToken.user_id)
        )
        async with self._sessions() as db:
            user_id = (await db.execute(stmt)).scalar_one_or_none()
            if user_id is None:
                return False
            await db.execute(update(User).where(User.id == user_id).values(password_hash=password_hash))
            # one commit for both rows; leaving the block without it rolls back
            await db.commit()
            return True

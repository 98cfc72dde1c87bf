"""
jobly.auth.passwords

Password hashing helpers (passlib / bcrypt).
"""

from __future__ import annotations

from passlib.context import CryptContext


def build_crypt_context(*, rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(ctx: CryptContext, password: str) -> str:
    return ctx.hash(password)


def verify_password(ctx: CryptContext, password: str, hashed: str) -> bool:
    return ctx.verify(password, hashed)

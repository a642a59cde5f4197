"""Credential Policy: password strength checks and one-way hashing.

Invariants:
    - Plaintext passwords are never stored, logged, or returned
    - Character classes use Unicode general categories, not ASCII ranges
    - Length is counted in characters, not encoded bytes

Design Decisions:
    - bcrypt directly over passlib: passlib's backend probe breaks on bcrypt >= 4.1
    - Pure functions: no IO, callers decide whether to run hashing off the event loop
"""

import unicodedata

import bcrypt

from user_service.core.errors import (
    HashingFailureError,
    PasswordTooShortError,
    WeakPasswordFormatError,
)

MIN_PASSWORD_LENGTH = 8
DEFAULT_ROUNDS = 10


def validate_password(password: str) -> None:
    """Raise a PasswordPolicyError unless the password is strong enough."""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise PasswordTooShortError(MIN_PASSWORD_LENGTH)

    lower = upper = number = symbol = False
    for ch in password:
        category = unicodedata.category(ch)
        if category == "Ll":
            lower = True
        elif category == "Lu":
            upper = True
        elif category[0] == "N":
            number = True
        elif category[0] in ("S", "P"):
            symbol = True

    if not (lower and upper and number and symbol):
        raise WeakPasswordFormatError()


def hash_password(plaintext: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Salted bcrypt hash of the password."""
    try:
        salt = bcrypt.gensalt(rounds=rounds)
        hashed = bcrypt.hashpw(plaintext.encode("utf-8"), salt)
    except ValueError as e:
        raise HashingFailureError(str(e)) from e
    return hashed.decode("utf-8")


def verify_password(plaintext: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False

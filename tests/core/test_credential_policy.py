"""Credential Policy: tests for password strength rules and bcrypt hashing.

Tests cover:
    - Anything shorter than 8 characters fails as too short, whatever it contains
    - Missing any of lower/upper/number/symbol fails as weak format
    - Character classes follow Unicode categories, not ASCII ranges
    - Hashes are salted, verifiable, and never equal the plaintext
    - bcrypt misconfiguration surfaces as HashingFailureError
"""

import pytest

from user_service.core.credential_policy import (
    MIN_PASSWORD_LENGTH,
    hash_password,
    validate_password,
    verify_password,
)
from user_service.core.errors import (
    HashingFailureError,
    PasswordPolicyError,
    PasswordTooShortError,
    WeakPasswordFormatError,
)


# ─── validate_password: length ──────────────────────────────────

@pytest.mark.parametrize("password", ["", "a", "Test12", "Ab1!xyz", "short1"])
def test_short_passwords_fail_as_too_short(password):
    with pytest.raises(PasswordTooShortError):
        validate_password(password)


def test_too_short_wins_over_weak_format():
    # 7 chars, also missing a symbol
    with pytest.raises(PasswordTooShortError):
        validate_password("Abcdef1")


def test_length_is_counted_in_characters_not_bytes():
    # 7 characters, 10 UTF-8 bytes
    with pytest.raises(PasswordTooShortError):
        validate_password("Ab1!ééé")


def test_exactly_minimum_length_is_accepted():
    password = "Abcde1!x"
    assert len(password) == MIN_PASSWORD_LENGTH
    validate_password(password)


def test_too_short_error_message():
    with pytest.raises(PasswordTooShortError) as exc_info:
        validate_password("short")
    assert exc_info.value.message == (
        "password is too short, should be at least 8 symbols"
    )
    assert exc_info.value.code == "PASSWORD_TOO_SHORT"
    assert exc_info.value.http_status == 400


# ─── validate_password: character classes ───────────────────────

@pytest.mark.parametrize("password", [
    "abcdefgh1!",    # no upper
    "ABCDEFGH1!",    # no lower
    "Abcdefghi!",    # no number
    "Abcdefgh12",    # no symbol
    "abcdefghij",    # only lower
    "Abcdefg1 ",     # space is not a symbol
])
def test_missing_character_class_fails_as_weak_format(password):
    with pytest.raises(WeakPasswordFormatError) as exc_info:
        validate_password(password)
    assert exc_info.value.code == "PASSWORD_WEAK_FORMAT"


@pytest.mark.parametrize("password", [
    "Str0ng!Pwd",
    "Test123.",
    "Abcdefg1+",     # math symbol (Sm)
    "Abcdefg1€",     # currency symbol (Sc)
    "Abcdefg1~",
])
def test_all_four_classes_pass(password):
    validate_password(password)


@pytest.mark.parametrize("password", [
    "Ünïcødé1€",     # non-ASCII letters
    "Пароль1!",      # Cyrillic
    "Abcdefg٣!",     # Arabic-Indic digit (Nd)
    "Abcdefg²!",     # superscript two (No)
    "Abcdefg1«",     # guillemet (Pi)
])
def test_unicode_categories_are_recognised(password):
    validate_password(password)


def test_policy_errors_share_a_base_class():
    for password in ("short", "abcdefghij"):
        with pytest.raises(PasswordPolicyError):
            validate_password(password)


# ─── hash_password / verify_password ────────────────────────────

def test_hash_is_bcrypt_and_not_plaintext():
    hashed = hash_password("Str0ng!Pwd", rounds=4)
    assert hashed != "Str0ng!Pwd"
    assert hashed.startswith("$2b$04$")


def test_hash_is_salted():
    assert hash_password("Str0ng!Pwd", rounds=4) != hash_password("Str0ng!Pwd", rounds=4)


def test_verify_accepts_matching_password():
    hashed = hash_password("Str0ng!Pwd", rounds=4)
    assert verify_password("Str0ng!Pwd", hashed) is True


def test_verify_rejects_other_password():
    hashed = hash_password("Str0ng!Pwd", rounds=4)
    assert verify_password("Str0ng!Pwe", hashed) is False


def test_verify_returns_false_for_malformed_hash():
    assert verify_password("Str0ng!Pwd", "not-a-bcrypt-hash") is False


@pytest.mark.parametrize("rounds", [3, 32])
def test_invalid_cost_factor_raises_hashing_failure(rounds):
    with pytest.raises(HashingFailureError) as exc_info:
        hash_password("Str0ng!Pwd", rounds=rounds)
    assert exc_info.value.code == "HASHING_FAILURE"
    assert exc_info.value.http_status == 500

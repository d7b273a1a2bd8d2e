"""Tests for reading the subject claim out of API keys."""

import base64

import pytest

from injector.services.tokens import extract_subject
from tests.conftest import make_token

FALLBACK = "8c623e46-4154-4262-9507-d911fa2f67a1"


def test_extract_subject_reads_sub_claim():
    """A well-formed token yields its sub claim."""
    token = make_token({"sub": "0f3b6a1e-user", "iss": "n8n"})
    assert extract_subject(token, FALLBACK) == "0f3b6a1e-user"


def test_extract_subject_accepts_padded_standard_base64():
    """Payloads encoded with the standard alphabet and padding still decode."""
    payload = base64.b64encode(b'{"sub": "padded-user"}').decode("ascii")
    assert payload.endswith("=")
    assert extract_subject(f"header.{payload}.sig", FALLBACK) == "padded-user"


def test_extract_subject_without_sub_uses_fallback():
    token = make_token({"iss": "n8n", "aud": "public-api"})
    assert extract_subject(token, FALLBACK) == FALLBACK


def test_extract_subject_with_empty_sub_uses_fallback():
    token = make_token({"sub": ""})
    assert extract_subject(token, FALLBACK) == FALLBACK


def test_extract_subject_stringifies_non_string_sub():
    token = make_token({"sub": 42})
    assert extract_subject(token, FALLBACK) == "42"


@pytest.mark.parametrize(
    "token",
    [
        "",
        "not-a-jwt",
        "header.%%%.signature",
        "header.bm90IGpzb24.signature",  # "not json"
        "header.//79.signature",  # invalid UTF-8
        "header.WzEsIDJd.signature",  # JSON array
        "header.a.signature",
        # deeply nested JSON array
        f"header.{base64.urlsafe_b64encode(b'[' * 5000).decode()}.signature",
    ],
)
def test_extract_subject_malformed_token_uses_fallback(token):
    """Any malformed token falls back to the fixed user ID."""
    assert extract_subject(token, FALLBACK) == FALLBACK

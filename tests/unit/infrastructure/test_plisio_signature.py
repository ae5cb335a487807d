"""Unit tests for Plisio callback signature verification."""
import hashlib
import hmac

import pytest

from core.infrastructure.payments.plisio.signature import (
    canonical_string,
    compute_signature,
    verify_signature,
)

SECRET = "s3cr3t"


def test_canonical_string_sorts_keys_and_skips_verify_hash():
    payload = {"status": "completed", "amount": "0.1", "txn_id": "abc", "verify_hash": "zzz"}

    assert canonical_string(payload) == "amount=0.1&status=completed&txn_id=abc"


def test_signature_is_hmac_sha1_of_canonical_string():
    payload = {"txn_id": "abc", "status": "pending"}
    expected = hmac.new(SECRET.encode(), b"status=pending&txn_id=abc", hashlib.sha1).hexdigest()

    assert compute_signature(payload, SECRET) == expected


def test_values_render_like_the_gateway():
    payload = {"a": None, "b": True, "c": 2.0, "d": 1.5, "e": 3}

    assert canonical_string(payload) == "a=null&b=true&c=2&d=1.5&e=3"


def test_valid_signature_accepted():
    payload = {"txn_id": "abc", "status": "completed", "amount": "0.5"}
    signature = compute_signature(payload, SECRET)

    assert verify_signature(payload, signature, SECRET)
    assert verify_signature(payload, signature.upper(), SECRET)


@pytest.mark.parametrize("field, value", [("status", "pending"), ("amount", "5.0"), ("txn_id", "other")])
def test_any_altered_field_is_rejected(field, value):
    payload = {"txn_id": "abc", "status": "completed", "amount": "0.5"}
    signature = compute_signature(payload, SECRET)

    tampered = dict(payload, **{field: value})

    assert not verify_signature(tampered, signature, SECRET)


def test_added_field_is_rejected():
    payload = {"txn_id": "abc", "status": "completed"}
    signature = compute_signature(payload, SECRET)

    assert not verify_signature(dict(payload, extra="1"), signature, SECRET)


@pytest.mark.parametrize("signature", [None, ""])
def test_missing_signature_is_rejected(signature):
    assert not verify_signature({"txn_id": "abc"}, signature, SECRET)


def test_wrong_secret_is_rejected():
    payload = {"txn_id": "abc"}
    assert not verify_signature(payload, compute_signature(payload, "other"), SECRET)


def test_empty_secret_never_verifies():
    payload = {"txn_id": "abc"}
    assert not verify_signature(payload, compute_signature(payload, ""), "")

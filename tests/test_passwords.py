import pytest

from myorder.auth.passwords import hash_password, verify_password


def test_hash_then_verify_same_password():
    h = hash_password("correct horse")
    assert h != "correct horse"
    assert verify_password(h, "correct horse")


@pytest.mark.parametrize("candidate", ["correct hors", "Correct horse", "correct horse ", ""])
def test_verify_rejects_other_passwords(candidate):
    h = hash_password("correct horse")
    assert not verify_password(h, candidate)


def test_hashes_are_salted():
    assert hash_password("pw") != hash_password("pw")


def test_malformed_hash_is_a_mismatch():
    assert not verify_password("not-a-hash", "pw")
    assert not verify_password("", "pw")


def test_empty_password_cannot_be_hashed():
    with pytest.raises(ValueError):
        hash_password("")

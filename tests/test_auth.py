import pytest

from app.models.user import UserRole
from app.seed import seed_admin
from app.services.auth import create_access_token, decode_token, get_password_hash, verify_password
from app.services.errors import AuthenticationFailed


def test_password_hash_roundtrip():
    hashed = get_password_hash("correct-horse")
    assert hashed != "correct-horse"
    assert verify_password("correct-horse", hashed)
    assert not verify_password("wrong-horse", hashed)


def test_malformed_stored_hash_does_not_verify():
    assert not verify_password("anything", "not-a-bcrypt-hash")


def test_token_carries_subject_and_role(settings):
    token = create_access_token(settings, 42, "a@example.com", UserRole.property_owner)
    payload = decode_token(settings, token)
    assert payload["sub"] == 42
    assert payload["role"] == "property_owner"


def test_expired_token(settings):
    expired = settings.model_copy(update={"jwt_access_token_expire_minutes": -1})
    token = create_access_token(expired, 1, "a@example.com", UserRole.guest)
    with pytest.raises(AuthenticationFailed, match="expired"):
        decode_token(settings, token)


def test_token_signed_with_other_secret(settings):
    other = settings.model_copy(update={"jwt_secret_key": "someone-else"})
    token = create_access_token(other, 1, "a@example.com", UserRole.guest)
    with pytest.raises(AuthenticationFailed):
        decode_token(settings, token)


@pytest.mark.parametrize("token", ["", "abc.def.ghi"])
def test_garbage_tokens(settings, token):
    with pytest.raises(AuthenticationFailed):
        decode_token(settings, token)


def test_seed_admin_is_idempotent(db, settings):
    assert seed_admin(db, settings) is None  # no password configured

    configured = settings.model_copy(update={"admin_password": "bootstrap-pass"})
    admin = seed_admin(db, configured)
    assert admin.role == UserRole.admin
    assert verify_password("bootstrap-pass", admin.hashed_password)
    assert seed_admin(db, configured).id == admin.id

import pytest

from travel_planner_api.app.core.config import Settings
from travel_planner_api.app.core.errors import UnauthenticatedError
from travel_planner_api.app.core.security import HmacCredentialProvider, Principal


@pytest.fixture
def provider():
    return HmacCredentialProvider(Settings(secret_key="unit-secret", password_hash_iterations=1000))


def test_password_hash_verifies(provider):
    hashed = provider.hash_password("s3cret")
    assert "$" in hashed
    assert provider.verify_password("s3cret", hashed)
    assert not provider.verify_password("wrong", hashed)


def test_password_hashes_are_salted(provider):
    assert provider.hash_password("same") != provider.hash_password("same")


def test_malformed_hash_does_not_verify(provider):
    assert not provider.verify_password("anything", "not-a-hash")
    assert not provider.verify_password("anything", "zz$zz")


def test_token_carries_principal(provider):
    principal = Principal(id="0b7c9c1e-4a43-4cf4-9f5e-1d2b3c4d5e6f", email="jane@example.com")
    assert provider.verify_token(provider.issue_token(principal)) == principal


def test_expired_token_is_rejected(provider):
    token = provider.issue_token(Principal(id="u1", email="jane@example.com"), expires_delta=-10)
    with pytest.raises(UnauthenticatedError, match="Token has expired."):
        provider.verify_token(token)


def test_token_signed_with_other_key_is_invalid(provider):
    other = HmacCredentialProvider(Settings(secret_key="other-secret"))
    token = other.issue_token(Principal(id="u1", email="jane@example.com"))
    with pytest.raises(UnauthenticatedError, match="Token is invalid."):
        provider.verify_token(token)


@pytest.mark.parametrize("token", ["garbage", "a.b", "a.b.c", ""])
def test_malformed_token_is_invalid(provider, token):
    with pytest.raises(UnauthenticatedError, match="Token is invalid."):
        provider.verify_token(token)


def test_unauthenticated_error_maps_to_401():
    assert UnauthenticatedError("Token is invalid.").status_code == 401

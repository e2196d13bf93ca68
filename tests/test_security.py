"""Password hashing and signed tokens"""
from dealership.config import AuthSettings
from dealership.models.user import UserRole
from dealership.utils.security import (
    REFRESH,
    generate_token,
    generate_token_pair,
    hash_password,
    verify_password,
    verify_token,
)


def test_password_hash_roundtrip():
    password_hash = hash_password('secret123')

    assert password_hash.startswith('$2b$')
    assert password_hash != hash_password('secret123')
    assert verify_password(password_hash, 'secret123')
    assert not verify_password(password_hash, 'secret124')
    assert not verify_password('garbage', 'secret123')


def test_token_pair(auth_settings):
    tokens = generate_token_pair(auth_settings, UserRole.CUSTOMER, 7)

    assert verify_token(auth_settings, tokens.access_token) == (UserRole.CUSTOMER, 7)
    assert verify_token(auth_settings, tokens.refresh_token) is None
    assert verify_token(auth_settings, tokens.refresh_token, REFRESH) == (UserRole.CUSTOMER, 7)


def test_tampered_token(auth_settings):
    token = generate_token(auth_settings, UserRole.CUSTOMER, 7)

    assert verify_token(auth_settings, token.replace('customer:7', 'manager:7')) is None
    assert verify_token(AuthSettings(secret_key='other'), token) is None
    assert verify_token(auth_settings, 'not-a-token') is None


def test_expired_token():
    settings = AuthSettings(secret_key='test-secret', access_token_ttl=-10)

    assert verify_token(settings, generate_token(settings, UserRole.MANAGER, 1)) is None

# dealership/utils/security.py
import hashlib
import hmac
import time
from typing import Optional, Tuple
import bcrypt
from ..config import AuthSettings
from ..models.user import TokenPair, UserRole

ACCESS = "access"
REFRESH = "refresh"


def _password_bytes(password: str) -> bytes:
    # bcrypt reads at most 72 bytes
    return password.encode('utf-8')[:72]


def hash_password(password: str) -> str:
    """bcrypt hash with a fresh salt"""
    hashed = bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt())
    return hashed.decode('utf-8')


def verify_password(password_hash: str, password: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode('utf-8'))
    except ValueError:
        return False


def _sign(secret_key: str, message: str) -> str:
    return hmac.new(
        secret_key.encode(),
        message.encode(),
        hashlib.sha256
    ).hexdigest()


def generate_token(settings: AuthSettings, role: UserRole, user_id: int,
                   kind: str = ACCESS) -> str:
    """Signed `role:user_id:kind:expires_at:signature` token"""
    ttl = settings.access_token_ttl if kind == ACCESS else settings.refresh_token_ttl
    expires_at = int(time.time()) + ttl
    message = f"{role.value}:{user_id}:{kind}:{expires_at}"
    return f"{message}:{_sign(settings.secret_key, message)}"


def generate_token_pair(settings: AuthSettings, role: UserRole, user_id: int) -> TokenPair:
    return TokenPair(
        access_token=generate_token(settings, role, user_id, ACCESS),
        refresh_token=generate_token(settings, role, user_id, REFRESH),
    )


def verify_token(settings: AuthSettings, token: str,
                 kind: str = ACCESS) -> Optional[Tuple[UserRole, int]]:
    """Return (role, user_id) for a valid, unexpired token of the given kind"""
    try:
        message, signature = token.rsplit(':', 1)
        role, user_id, token_kind, expires_at = message.split(':')

        if not hmac.compare_digest(signature, _sign(settings.secret_key, message)):
            return None

        if token_kind != kind or int(expires_at) < int(time.time()):
            return None

        return UserRole(role), int(user_id)

    except ValueError:
        return None

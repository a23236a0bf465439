"""Auth service (JWT, password hashing). Settings are passed in, never read from a global."""
from datetime import datetime, timedelta, timezone
import bcrypt
import jwt
from app.config import Settings
from app.models.user import UserRole
from app.services.errors import AuthenticationFailed


def _pwd_bytes(password: str, max_len: int = 72) -> bytes:
    return password.encode("utf-8")[:max_len]


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_pwd_bytes(plain), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(_pwd_bytes(password), bcrypt.gensalt()).decode("utf-8")


def create_access_token(settings: Settings, user_id: int, email: str, role: UserRole) -> str:
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=settings.jwt_access_token_expire_minutes)
    # PyJWT expects "sub" to be a string
    payload = {"sub": str(user_id), "email": email, "role": role.value, "iat": now, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(settings: Settings, token: str) -> dict:
    """Decode and verify a JWT; raises AuthenticationFailed on anything unusable."""
    if not token or not isinstance(token, str):
        raise AuthenticationFailed("Missing token")
    try:
        payload = jwt.decode(
            token.strip(),
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationFailed("Token expired") from e
    except jwt.PyJWTError as e:
        raise AuthenticationFailed("Invalid token") from e
    try:
        payload["sub"] = int(payload.get("sub"))
    except (TypeError, ValueError) as e:
        raise AuthenticationFailed("Invalid token subject") from e
    return payload

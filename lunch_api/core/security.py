from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from lunch_api.core.config import Settings
from lunch_api.core.constants import AuthConfig

# Configure password context with proper bcrypt settings
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=AuthConfig.BCRYPT_ROUNDS,
    bcrypt__default_ident="2b"
)


# Password hashing
def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


class InvalidTokenError(Exception):
    """Raised when a bearer token is malformed, expired or wrongly signed."""


class TokenPayload(BaseModel):
    """Claims carried by an access token."""
    user_id: Optional[int] = None
    sub: str


class TokenService:
    """Issues and verifies signed access tokens.

    Stateless: the result depends only on the configured secret, the payload
    and the clock. Whether the subject still exists is for the caller to check.
    """

    def __init__(self, settings: Settings):
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.expires_delta = timedelta(minutes=settings.jwt_expiry_minutes)

    def issue(self, user_id: int, user_name: str, expires_delta: Optional[timedelta] = None) -> str:
        expire = datetime.now(timezone.utc) + (expires_delta or self.expires_delta)
        to_encode = {"user_id": user_id, "sub": user_name, "exp": expire}
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenPayload:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        subject = payload.get("sub")
        if not subject:
            raise InvalidTokenError("Token has no subject")

        user_id = payload.get("user_id")
        if user_id is not None and not isinstance(user_id, int):
            raise InvalidTokenError("Token user_id is not an integer")

        return TokenPayload(user_id=user_id, sub=subject)

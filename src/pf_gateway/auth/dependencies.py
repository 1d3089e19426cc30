"""FastAPI dependency: get_current_user_id.

Usage in any protected router:
    from src.pf_gateway.auth.dependencies import get_current_user_id

    @router.get("/protected")
    async def protected(user_id: int = Depends(get_current_user_id)):
        ...
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_common.database import get_db_session, store_errors
from src.pf_common.errors import InvalidCredentialsError
from src.pf_gateway.auth.jwt_handler import decode_access_token
from src.pf_user.infrastructure.persistence import UserRepository

# Tokens are issued by the identity provider; tokenUrl only feeds Swagger UI.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")

# Reusable 401 exception with WWW-Authenticate header (OAuth2 standard)
_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)

_users = UserRepository()


async def get_current_user_id(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> int:
    """Validate the Bearer token and return the id of an existing user.

    Raises HTTP 401 if the token is missing, invalid, expired, or its subject
    no longer exists.
    """
    try:
        payload = decode_access_token(token)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None

    try:
        user_id = int(payload.get("sub", ""))
    except ValueError:
        raise _CREDENTIALS_EXCEPTION from None

    with store_errors():
        exists = await _users.exists(db, user_id)
    if not exists:
        raise _CREDENTIALS_EXCEPTION
    return user_id

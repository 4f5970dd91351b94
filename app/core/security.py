from typing import Mapping
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError
from app.core.config import settings
from app.core.errors import UnauthorizedError

http_bearer = HTTPBearer(auto_error=False)

def get_bearer_token(headers: Mapping[str, str]) -> str:
    auth = headers.get("authorization") or headers.get("Authorization")
    if not auth:
        raise UnauthorizedError("Authorization header is missing")
    scheme, _, token = auth.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Malformed authorization header")
    return token.strip()

def validate_jwt(token: str, secret: str) -> str:
    """Return the user id carried in ``sub``; any decode failure is Unauthorized."""
    options = {"verify_aud": settings.REQUIRED_AUDIENCE is not None}
    try:
        payload = jwt.decode(
            token, secret,
            algorithms=[settings.JWT_ALG],
            audience=settings.REQUIRED_AUDIENCE,
            options=options,
        )
    except ExpiredSignatureError:
        raise UnauthorizedError("Token expired")
    except JWTError as e:
        raise UnauthorizedError(f"Invalid token: {e}")
    user_id = payload.get("sub") or payload.get("user_id")
    if not user_id:
        raise UnauthorizedError("Token has no subject")
    return str(user_id)

async def get_current_user_id(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(http_bearer),
) -> str:
    # re-validated on every request; nothing is cached
    token = creds.credentials if creds is not None else get_bearer_token(request.headers)
    return validate_jwt(token, settings.JWT_SECRET)

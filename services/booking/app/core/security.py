from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.core.config import settings

bearer_scheme = HTTPBearer(auto_error=False)

ROLE_CUSTOMER = "user"
ROLE_RESTAURANT = "restaurant"


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    """Validate the bearer token issued by the Auth service.

    Returns the decoded JWT payload with ``userId`` normalized to an integer.
    Raises an HTTP 401 error when the token is missing or invalid.
    """

    if credentials is None or not credentials.scheme or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = credentials.credentials

    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
    except JWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    user_id = payload.get("userId", payload.get("sub"))
    try:
        payload["userId"] = int(user_id)
    except (TypeError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token does not identify a user",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    return payload


def _require_role(payload: dict, role_name: str) -> int:
    if payload.get("roleName") != role_name:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Only '{role_name}' accounts can access this resource",
        )
    return int(payload["userId"])


def get_current_customer_id(current_user: dict = Depends(get_current_user)) -> int:
    return _require_role(current_user, ROLE_CUSTOMER)


def get_current_restaurant_id(current_user: dict = Depends(get_current_user)) -> int:
    return _require_role(current_user, ROLE_RESTAURANT)


__all__ = [
    "ROLE_CUSTOMER",
    "ROLE_RESTAURANT",
    "get_current_user",
    "get_current_customer_id",
    "get_current_restaurant_id",
]

# storefront/utils/check_roles.py
from fastapi import HTTPException
from functools import wraps


def has_role(user, *roles: str) -> bool:
    return user is not None and (user.role or "").lower() in {r.lower() for r in roles}


def is_admin(user) -> bool:
    return has_role(user, "admin")


def require_role(*roles: str):
    """
    Route decorator. The route must declare ``_user=Depends(get_current_user)``;
    the resolved user is checked here before the route body runs.
    """
    def decorator(route):
        @wraps(route)
        async def wrapper(*args, _user=None, **kwargs):
            if _user is None:
                raise HTTPException(status_code=401, detail="Not authenticated")
            if not has_role(_user, *roles):
                raise HTTPException(status_code=403, detail="Permission denied")
            return await route(*args, _user=_user, **kwargs)
        return wrapper
    return decorator


admin_only = require_role("admin")

"""
Placeholder role check for admin routes.

The role comes from the ``X-Role`` request header. This is not
authentication: it only keeps anonymous callers away from write routes
until a real identity layer sits in front of the service.
"""

import logging

from fastapi import Depends, Request

from galatide.config import settings
from galatide.exceptions import PermissionDeniedError
from galatide.models.user import UserRole

logger = logging.getLogger(__name__)

ROLE_HEADER = "X-Role"
ANONYMOUS = "ANON"

EDIT_ROLES = (UserRole.ADMIN, UserRole.EDITOR)
ADMIN_ROLES = (UserRole.ADMIN,)


def get_request_role(request: Request) -> str:
    role = request.headers.get(ROLE_HEADER, "").strip().upper()
    if role in (UserRole.ADMIN.value, UserRole.EDITOR.value):
        return role
    if settings.admin_bypass:
        return UserRole.ADMIN.value
    return ANONYMOUS


def require_role(*roles: UserRole, action: str = "perform this action"):
    allowed = {role.value for role in roles}

    async def checker(role: str = Depends(get_request_role)) -> str:
        if role in allowed:
            return role
        logger.warning(f"Role '{role}' denied: {action}")
        raise PermissionDeniedError(role, action)

    return checker


can_edit = require_role(*EDIT_ROLES, action="edit content")
can_admin = require_role(*ADMIN_ROLES, action="delete or publish content")

"""
Authentication for administrators.

``login`` checks a username/password pair and issues a bearer token;
``bootstrap`` makes sure the default administrator exists when the
application starts.  A failed login never tells the caller whether
the username or the password was wrong.
"""

import logging
from typing import Optional

from cable_network_api.app.core.config import settings
from cable_network_api.app.core.exceptions import UnauthorizedError, ValidationError
from cable_network_api.app.core.security import create_access_token, verify_password
from cable_network_api.app.schemas.admin import LoginResponse
from cable_network_api.app.services.admin_service import AdminService

logger = logging.getLogger(__name__)


class AuthService:
    """Login and default-admin bootstrap."""

    admins = AdminService

    @classmethod
    async def login(cls, username: Optional[str], password: Optional[str]) -> LoginResponse:
        """Authenticate an administrator and issue a 24 hour token.

        The token carries the ``id``, ``username`` and ``role`` claims.
        Raises ``ValidationError`` if either credential is empty and
        ``UnauthorizedError`` ("Invalid credentials") otherwise.
        """
        if not username or not password:
            raise ValidationError("Username and password required")

        admin = await cls.admins.get_by_username(username)
        if admin is None or not verify_password(password, admin["password"]):
            logger.info("Failed login for %r", username)
            raise UnauthorizedError("Invalid credentials")

        token = create_access_token(
            {"id": admin["id"], "username": admin["username"], "role": admin["role"]}
        )
        logger.info("Admin %s logged in", admin["id"])
        return LoginResponse(
            message="Login successful",
            token=token,
            user=cls.admins.public_profile(admin),
        )

    @classmethod
    async def bootstrap(cls) -> bool:
        """Create the default administrator if it does not exist yet.

        Returns ``True`` when an account was created.  Safe to call on
        every start.
        """
        username = settings.default_admin_username
        if await cls.admins.get_by_username(username) is not None:
            return False
        await cls.admins.create(username, settings.default_admin_password)
        logger.info("Default admin created: username=%s", username)
        return True

"""Auth service — registration and login.

Learn: Registration doesn't pre-check the name. It inserts and lets
the UNIQUE(name) constraint decide, so two concurrent registrations
for the same name end with exactly one user. Login never reveals
whether the name or the password was wrong.
"""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from todogate.auth.jwt import TokenService
from todogate.auth.password import hash_password, verify_password
from todogate.db.models import User
from todogate.db.store import CredentialStore, DuplicateUserError

logger = structlog.get_logger()

# Checked when the name is unknown. Same cost factor as stored hashes, so
# an unknown name and a wrong password take the same time.
_DUMMY_HASH = hash_password("not-a-real-password")


class InvalidCredentialsError(Exception):
    """Raised when login fails, whatever the cause."""


class AuthService:
    """Business logic for account registration and token issuance."""

    def __init__(self, db: AsyncSession, tokens: TokenService):
        self.db = db
        self.store = CredentialStore(db)
        self.tokens = tokens

    async def register(self, name: str, password: str) -> User:
        """Create a user. Raises DuplicateUserError if the name is taken."""
        user = User(name=name, password_hash=hash_password(password))
        try:
            user = await self.store.insert_user(user)
        except DuplicateUserError:
            logger.info("auth.register_conflict", name=name)
            raise
        logger.info("auth.registered", user_id=user.id, name=name)
        return user

    async def login(self, name: str, password: str) -> tuple[User, str]:
        """Check credentials and issue a token.

        Returns (user, token). Raises InvalidCredentialsError on an
        unknown name or a wrong password alike.
        """
        user = await self.store.find_user_by_name(name)
        if user is None:
            verify_password(password, _DUMMY_HASH)
            logger.warning("auth.login_failed", name=name)
            raise InvalidCredentialsError()

        if not verify_password(password, user.password_hash):
            logger.warning("auth.login_failed", name=name)
            raise InvalidCredentialsError()

        token = self.tokens.issue(user)
        logger.info("auth.login", user_id=user.id)
        return user, token

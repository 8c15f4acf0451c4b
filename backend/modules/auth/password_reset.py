"""
Password reset with emailed verification codes.

A code is bound to one email, expires after a configurable TTL and is
deleted as soon as it is redeemed or guessed wrong, so it can only be
used once.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from modules.users.exceptions import UserNotFoundError
from modules.users.interfaces import IUserRepository
from .exceptions import InvalidResetCodeError
from .interfaces import IResetCodeRepository
from .notifier import ICodeSender
from .passwords import PasswordHasher

logger = logging.getLogger(__name__)

CODE_DIGITS = 6


def generate_code(digits: int = CODE_DIGITS) -> str:
    """Random numeric code, zero padded."""
    return f"{secrets.randbelow(10 ** digits):0{digits}d}"


class PasswordResetService:
    """Issues and redeems password reset codes."""

    def __init__(
        self,
        users: IUserRepository,
        codes: IResetCodeRepository,
        hasher: PasswordHasher,
        sender: ICodeSender,
        code_ttl: timedelta = timedelta(minutes=15),
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._users = users
        self._codes = codes
        self._hasher = hasher
        self._sender = sender
        self._code_ttl = code_ttl
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def request_reset(self, email: str) -> None:
        """
        Issue a new code for an email and deliver it.

        Raises:
            UserNotFoundError: If no account uses this email
        """
        if not self._users.exists_by_email(email):
            raise UserNotFoundError(email)

        code = generate_code()
        self._codes.save(email, code, self._clock() + self._code_ttl)
        await self._sender.send_code(email, code)
        logger.info("Password reset requested for %s", email)

    async def reset_password(self, email: str, code: str, new_password: str) -> None:
        """
        Redeem a code and replace the account's password.

        The code is consumed before the new password is hashed, so only one
        of several concurrent redemptions can succeed. A wrong guess deletes
        the live code and the user has to request a new one.

        Raises:
            InvalidResetCodeError: If the code is missing, wrong or expired
            UserNotFoundError: If the account was deleted after the code was issued
        """
        stored = self._codes.get(email)
        if stored is None:
            raise InvalidResetCodeError(email)

        if not secrets.compare_digest(stored.code.encode(), code.encode()):
            self._codes.delete(email)
            logger.warning("Wrong reset code for %s, code invalidated", email)
            raise InvalidResetCodeError(email)

        consumed = self._codes.consume(email, stored.code)
        if consumed is None or self._clock() >= consumed.expires_at:
            raise InvalidResetCodeError(email)

        user = self._users.get_by_email(email)
        if user is None:
            raise UserNotFoundError(email)

        password_hash = await self._hasher.hash_async(new_password)
        self._users.update(
            user.id,
            {
                "password_hash": password_hash,
                "updated_at": self._clock().isoformat(),
            },
        )
        logger.info("Password reset completed for user %s", user.username)

"""
Password hashing.

bcrypt with a configurable cost factor (10 by default). The synchronous
methods are pure CPU work; request handlers use the async variants, which
run the work in a thread and give up after a timeout.
"""

import asyncio
import logging

import bcrypt

from .exceptions import PasswordHashTimeoutError, PasswordTooLongError

logger = logging.getLogger(__name__)

# bcrypt only uses the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Salted one-way hashing and verification of passwords."""

    def __init__(self, rounds: int = 10, timeout_seconds: float = 5.0):
        self._rounds = rounds
        self._timeout = timeout_seconds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, plaintext: str) -> str:
        """
        Hash a password with a fresh salt.

        Raises:
            PasswordTooLongError: If the UTF-8 encoding exceeds 72 bytes
        """
        secret = plaintext.encode("utf-8")
        if len(secret) > MAX_PASSWORD_BYTES:
            raise PasswordTooLongError(MAX_PASSWORD_BYTES)
        return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=self._rounds)).decode("ascii")

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Check a password against a stored hash. Malformed input returns False."""
        if not plaintext or not hashed:
            return False
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("ascii"))
        except (ValueError, UnicodeEncodeError):
            logger.warning("Rejected password check against a malformed hash")
            return False

    async def hash_async(self, plaintext: str) -> str:
        return await self._run(self.hash, plaintext)

    async def verify_async(self, plaintext: str, hashed: str) -> bool:
        return await self._run(self.verify, plaintext, hashed)

    async def _run(self, func, *args):
        try:
            return await asyncio.wait_for(asyncio.to_thread(func, *args), timeout=self._timeout)
        except asyncio.TimeoutError:
            raise PasswordHashTimeoutError(self._timeout)

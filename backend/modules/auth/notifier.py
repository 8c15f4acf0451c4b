"""
Verification code delivery.

Delivering the code (email, SMS, ...) is outside this service. The
default sender only logs that a code was issued; deployments provide a
real ICodeSender through the service container.
"""

import logging
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class ICodeSender(Protocol):
    """Out-of-band delivery of password reset codes."""

    async def send_code(self, email: str, code: str) -> None:
        ...


class LoggingCodeSender:
    """Development sender: records the delivery in the log, never the code itself."""

    async def send_code(self, email: str, code: str) -> None:
        logger.info("Password reset code issued for %s (%d digits)", email, len(code))

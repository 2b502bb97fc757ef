"""Client for the transactional email HTTP API."""
import asyncio
import logging
from typing import Optional

import aiohttp
from aiohttp import ClientError, ClientTimeout

from awards.config import get_settings

logger = logging.getLogger(__name__)

VERIFICATION_SUBJECT = "NHEA - Verify Your Email"


def render_verification_email(code: str, ttl_minutes: int) -> str:
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        '<h2 style="color: #2563eb;">Welcome to the NHEA Awards!</h2>'
        "<p>Your verification code is:</p>"
        '<div style="background: #f3f4f6; padding: 20px; text-align: center; font-size: 32px; '
        f'font-weight: bold; letter-spacing: 5px; margin: 20px 0;">{code}</div>'
        f"<p>This code will expire in {ttl_minutes} minutes.</p>"
        "</div>"
    )


class EmailClient:
    """
    Sends verification codes through the email provider's HTTP API.

    With no API key configured (local development, tests) the code is logged
    instead of sent. Delivery failures are logged and never raised: a user
    who misses the mail can ask for the code again.
    """

    def __init__(self):
        self.settings = get_settings()
        self.timeout = ClientTimeout(total=self.settings.email_timeout_seconds)
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def enabled(self) -> bool:
        return bool(self.settings.email_api_key)

    async def _ensure_session(self):
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            logger.debug("Created new aiohttp session for email client")

    async def close(self):
        """Close the underlying aiohttp client session."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("Closed aiohttp session for email client")
            self._session = None

    async def send_verification_code(self, email: str, code: str) -> bool:
        """Send ``code`` to ``email``. Returns True if the provider accepted it."""
        if not self.enabled:
            logger.info(f"Email delivery disabled; verification code for {email} is {code}")
            return False

        await self._ensure_session()
        payload = {
            "sender": {"name": self.settings.email_sender_name, "email": self.settings.email_from},
            "to": [{"email": email}],
            "subject": VERIFICATION_SUBJECT,
            "htmlContent": render_verification_email(code, self.settings.verification_code_ttl_minutes),
        }
        headers = {"api-key": self.settings.email_api_key, "accept": "application/json"}

        try:
            async with self._session.post(self.settings.email_api_url, json=payload, headers=headers) as response:
                if response.status < 300:
                    logger.info(f"Verification email sent to {email}")
                    return True
                error_text = await response.text()
                logger.error(f"Email API error {response.status} sending to {email}: {error_text}")
                return False
        except asyncio.TimeoutError:
            logger.error(f"Email API timeout sending to {email}")
            return False
        except ClientError as e:
            logger.error(f"Email API client error sending to {email}: {e}")
            return False


_email_client: Optional[EmailClient] = None


def get_email_client() -> EmailClient:
    """Return the process-wide email client."""
    global _email_client
    if _email_client is None:
        _email_client = EmailClient()
    return _email_client

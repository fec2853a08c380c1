"""
Email service for transactional messages sent through the SendGrid v3 mail API.
Handles password reset mails and the owner/buyer contact exchange.
"""

from typing import Optional, TYPE_CHECKING
from app.config import Settings
import httpx
import logging

if TYPE_CHECKING:
    from app.models.property import Property
    from app.models.user import User

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when the mail provider did not accept a message."""


class EmailService:
    """
    Email service for sending transactional emails.

    Messages are plain text and posted as JSON to the provider's HTTP API.
    A shared httpx client is reused across requests; pass one in to control
    transport and timeouts (tests use a mock transport).
    """

    def __init__(
        self,
        api_key: str,
        from_email: str,
        api_url: str = "https://api.sendgrid.com/v3/mail/send",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.api_key = api_key
        self.from_email = from_email
        self.api_url = api_url
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings, client: Optional[httpx.AsyncClient] = None) -> "EmailService":
        return cls(
            api_key=settings.sendgrid_api_key,
            from_email=settings.sendgrid_from_email,
            api_url=settings.sendgrid_api_url,
            client=client,
        )

    def _redact_email(self, email: str) -> str:
        """Redact an email address for logging to avoid PII leakage."""
        if "@" not in email:
            return "redacted"
        local, domain = email.split("@", 1)
        return f"{local[:2]}***@{domain}"

    async def send(self, to_email: str, subject: str, text_body: str) -> None:
        """
        Send a plain text email.

        Args:
            to_email: Recipient address
            subject: Subject line
            text_body: Message body

        Raises:
            EmailDeliveryError: If the request fails or the provider rejects it
        """
        payload = {
            "personalizations": [{"to": [{"email": to_email}]}],
            "from": {"email": self.from_email},
            "subject": subject,
            "content": [{"type": "text/plain", "value": text_body}],
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            response = await self._client.post(self.api_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error(
                f"Email request failed for {self._redact_email(to_email)}: {type(e).__name__}: {e}"
            )
            raise EmailDeliveryError(str(e)) from e

        if response.is_error:
            logger.error(
                f"Email provider rejected message to {self._redact_email(to_email)}: "
                f"HTTP {response.status_code}"
            )
            raise EmailDeliveryError(f"Mail provider responded with HTTP {response.status_code}")

        logger.info(f"Email sent to {self._redact_email(to_email)}: {subject}")

    async def send_password_reset(self, to_email: str, new_password: str) -> None:
        """Send the freshly generated password to the account's address."""
        text_body = (
            f"Your new password is:  {new_password}\n"
            "Please change your password after logging in."
        )
        await self.send(to_email, "Password Reset", text_body)

    async def send_owner_info(self, property_obj: "Property", buyer: "User") -> None:
        """
        Exchange contact details between an interested buyer and a listing owner.

        The buyer receives the owner's details first, then the owner receives
        the buyer's details.

        Args:
            property_obj: Listing the buyer is interested in, with its owner loaded
            buyer: Interested user
        """
        owner = property_obj.owner

        buyer_body = (
            f"Hello {buyer.first_name},\n\n"
            f"You have requested the owner details for the property titled \"{property_obj.title}\". "
            "Here are the details:\n\n"
            f"Owner Name: {_full_name(owner)}\n"
            f"Email: {owner.email}\n"
            f"Phone: {owner.phone_number}\n\n"
            "Thank you,\n"
            "RENTIFY"
        )
        await self.send(buyer.email, "Property Owner Information", buyer_body)

        owner_body = (
            f"Hello {owner.first_name},\n\n"
            f"A buyer is interested in your property titled \"{property_obj.title}\". "
            "Here are the details of the buyer:\n\n"
            f"Buyer Name: {_full_name(buyer)}\n"
            f"Email: {buyer.email}\n"
            f"Phone: {buyer.phone_number}\n\n"
            "Thank you,\n"
            "RENTIFY"
        )
        await self.send(owner.email, "Interested Buyer Information", owner_body)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()


def _full_name(user: "User") -> str:
    return " ".join(part for part in (user.first_name, user.last_name) if part)

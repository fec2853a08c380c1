"""
Tests for the outbound email service.
Requests are captured with an httpx mock transport instead of reaching the provider.
"""

import json
import pytest
import httpx

from app.models.property import Property
from app.models.user import User
from app.services.email import EmailDeliveryError, EmailService

API_URL = "https://mail.test/v3/mail/send"


def build_service(handler) -> EmailService:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return EmailService(
        api_key="SG.unit",
        from_email="noreply@rentify.io",
        api_url=API_URL,
        client=client
    )


class TestEmailService:
    """Test message delivery through the provider API."""

    @pytest.mark.asyncio
    async def test_send_posts_provider_payload(self):
        captured = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(202)

        service = build_service(handler)
        await service.send("buyer@rentify.io", "Hello", "Body text")
        await service.aclose()

        assert len(captured) == 1
        request = captured[0]
        assert str(request.url) == API_URL
        assert request.method == "POST"
        assert request.headers["Authorization"] == "Bearer SG.unit"

        payload = json.loads(request.content)
        assert payload == {
            "personalizations": [{"to": [{"email": "buyer@rentify.io"}]}],
            "from": {"email": "noreply@rentify.io"},
            "subject": "Hello",
            "content": [{"type": "text/plain", "value": "Body text"}],
        }

    @pytest.mark.asyncio
    async def test_provider_rejection(self):
        service = build_service(lambda request: httpx.Response(401, json={"errors": []}))

        with pytest.raises(EmailDeliveryError):
            await service.send("buyer@rentify.io", "Hello", "Body text")

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        service = build_service(handler)

        with pytest.raises(EmailDeliveryError):
            await service.send("buyer@rentify.io", "Hello", "Body text")

    @pytest.mark.asyncio
    async def test_password_reset_message(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(202)

        await build_service(handler).send_password_reset("seller@rentify.io", "Xy7!abcdEFGH")

        message = bodies[0]
        assert message["subject"] == "Password Reset"
        assert message["personalizations"][0]["to"][0]["email"] == "seller@rentify.io"
        assert "Xy7!abcdEFGH" in message["content"][0]["value"]
        assert "change your password" in message["content"][0]["value"]

    @pytest.mark.asyncio
    async def test_owner_info_exchange(self, test_property: Property, test_buyer: User, test_seller: User):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(202)

        await build_service(handler).send_owner_info(test_property, test_buyer)

        assert len(bodies) == 2
        to_buyer, to_owner = bodies

        assert to_buyer["personalizations"][0]["to"][0]["email"] == test_buyer.email
        assert to_buyer["subject"] == "Property Owner Information"
        buyer_text = to_buyer["content"][0]["value"]
        assert "Hello Rahul" in buyer_text
        assert "Owner Name: Asha Verma" in buyer_text
        assert test_seller.phone_number in buyer_text
        assert test_property.title in buyer_text

        assert to_owner["personalizations"][0]["to"][0]["email"] == test_seller.email
        assert to_owner["subject"] == "Interested Buyer Information"
        owner_text = to_owner["content"][0]["value"]
        assert "Buyer Name: Rahul Mehta" in owner_text
        assert "buyer@rentify.io" in owner_text

    @pytest.mark.asyncio
    async def test_owner_not_mailed_when_buyer_mail_fails(self, test_property: Property, test_buyer: User):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500)

        with pytest.raises(EmailDeliveryError):
            await build_service(handler).send_owner_info(test_property, test_buyer)

        assert len(calls) == 1

    def test_redact_email(self):
        service = EmailService(api_key="k", from_email="noreply@rentify.io")
        assert service._redact_email("seller@rentify.io") == "se***@rentify.io"
        assert service._redact_email("not-an-address") == "redacted"

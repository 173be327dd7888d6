"""Amazon SES single-recipient email sender."""

from __future__ import annotations

import asyncio
import logging

from .aws_clients import make_boto3_client, scoped_client
from .interfaces import ClientFactory
from .models import SendResult, StoreCredentials

logger = logging.getLogger(__name__)

CHARSET = "UTF-8"


class SESMailSender:
    """Send transactional email through SES with explicit credentials."""

    def __init__(
        self,
        credentials: StoreCredentials,
        *,
        client_factory: ClientFactory = make_boto3_client,
    ) -> None:
        self._credentials = credentials
        self._client_factory = client_factory

    async def send(
        self,
        from_address: str,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> SendResult:
        """
        Send one email with both HTML and plain-text bodies.

        Never raises: a fault sets success=False and fault_detail to the exception text.
        """
        return await asyncio.to_thread(
            self._send, from_address, to_address, subject, html_body, text_body
        )

    def _send(
        self,
        from_address: str,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> SendResult:
        try:
            with scoped_client(self._client_factory, "ses", self._credentials) as client:
                resp = client.send_email(
                    Source=from_address,
                    Destination={"ToAddresses": [to_address]},
                    Message={
                        "Subject": {"Data": subject, "Charset": CHARSET},
                        "Body": {
                            "Html": {"Data": html_body, "Charset": CHARSET},
                            "Text": {"Data": text_body, "Charset": CHARSET},
                        },
                    },
                )
        except Exception as e:
            logger.warning("ses send to %s failed: %s", to_address, e)
            return SendResult(success=False, fault_detail=f"{type(e).__name__}: {e}")
        logger.info("ses send to %s message_id=%s", to_address, resp.get("MessageId"))
        return SendResult(success=True)

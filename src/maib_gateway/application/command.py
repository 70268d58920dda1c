"""Transaction command builder for the merchant handler.

A command accumulates the parameters of one transaction through chained
setters, then runs exactly one gateway operation::

    response = await (
        gateway.create_command()
        .set_amount(1000)
        .set_currency(498)
        .set_client_ip_address("10.0.0.1")
        .set_language("ro")
        .create_transaction("DMS")
    )

Required fields are checked when an operation is invoked, not when they are
set, because every operation needs a different subset of them.
"""

from __future__ import annotations

import logging
from typing import Literal, Optional

from ..domain.errors import MissingFieldError, TransportError
from ..domain.shared import GatewayTransportProtocol
from .response_parser import parse_response
from .shared.serialization import Payload, encode_payload

logger = logging.getLogger(__name__)

TransactionType = Literal["SMS", "DMS"]

_TRANSACTION_COMMANDS = {"SMS": "v", "DMS": "a"}

# Stored cards are registered with a fixed far-future expiry (MMYY).
PERSPAYEE_EXPIRY = "1299"


class MaibCommand:
    """One in-flight transaction attempt against the merchant handler.

    Not meant to be shared between concurrent tasks; create one per
    transaction through ``MaibGateway.create_command()``.
    """

    def __init__(self, transport: GatewayTransportProtocol) -> None:
        self._transport = transport
        self._amount: Optional[int] = None
        self._currency: Optional[int] = None
        self._client_ip_address: Optional[str] = None
        self._description: Optional[str] = None
        self._language: Optional[str] = None

    # Setters

    def set_amount(self, amount: int) -> "MaibCommand":
        """Amount in minor currency units."""
        self._amount = amount
        return self

    def set_currency(self, currency: int) -> "MaibCommand":
        """Numeric ISO 4217 currency code, e.g. 498 for MDL."""
        self._currency = currency
        return self

    def set_client_ip_address(self, client_ip_address: str) -> "MaibCommand":
        self._client_ip_address = client_ip_address
        return self

    def set_description(self, description: Optional[str]) -> "MaibCommand":
        self._description = description
        return self

    def set_language(self, language: str) -> "MaibCommand":
        """Two-letter language code for the card holder pages."""
        self._language = language
        return self

    # Pipeline

    def _require(self, *fields: str) -> None:
        for field in fields:
            if getattr(self, f"_{field}") is None:
                raise MissingFieldError(field)

    async def _request(self, payload: Payload) -> dict[str, str]:
        body = encode_payload(payload)
        logger.debug("Sending merchant handler command %r", payload.get("command"))
        try:
            text = await self._transport.post_form(body)
        except TransportError:
            logger.exception(
                "Merchant handler command %r failed", payload.get("command")
            )
            raise
        return parse_response(text)

    # Operations

    async def create_transaction(
        self, type: TransactionType = "SMS"
    ) -> dict[str, str]:
        """Start an SMS (charge) or DMS (authorize only) transaction.

        Raises:
            ValueError: If ``type`` is neither ``"SMS"`` nor ``"DMS"``.
            MissingFieldError: If amount, currency, client IP or language is unset.
        """
        if type not in _TRANSACTION_COMMANDS:
            raise ValueError(f"Transaction type must be 'SMS' or 'DMS', got {type!r}")
        self._require("amount", "currency", "client_ip_address", "language")
        return await self._request(
            {
                "command": _TRANSACTION_COMMANDS[type],
                "amount": self._amount,
                "currency": self._currency,
                "client_ip_addr": self._client_ip_address,
                "description": self._description,
                "language": self._language,
                "msg_type": type,
            }
        )

    async def get_transaction_status(self, transaction_id: str) -> dict[str, str]:
        self._require("client_ip_address")
        return await self._request(
            {
                "command": "c",
                "trans_id": transaction_id,
                "client_ip_addr": self._client_ip_address,
            }
        )

    async def commit_transaction(self, transaction_id: str) -> dict[str, str]:
        """Capture a previously authorized DMS transaction."""
        self._require("amount", "currency", "client_ip_address", "language")
        return await self._request(
            {
                "command": "t",
                "trans_id": transaction_id,
                "amount": self._amount,
                "currency": self._currency,
                "client_ip_addr": self._client_ip_address,
                "description": self._description,
                "language": self._language,
            }
        )

    async def register_card(self, card_id: str) -> dict[str, str]:
        """Register a card for recurring payments under ``card_id``.

        The response carries a transaction id; the card holder completes the
        registration on the gateway's card entry page.
        """
        self._require("currency", "client_ip_address")
        return await self._request(
            {
                "command": "p",
                "currency": self._currency,
                "client_ip_addr": self._client_ip_address,
                "description": self._description,
                "biller_client_id": card_id,
                "perspayee_expiry": PERSPAYEE_EXPIRY,
                "perspayee_gen": 1,
                "perspayee_overwrite": 1,
                "msg_type": "AUTH",
            }
        )

    async def reverse_transaction(self, transaction_id: str) -> dict[str, str]:
        self._require("amount")
        return await self._request(
            {
                "command": "r",
                "trans_id": transaction_id,
                "amount": self._amount,
            }
        )

    async def close_day(self) -> dict[str, str]:
        """Close the business day. Needs no transaction state."""
        return await self._request({"command": "b"})

    async def make_regular_payment(self, card_id: str) -> dict[str, str]:
        """Charge a card previously registered with ``register_card``."""
        self._require("amount", "currency", "client_ip_address")
        return await self._request(
            {
                "command": "e",
                "amount": self._amount,
                "currency": self._currency,
                "client_ip_addr": self._client_ip_address,
                "description": self._description,
                "biller_client_id": card_id,
            }
        )

    async def delete_regular_payment(self, card_id: str) -> dict[str, str]:
        return await self._request({"command": "x", "biller_client_id": card_id})

"""
Payments Module - Mock Payment Gateway

Simulates the card / UPI / cash-on-delivery flows of the checkout page.
There is no real provider behind it. Magic inputs trigger failures:
- card 4000000000000002: declined
- CVV 000: rejected
- UPI id without "@": rejected
"""

import asyncio
import secrets
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Literal, Optional

from storefront.errors import ERROR_CARD_DECLINED, ERROR_INVALID_CVV, ERROR_INVALID_UPI
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.money import Number, percent_of, to_decimal

logger = get_logger(__name__)

DECLINED_CARD_NUMBER = "4000000000000002"
INVALID_CVV = "000"

# Simulated gateway latency per method (seconds)
LATENCY = {
    "card": 2.0,
    "upi": 1.5,
    "cod": 0.5,
    "verify": 1.0,
}

PaymentStatus = Literal["success", "failed", "pending"]


@dataclass
class PaymentDetails:
    amount: Decimal
    currency: str
    order_id: str
    customer_email: str
    customer_name: str
    customer_phone: str


@dataclass
class CardDetails:
    card_number: str
    expiry_date: str
    cvv: str
    name_on_card: str


@dataclass
class PaymentResult:
    success: bool
    order_id: str
    amount: Decimal
    status: PaymentStatus
    payment_id: Optional[str] = None
    transaction_id: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class PaymentMethod:
    id: str
    name: str
    description: str
    icon: str
    enabled: bool


PAYMENT_METHODS: List[PaymentMethod] = [
    PaymentMethod("card", "Credit/Debit Card", "Visa, Mastercard, RuPay", "💳", True),
    PaymentMethod("upi", "UPI Payment", "Google Pay, PhonePe, Paytm", "📱", True),
    PaymentMethod("netbanking", "Net Banking", "All major banks supported", "🏦", False),
    PaymentMethod("wallet", "Digital Wallet", "Paytm, Amazon Pay", "👛", False),
    PaymentMethod("cod", "Cash on Delivery", "Pay when you receive", "💵", True),
]

# Percent of the amount, except COD which is a flat fee
PROCESSING_FEE_PERCENT = {
    "card": Decimal("2"),
    "upi": Decimal("0"),
    "netbanking": Decimal("1.5"),
    "wallet": Decimal("1"),
}
COD_FLAT_FEE = Decimal("50")


def _reference(prefix: str) -> str:
    return f"{prefix}_{int(time.time() * 1000)}_{secrets.token_hex(5)[:9]}"


class PaymentSimulator:
    """Stub gateway used by checkout."""

    def __init__(self, delay_scale: float = 1.0):
        self.delay_scale = delay_scale

    async def _simulate_latency(self, kind: str) -> None:
        delay = LATENCY[kind] * self.delay_scale
        if delay > 0:
            await asyncio.sleep(delay)

    async def process_card(self, details: PaymentDetails, card: CardDetails) -> PaymentResult:
        await self._simulate_latency("card")

        if card.card_number.replace(" ", "") == DECLINED_CARD_NUMBER:
            logger.info(f"Card declined for order {sanitize_id_for_logging(details.order_id)}")
            return PaymentResult(False, details.order_id, details.amount, "failed", error=ERROR_CARD_DECLINED)

        if card.cvv == INVALID_CVV:
            return PaymentResult(False, details.order_id, details.amount, "failed", error=ERROR_INVALID_CVV)

        return PaymentResult(
            success=True,
            order_id=details.order_id,
            amount=details.amount,
            status="success",
            payment_id=_reference("pay"),
            transaction_id=_reference("txn"),
        )

    async def process_upi(self, upi_id: str, amount: Number, order_id: str) -> PaymentResult:
        await self._simulate_latency("upi")
        amount = to_decimal(amount)

        if "@" not in upi_id:
            return PaymentResult(False, order_id, amount, "failed", error=ERROR_INVALID_UPI)

        return PaymentResult(True, order_id, amount, "success", transaction_id=_reference("upi"))

    async def process_cod(self, order_id: str, amount: Number) -> PaymentResult:
        """Cash on delivery stays pending until the courier collects."""
        await self._simulate_latency("cod")
        return PaymentResult(
            True, order_id, to_decimal(amount), "pending", transaction_id=f"cod_{int(time.time() * 1000)}"
        )

    async def verify_payment(self, payment_id: str) -> dict:
        await self._simulate_latency("verify")
        return {"verified": True, "status": "captured"}

    @staticmethod
    def payment_methods() -> List[PaymentMethod]:
        return list(PAYMENT_METHODS)

    @staticmethod
    def processing_fee(amount: Number, method: str) -> Decimal:
        """Fee charged on top of ``amount``, in whole rupees."""
        if method == "cod":
            return COD_FLAT_FEE
        percent = PROCESSING_FEE_PERCENT.get(method)
        if percent is None:
            return Decimal("0")
        return percent_of(amount, percent)

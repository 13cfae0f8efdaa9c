"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class BankAccount:
    """Issuer bank account used as the source of a check"""

    bank_name: str
    routing_number: str
    account_number: str
    bank_address: Optional[str] = None
    fractional_routing: Optional[str] = None
    is_default: bool = False
    account_id: Optional[str] = None


@dataclass
class Transaction:
    """Payment issued, received, or requested by an issuer"""

    amount_cents: int
    recipient_name: str
    memo: str = ""
    date: str = ""
    check_number: Optional[str] = None
    signature_data: Optional[str] = None
    delivery_method: str = "print"  # "print" or "stripe"
    type: str = "sent"  # "sent", "received" or "requested"
    status: str = "pending"  # "completed", "pending" or "failed"
    transaction_id: Optional[str] = None

    @property
    def amount(self) -> Decimal:
        return (Decimal(self.amount_cents) / 100).quantize(Decimal("0.01"))


@dataclass(frozen=True)
class CheckInstrument:
    """Display-ready check face, consumed by the print layout"""

    payer_name: str
    payer_address: str
    payee_name: str
    bank_name: str
    routing_number: str
    account_number: str
    check_number: str
    fractional_routing: Optional[str]
    amount: Decimal
    amount_display: str
    amount_in_words: str
    micr_line: str
    date: str
    memo: str
    signature_data: Optional[str] = None


@dataclass
class PayoutRequest:
    """ACH payout instruction handed to the payout provider"""

    amount_cents: int
    description: str
    recipient_name: str
    currency: str = "usd"
    recipient_routing: str = ""
    recipient_account: str = ""
    payer_routing: str = ""
    payer_account: str = ""


@dataclass
class PayoutResult:
    """Outcome reported by the payout provider"""

    success: bool
    id: Optional[str] = None
    status: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None

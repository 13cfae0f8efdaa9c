"""Check instrument assembly - everything the print layout needs, no layout logic"""

from typing import Optional
from echeck_gateway.domain.models import BankAccount, CheckInstrument, Transaction
from echeck_gateway.domain.amount_words import amount_to_words, to_cents_decimal
from echeck_gateway.domain.micr import encode_micr_line
from echeck_gateway.domain.exceptions import NotPrintableError, SignatureAlreadyCapturedError

DEFAULT_PAYER_NAME = "Authorized Business Entity"
DEFAULT_PAYEE_NAME = "Valued Recipient"
DEFAULT_PAYER_ADDRESS = "Authorized E-Check Issuer"
DEFAULT_BANK_NAME = "Financial Institution"
DEFAULT_ROUTING_NUMBER = "000000000"
DEFAULT_ACCOUNT_NUMBER = "000000000"
DEFAULT_CHECK_NUMBER = "1001"


def _or_default(value: Optional[str], default: Optional[str]) -> Optional[str]:
    # Blank strings count as missing
    return value if value else default


def render_check_instrument(
    transaction: Transaction,
    account: Optional[BankAccount] = None,
    payer_name: Optional[str] = None,
) -> CheckInstrument:
    """
    Assemble the check face for a transaction drawn on an account.

    Absent fields fall back to placeholder text so a check always prints.
    Routing and account numbers are used as stored, never corrected.
    """
    routing_number = _or_default(account.routing_number if account else None, DEFAULT_ROUTING_NUMBER)
    account_number = _or_default(account.account_number if account else None, DEFAULT_ACCOUNT_NUMBER)
    check_number = _or_default(transaction.check_number, DEFAULT_CHECK_NUMBER)
    amount = to_cents_decimal(transaction.amount)

    return CheckInstrument(
        payer_name=_or_default(payer_name, DEFAULT_PAYER_NAME),
        payer_address=_or_default(account.bank_address if account else None, DEFAULT_PAYER_ADDRESS),
        payee_name=_or_default(transaction.recipient_name, DEFAULT_PAYEE_NAME),
        bank_name=_or_default(account.bank_name if account else None, DEFAULT_BANK_NAME),
        routing_number=routing_number,
        account_number=account_number,
        check_number=check_number,
        fractional_routing=_or_default(account.fractional_routing if account else None, None),
        amount=amount,
        amount_display=f"{amount:,.2f}",
        amount_in_words=amount_to_words(amount),
        micr_line=encode_micr_line(check_number, routing_number, account_number),
        date=transaction.date,
        memo=transaction.memo,
        signature_data=transaction.signature_data,
    )


def ensure_printable(transaction: Transaction) -> None:
    """ACH payouts never produce a paper instrument"""
    if transaction.delivery_method == "stripe":
        raise NotPrintableError(f"Transaction {transaction.transaction_id} was sent by ACH, not by check")


def ensure_unsigned(transaction: Transaction) -> None:
    """A signature is captured once and is immutable afterwards"""
    if transaction.signature_data:
        raise SignatureAlreadyCapturedError(f"Transaction {transaction.transaction_id} is already signed")

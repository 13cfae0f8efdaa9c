"""Unit tests for check instrument assembly"""

import dataclasses
import pytest
from decimal import Decimal
from echeck_gateway.domain.models import BankAccount, Transaction
from echeck_gateway.domain.instrument import ensure_printable, ensure_unsigned, render_check_instrument
from echeck_gateway.domain.exceptions import NotPrintableError, SignatureAlreadyCapturedError


def test_render_full_check(sample_transaction: Transaction, sample_account: BankAccount):
    instrument = render_check_instrument(sample_transaction, sample_account, payer_name="Acme LLC")

    assert instrument.payer_name == "Acme LLC"
    assert instrument.payer_address == "100 Main St, Springfield"
    assert instrument.payee_name == "Jane Contractor"
    assert instrument.bank_name == "First Federal Bank"
    assert instrument.fractional_routing == "1-2/210"
    assert instrument.amount == Decimal("1250.00")
    assert instrument.amount_display == "1,250.00"
    assert instrument.amount_in_words == "*** One Thousand Two Hundred Fifty and 00/100 Dollars ***"
    assert instrument.micr_line == "⑈2045⑈ ⑆021000021⑆ 123456789⑈"
    assert instrument.date == "2026-03-15"
    assert instrument.memo == "Consulting - March"


def test_missing_check_number_defaults_to_1001(sample_account: BankAccount):
    transaction = Transaction(amount_cents=5000, recipient_name="Bob")
    instrument = render_check_instrument(transaction, sample_account)

    assert instrument.check_number == "1001"
    assert instrument.micr_line.startswith("⑈1001⑈")


def test_no_account_uses_placeholders():
    transaction = Transaction(amount_cents=45050, recipient_name="")
    instrument = render_check_instrument(transaction, None)

    assert instrument.payer_name == "Authorized Business Entity"
    assert instrument.payee_name == "Valued Recipient"
    assert instrument.payer_address == "Authorized E-Check Issuer"
    assert instrument.bank_name == "Financial Institution"
    assert instrument.routing_number == "000000000"
    assert instrument.account_number == "000000000"
    assert instrument.fractional_routing is None
    assert instrument.micr_line == "⑈1001⑈ ⑆000000000⑆ 000000000⑈"
    assert instrument.amount_in_words == "*** Four Hundred Fifty and 50/100 Dollars ***"


def test_blank_account_fields_use_placeholders(sample_transaction: Transaction):
    account = BankAccount(bank_name="", routing_number="", account_number="", fractional_routing="")
    instrument = render_check_instrument(sample_transaction, account)

    assert instrument.bank_name == "Financial Institution"
    assert instrument.routing_number == "000000000"
    assert instrument.fractional_routing is None


def test_malformed_routing_passes_through(sample_transaction: Transaction):
    account = BankAccount(bank_name="Bank", routing_number="12345", account_number="99")
    instrument = render_check_instrument(sample_transaction, account)

    assert instrument.routing_number == "12345"
    assert "⑆12345⑆" in instrument.micr_line


def test_signature_passes_through(sample_account: BankAccount):
    transaction = Transaction(amount_cents=100, recipient_name="Bob", signature_data="iVBORw0KGgo=")
    instrument = render_check_instrument(transaction, sample_account)
    assert instrument.signature_data == "iVBORw0KGgo="


def test_instrument_is_immutable(sample_transaction: Transaction, sample_account: BankAccount):
    instrument = render_check_instrument(sample_transaction, sample_account)
    with pytest.raises(dataclasses.FrozenInstanceError):
        instrument.check_number = "9999"


def test_render_is_idempotent(sample_transaction: Transaction, sample_account: BankAccount):
    assert render_check_instrument(sample_transaction, sample_account) == render_check_instrument(
        sample_transaction, sample_account
    )


def test_stripe_transactions_are_not_printable():
    transaction = Transaction(amount_cents=100, recipient_name="Bob", delivery_method="stripe")
    with pytest.raises(NotPrintableError):
        ensure_printable(transaction)

    ensure_printable(Transaction(amount_cents=100, recipient_name="Bob", delivery_method="print"))


def test_signature_captured_once():
    ensure_unsigned(Transaction(amount_cents=100, recipient_name="Bob"))
    with pytest.raises(SignatureAlreadyCapturedError):
        ensure_unsigned(Transaction(amount_cents=100, recipient_name="Bob", signature_data="abc="))

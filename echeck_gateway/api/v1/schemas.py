"""Pydantic schemas for API request/response validation"""

import base64
import binascii
from decimal import Decimal
from typing import Annotated, List, Literal, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

RoutingNumber = Annotated[str, Field(pattern=r"^\d{9}$", description="9-digit ABA routing number")]
AccountNumber = Annotated[str, Field(pattern=r"^\d+$", max_length=17, description="Digits-only account number")]
# Check writer handles one thousands group
Amount = Annotated[Decimal, Field(gt=0, lt=1_000_000, max_digits=8, decimal_places=2, description="Amount in USD")]

DATA_URL_PREFIX = "base64,"


# Accounts

class AccountCreateRequest(BaseModel):
    """Request body for POST /v1/accounts"""

    bank_name: str = Field(..., min_length=1)
    bank_address: Optional[str] = None
    routing_number: RoutingNumber
    fractional_routing: Optional[str] = Field(None, max_length=20, description="Display only, e.g. 1-2/345")
    account_number: AccountNumber
    confirm_account_number: str

    @model_validator(mode="after")
    def account_numbers_match(self) -> "AccountCreateRequest":
        if self.account_number != self.confirm_account_number:
            raise ValueError("Account numbers do not match")
        return self


class AccountUpdateRequest(BaseModel):
    """Request body for PATCH /v1/accounts/{account_id}"""

    bank_name: Optional[str] = Field(None, min_length=1)
    bank_address: Optional[str] = None
    fractional_routing: Optional[str] = Field(None, max_length=20)


class AccountResponse(BaseModel):
    account_id: str
    bank_name: str
    bank_address: Optional[str] = None
    routing_number: str
    account_number_masked: str
    fractional_routing: Optional[str] = None
    is_default: bool
    created_at: str


class AccountListResponse(BaseModel):
    user_id: str
    accounts: List[AccountResponse]


# Payouts and transactions

class PayoutCreateRequest(BaseModel):
    """Request body for POST /v1/payouts"""

    delivery_method: Literal["print", "stripe"] = "print"
    recipient_name: str = Field(..., min_length=1)
    recipient_address: Optional[str] = None
    amount: Amount
    purpose: str = ""
    memo: str = ""
    from_account_id: Optional[str] = None
    check_number: Optional[str] = Field(None, pattern=r"^\d{1,10}$")
    recipient_routing_number: Optional[str] = Field(None, pattern=r"^\d{9}$")
    recipient_account_number: Optional[str] = Field(None, pattern=r"^\d+$")

    @model_validator(mode="after")
    def print_requires_source_account(self) -> "PayoutCreateRequest":
        if self.delivery_method == "print" and not self.from_account_id:
            raise ValueError("from_account_id is required for printable checks")
        return self


class PaymentRequestCreate(BaseModel):
    """Request body for POST /v1/requests"""

    recipient_name: str = Field(..., min_length=1, description="Party asked to pay")
    amount: Amount
    memo: str = ""


class TransactionResponse(BaseModel):
    transaction_id: str
    type: str
    recipient_name: str
    recipient_address: Optional[str] = None
    amount: Decimal
    memo: str
    status: str
    date: str
    check_number: Optional[str] = None
    from_account_id: Optional[str] = None
    delivery_method: Optional[str] = None
    stripe_transfer_id: Optional[str] = None
    has_signature: bool = False
    created_at: str


class TransactionListResponse(BaseModel):
    user_id: str
    transactions: List[TransactionResponse]


class SignatureRequest(BaseModel):
    """Base64 raster signature, optionally as a data URL"""

    signature_data: str = Field(..., min_length=1)

    @field_validator("signature_data")
    @classmethod
    def must_be_base64(cls, value: str) -> str:
        payload = value.split(DATA_URL_PREFIX, 1)[1] if value.startswith("data:") and DATA_URL_PREFIX in value else value
        try:
            base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("signature_data must be base64-encoded") from e
        return value


class CheckInstrumentResponse(BaseModel):
    """Response for GET /v1/transactions/{transaction_id}/check"""

    transaction_id: str
    payer_name: str
    payer_address: str
    payee_name: str
    bank_name: str
    routing_number: str
    account_number: str
    check_number: str
    fractional_routing: Optional[str] = None
    amount: Decimal
    amount_display: str
    amount_in_words: str
    micr_line: str
    date: str
    memo: str
    signature_data: Optional[str] = None


class DashboardSummaryResponse(BaseModel):
    total_issued_cents: int
    pending_count: int
    account_count: int
    recent: List[TransactionResponse]


# Memo assistant

class MemoSuggestRequest(BaseModel):
    recipient_name: str = Field(..., min_length=1)
    amount: Amount
    purpose: str = Field(..., min_length=1)


class MemoSuggestResponse(BaseModel):
    suggested_memo: str


# Public payment request fulfilment

class FulfillRequest(BaseModel):
    """Payer bank details submitted on the public pay page"""

    bank_name: str = Field(..., min_length=1)
    bank_address: Optional[str] = None
    routing_number: RoutingNumber
    account_number: AccountNumber


class PublicPaymentRequestResponse(BaseModel):
    transaction_id: str
    requester_id: str
    recipient_name: str
    amount: Decimal
    memo: str
    status: str
    date: str

"""Payment requests - issuer asks a third party to pay by e-check"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from echeck_gateway.api.v1.schemas import (
    FulfillRequest,
    PaymentRequestCreate,
    PublicPaymentRequestResponse,
    TransactionResponse,
)
from echeck_gateway.api.v1.transactions import to_transaction_response
from echeck_gateway.api.dependencies import get_current_user_id
from echeck_gateway.infrastructure.database.models import TransactionRecord
from echeck_gateway.infrastructure.database.session import get_db
from echeck_gateway.infrastructure.database.repositories import TransactionRepository, to_domain_transaction
from echeck_gateway.utils.date_utils import today_iso

router = APIRouter()


def to_public_response(transaction: TransactionRecord) -> PublicPaymentRequestResponse:
    """Only what the payer needs to see; no issuer bank details"""
    return PublicPaymentRequestResponse(
        transaction_id=str(transaction.id),
        requester_id=transaction.user_id,
        recipient_name=transaction.recipient_name,
        amount=to_domain_transaction(transaction).amount,
        memo=transaction.memo or "",
        status=transaction.status,
        date=transaction.date,
    )


def _get_open_request(db: Session, user_id: str, transaction_id: str) -> TransactionRecord:
    transaction = TransactionRepository(db).get_transaction(user_id, transaction_id)
    if not transaction or transaction.type != "requested":
        raise HTTPException(status_code=404, detail="Payment request not found")
    return transaction


@router.post("/requests", response_model=TransactionResponse, status_code=201)
def create_payment_request(
    request_body: PaymentRequestCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Create a request whose link the issuer shares with the payer"""
    transaction = TransactionRepository(db).create_transaction(
        user_id=user_id,
        type="requested",
        recipient_name=request_body.recipient_name,
        amount_cents=int(request_body.amount * 100),
        memo=request_body.memo,
        status="pending",
        date=today_iso(),
    )
    db.commit()
    db.refresh(transaction)
    return to_transaction_response(transaction)


@router.get("/pay/{user_id}/{transaction_id}", response_model=PublicPaymentRequestResponse)
def get_payment_request(user_id: str, transaction_id: str, db: Session = Depends(get_db)):
    """Public view of a payment request, reached from the shared link"""
    return to_public_response(_get_open_request(db, user_id, transaction_id))


@router.post("/pay/{user_id}/{transaction_id}", response_model=PublicPaymentRequestResponse)
def fulfill_payment_request(
    user_id: str,
    transaction_id: str,
    request_body: FulfillRequest,
    db: Session = Depends(get_db),
):
    """
    Payer authorizes the request by submitting their bank details.

    Marks the request completed; a completed request cannot be fulfilled again.
    """
    transaction = _get_open_request(db, user_id, transaction_id)
    if transaction.status == "completed":
        raise HTTPException(status_code=409, detail="Payment request already fulfilled")

    fulfilled = TransactionRepository(db).complete_request(
        user_id,
        transaction.id,
        payer_bank_name=request_body.bank_name,
        payer_bank_address=request_body.bank_address,
        payer_routing_number=request_body.routing_number,
        payer_account_number=request_body.account_number,
        recipient_address=request_body.bank_address,
    )
    if not fulfilled:
        db.rollback()
        raise HTTPException(status_code=409, detail="Payment request already fulfilled")
    db.commit()
    db.refresh(transaction)

    logging.info("Payment request fulfilled", extra={"user_id": user_id, "transaction_id": transaction_id})
    return to_public_response(transaction)

"""/v1/transactions - history, signatures, and print-ready checks"""

import logging
from dataclasses import asdict
from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from echeck_gateway.api.v1.schemas import (
    CheckInstrumentResponse,
    DashboardSummaryResponse,
    SignatureRequest,
    TransactionListResponse,
    TransactionResponse,
)
from echeck_gateway.api.dependencies import get_current_user_id, get_display_name
from echeck_gateway.infrastructure.database.models import TransactionRecord
from echeck_gateway.infrastructure.database.session import get_db
from echeck_gateway.infrastructure.database.repositories import (
    AccountRepository,
    TransactionRepository,
    to_domain_account,
    to_domain_transaction,
)
from echeck_gateway.domain.instrument import ensure_printable, ensure_unsigned, render_check_instrument
from echeck_gateway.domain.exceptions import NotPrintableError, SignatureAlreadyCapturedError
from echeck_gateway.infrastructure.observability.metrics import check_render_counter

router = APIRouter()

RECENT_PAYOUTS_WINDOW = 5


def to_transaction_response(transaction: TransactionRecord) -> TransactionResponse:
    return TransactionResponse(
        transaction_id=str(transaction.id),
        type=transaction.type,
        recipient_name=transaction.recipient_name,
        recipient_address=transaction.recipient_address,
        amount=to_domain_transaction(transaction).amount,
        memo=transaction.memo or "",
        status=transaction.status,
        date=transaction.date,
        check_number=transaction.check_number,
        from_account_id=transaction.from_account_id,
        delivery_method=transaction.delivery_method,
        stripe_transfer_id=transaction.stripe_transfer_id,
        has_signature=bool(transaction.signature_data),
        created_at=transaction.created_at.isoformat(),
    )


def _get_owned_transaction(repo: TransactionRepository, user_id: str, transaction_id: str) -> TransactionRecord:
    transaction = repo.get_transaction(user_id, transaction_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.get("/transactions", response_model=TransactionListResponse)
def list_transactions(
    type: Optional[Literal["sent", "received", "requested"]] = Query(None, description="Filter by type"),
    limit: int = Query(20, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Transaction history, most recent first"""
    transactions = TransactionRepository(db).list_transactions(user_id, type=type, limit=limit)
    return TransactionListResponse(
        user_id=user_id,
        transactions=[to_transaction_response(t) for t in transactions],
    )


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    transaction = _get_owned_transaction(TransactionRepository(db), user_id, transaction_id)
    return to_transaction_response(transaction)


@router.post("/transactions/{transaction_id}/signature", response_model=TransactionResponse)
def attach_signature(
    transaction_id: str,
    request_body: SignatureRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Attach the signer's raster signature.

    A signature is captured once; it cannot be replaced afterwards.
    """
    transaction_repo = TransactionRepository(db)
    transaction = _get_owned_transaction(transaction_repo, user_id, transaction_id)

    try:
        ensure_unsigned(to_domain_transaction(transaction))
    except SignatureAlreadyCapturedError as e:
        logging.warning(f"Signature rejected: {e}", extra={"user_id": user_id})
        raise HTTPException(status_code=409, detail=str(e))

    if not transaction_repo.capture_signature(user_id, transaction.id, request_body.signature_data):
        db.rollback()
        logging.warning("Signature rejected: captured by a concurrent request", extra={"user_id": user_id})
        raise HTTPException(status_code=409, detail=f"Transaction {transaction_id} is already signed")
    db.commit()
    db.refresh(transaction)
    return to_transaction_response(transaction)


@router.get("/transactions/{transaction_id}/check", response_model=CheckInstrumentResponse)
def get_check_instrument(
    transaction_id: str,
    user_id: str = Depends(get_current_user_id),
    payer_name: Optional[str] = Depends(get_display_name),
    db: Session = Depends(get_db),
):
    """
    Print-ready check face for a transaction.

    Returns:
        Payer/payee block, written amount line, and MICR line

    ACH payouts have no paper instrument and are rejected with 409.
    """
    transaction = _get_owned_transaction(TransactionRepository(db), user_id, transaction_id)

    try:
        ensure_printable(to_domain_transaction(transaction))
    except NotPrintableError as e:
        raise HTTPException(status_code=409, detail=str(e))

    account = None
    if transaction.from_account_id:
        record = AccountRepository(db).get_account(user_id, transaction.from_account_id)
        account = to_domain_account(record) if record else None

    instrument = render_check_instrument(to_domain_transaction(transaction), account, payer_name)
    check_render_counter.inc()

    return CheckInstrumentResponse(transaction_id=str(transaction.id), **asdict(instrument))


@router.get("/dashboard/summary", response_model=DashboardSummaryResponse)
def get_dashboard_summary(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Issued volume and pending checks across the most recent sent payments"""
    recent = TransactionRepository(db).list_transactions(user_id, type="sent", limit=RECENT_PAYOUTS_WINDOW)
    account_count = len(AccountRepository(db).list_accounts(user_id))

    return DashboardSummaryResponse(
        total_issued_cents=sum(t.amount_cents for t in recent),
        pending_count=sum(1 for t in recent if t.status == "pending"),
        account_count=account_count,
        recent=[to_transaction_response(t) for t in recent],
    )

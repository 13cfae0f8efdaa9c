"""POST /v1/payouts - issue a printable check or a live ACH payout"""

import random
import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from echeck_gateway.api.v1.schemas import PayoutCreateRequest, TransactionResponse
from echeck_gateway.api.v1.transactions import to_transaction_response
from echeck_gateway.api.dependencies import get_current_user_id, get_request_id, get_stripe_client
from echeck_gateway.infrastructure.database.session import get_db
from echeck_gateway.infrastructure.database.repositories import AccountRepository, TransactionRepository
from echeck_gateway.infrastructure.clients.stripe import StripePayoutClient
from echeck_gateway.domain.models import PayoutRequest
from echeck_gateway.domain.exceptions import PayoutError
from echeck_gateway.infrastructure.observability.metrics import record_payout
from echeck_gateway.infrastructure.observability.logging import log_payout
from echeck_gateway.utils.date_utils import today_iso

router = APIRouter()

STRIPE_BALANCE_ACCOUNT = "stripe-balance"


def generate_check_number() -> str:
    """Random 4-digit check number; uniqueness is the issuer's concern"""
    return str(random.randint(1000, 9999))


@router.post("/payouts", response_model=TransactionResponse, status_code=201)
async def create_payout(
    request_body: PayoutCreateRequest,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    stripe_client: StripePayoutClient = Depends(get_stripe_client),
):
    """
    Issue a payout to a recipient.

    Flow:
    1. Resolve the source account (required for printed checks)
    2. For stripe delivery, authorize the ACH payout first; nothing is stored on failure
    3. Persist the sent transaction (print → pending, stripe → completed)
    4. Return the stored transaction
    """
    start_time = time.time()
    request_id = get_request_id(request)
    amount_cents = int(request_body.amount * 100)
    memo = request_body.memo or request_body.purpose
    method = request_body.delivery_method

    account = None
    if request_body.from_account_id:
        account = AccountRepository(db).get_account(user_id, request_body.from_account_id)
        if not account:
            raise HTTPException(status_code=404, detail="Source account not found")

    stripe_transfer_id = None
    try:
        if method == "stripe":
            result = await stripe_client.create_payout(
                PayoutRequest(
                    amount_cents=amount_cents,
                    currency="usd",
                    description=f"TO: {request_body.recipient_name} - {memo}",
                    recipient_name=request_body.recipient_name,
                    recipient_routing=request_body.recipient_routing_number or "",
                    recipient_account=request_body.recipient_account_number or "",
                    payer_routing=account.routing_number if account else "",
                    payer_account=account.account_number if account else "",
                )
            )
            if not result.success:
                raise PayoutError(result.error or "Stripe payout failed")
            stripe_transfer_id = result.id

        transaction_repo = TransactionRepository(db)
        transaction = transaction_repo.create_transaction(
            user_id=user_id,
            type="sent",
            recipient_name=request_body.recipient_name,
            recipient_address=request_body.recipient_address,
            amount_cents=amount_cents,
            memo=memo,
            status="completed" if method == "stripe" else "pending",
            date=today_iso(),
            check_number=(request_body.check_number or generate_check_number()) if method == "print" else None,
            from_account_id=str(account.id) if account else STRIPE_BALANCE_ACCOUNT,
            delivery_method=method,
            stripe_transfer_id=stripe_transfer_id,
        )
        db.commit()
        db.refresh(transaction)

        duration_ms = (time.time() - start_time) * 1000
        record_payout(method, True, amount_cents)
        log_payout(request_id, user_id, str(transaction.id), method, amount_cents, stripe_transfer_id, duration_ms)

        return to_transaction_response(transaction)

    except PayoutError as e:
        record_payout(method, False, amount_cents)
        db.rollback()
        logging.error(f"Payout failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=502, detail=str(e))

    except Exception as e:
        db.rollback()
        if stripe_transfer_id:
            # Funds already moved; the transfer id must survive the lost write
            record_payout(method, False, amount_cents)
            logging.error(
                f"Stripe payout {stripe_transfer_id} executed but not recorded: {e}",
                extra={
                    "request_id": request_id,
                    "user_id": user_id,
                    "stripe_transfer_id": stripe_transfer_id,
                    "amount_cents": amount_cents,
                    "recipient_name": request_body.recipient_name,
                },
            )
        else:
            logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

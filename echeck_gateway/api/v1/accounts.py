"""/v1/accounts - link and manage issuer bank accounts"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from echeck_gateway.api.v1.schemas import (
    AccountCreateRequest,
    AccountListResponse,
    AccountResponse,
    AccountUpdateRequest,
)
from echeck_gateway.api.dependencies import get_current_user_id
from echeck_gateway.infrastructure.clients.stripe import mask_account_number
from echeck_gateway.infrastructure.database.models import BankAccountRecord
from echeck_gateway.infrastructure.database.session import get_db
from echeck_gateway.infrastructure.database.repositories import AccountRepository

router = APIRouter()


def to_account_response(account: BankAccountRecord) -> AccountResponse:
    return AccountResponse(
        account_id=str(account.id),
        bank_name=account.bank_name,
        bank_address=account.bank_address,
        routing_number=account.routing_number,
        account_number_masked=mask_account_number(account.account_number),
        fractional_routing=account.fractional_routing,
        is_default=account.is_default,
        created_at=account.created_at.isoformat(),
    )


def _get_owned_account(repo: AccountRepository, user_id: str, account_id: str) -> BankAccountRecord:
    account = repo.get_account(user_id, account_id)
    if not account:
        raise HTTPException(status_code=404, detail="Account not found")
    return account


@router.post("/accounts", response_model=AccountResponse, status_code=201)
def link_account(
    request_body: AccountCreateRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Link a business bank account for issuing checks.

    The first linked account becomes the issuer's default.
    """
    account_repo = AccountRepository(db)
    account = account_repo.create_account(
        user_id=user_id,
        bank_name=request_body.bank_name,
        routing_number=request_body.routing_number,
        account_number=request_body.account_number,
        bank_address=request_body.bank_address,
        fractional_routing=request_body.fractional_routing or None,
    )
    db.commit()
    db.refresh(account)

    logging.info("Account linked", extra={"user_id": user_id, "account_id": str(account.id)})
    return to_account_response(account)


@router.get("/accounts", response_model=AccountListResponse)
def list_accounts(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    accounts = AccountRepository(db).list_accounts(user_id)
    return AccountListResponse(user_id=user_id, accounts=[to_account_response(a) for a in accounts])


@router.patch("/accounts/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: str,
    request_body: AccountUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Patch display fields; routing and account numbers are fixed once linked"""
    account_repo = AccountRepository(db)
    account = _get_owned_account(account_repo, user_id, account_id)
    account_repo.update_account(account, **request_body.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(account)
    return to_account_response(account)


@router.post("/accounts/{account_id}/default", response_model=AccountListResponse)
def set_default_account(
    account_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    account_repo = AccountRepository(db)
    account = _get_owned_account(account_repo, user_id, account_id)
    account_repo.set_default(user_id, account.id)
    db.commit()

    accounts = account_repo.list_accounts(user_id)
    return AccountListResponse(user_id=user_id, accounts=[to_account_response(a) for a in accounts])


@router.delete("/accounts/{account_id}", status_code=204)
def unlink_account(
    account_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    account_repo = AccountRepository(db)
    account = _get_owned_account(account_repo, user_id, account_id)
    account_repo.delete_account(account)
    db.commit()

    logging.info("Account unlinked", extra={"user_id": user_id, "account_id": account_id})
    return Response(status_code=204)

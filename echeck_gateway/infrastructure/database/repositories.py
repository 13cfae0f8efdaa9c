"""Data access layer for issuer accounts and transactions"""

import uuid
from typing import Any, List, Optional
from sqlalchemy import update
from sqlalchemy.orm import Session
from echeck_gateway.infrastructure.database.models import BankAccountRecord, TransactionRecord
from echeck_gateway.domain.models import BankAccount, Transaction


def _parse_id(record_id: str | uuid.UUID) -> Optional[uuid.UUID]:
    if isinstance(record_id, uuid.UUID):
        return record_id
    try:
        return uuid.UUID(record_id)
    except ValueError:
        return None


class AccountRepository:
    """Repository for linked bank accounts, scoped to one issuer per call"""

    def __init__(self, db: Session):
        self.db = db

    def create_account(
        self,
        user_id: str,
        bank_name: str,
        routing_number: str,
        account_number: str,
        bank_address: Optional[str] = None,
        fractional_routing: Optional[str] = None,
    ) -> BankAccountRecord:
        """Link an account; the issuer's first account becomes the default"""
        is_first = (
            self.db.query(BankAccountRecord)
            .filter(BankAccountRecord.user_id == user_id)
            .count()
            == 0
        )
        db_account = BankAccountRecord(
            user_id=user_id,
            bank_name=bank_name,
            bank_address=bank_address,
            routing_number=routing_number,
            account_number=account_number,
            fractional_routing=fractional_routing,
            is_default=is_first,
        )
        self.db.add(db_account)
        self.db.flush()
        return db_account

    def get_account(self, user_id: str, account_id: str | uuid.UUID) -> Optional[BankAccountRecord]:
        """Fetch one account; accounts of other issuers are not visible"""
        account_uuid = _parse_id(account_id)
        if account_uuid is None:
            return None
        return (
            self.db.query(BankAccountRecord)
            .filter(BankAccountRecord.id == account_uuid, BankAccountRecord.user_id == user_id)
            .first()
        )

    def list_accounts(self, user_id: str) -> List[BankAccountRecord]:
        return (
            self.db.query(BankAccountRecord)
            .filter(BankAccountRecord.user_id == user_id)
            .order_by(BankAccountRecord.created_at.asc())
            .all()
        )

    def update_account(self, account: BankAccountRecord, **fields: Any) -> BankAccountRecord:
        """Patch the given fields, ignoring those left as None"""
        for name, value in fields.items():
            if value is not None:
                setattr(account, name, value)
        self.db.flush()
        return account

    def set_default(self, user_id: str, account_id: uuid.UUID) -> None:
        """Exactly one default account per issuer"""
        for account in self.list_accounts(user_id):
            account.is_default = account.id == account_id
        self.db.flush()

    def delete_account(self, account: BankAccountRecord) -> None:
        self.db.delete(account)
        self.db.flush()


class TransactionRepository:
    """Repository for payment transactions"""

    def __init__(self, db: Session):
        self.db = db

    def create_transaction(self, user_id: str, **fields: Any) -> TransactionRecord:
        db_transaction = TransactionRecord(user_id=user_id, **fields)
        self.db.add(db_transaction)
        self.db.flush()  # Get ID without committing
        return db_transaction

    def get_transaction(self, user_id: str, transaction_id: str | uuid.UUID) -> Optional[TransactionRecord]:
        """Fetch one transaction owned by the issuer"""
        transaction_uuid = _parse_id(transaction_id)
        if transaction_uuid is None:
            return None
        return (
            self.db.query(TransactionRecord)
            .filter(TransactionRecord.id == transaction_uuid, TransactionRecord.user_id == user_id)
            .first()
        )

    def list_transactions(
        self,
        user_id: str,
        type: Optional[str] = None,
        limit: int = 20,
    ) -> List[TransactionRecord]:
        """Fetch recent transactions, newest issue date first"""
        query = self.db.query(TransactionRecord).filter(TransactionRecord.user_id == user_id)
        if type:
            query = query.filter(TransactionRecord.type == type)
        return (
            query.order_by(TransactionRecord.date.desc(), TransactionRecord.created_at.desc())
            .limit(limit)
            .all()
        )

    def capture_signature(self, user_id: str, transaction_id: uuid.UUID, signature_data: str) -> bool:
        """
        Store the signature only while none is recorded.

        The check and the write are one UPDATE, so a signature committed by a
        concurrent request is never overwritten. Returns False when nothing
        was written.
        """
        stmt = (
            update(TransactionRecord)
            .where(
                TransactionRecord.id == transaction_id,
                TransactionRecord.user_id == user_id,
                TransactionRecord.signature_data.is_(None),
            )
            .values(signature_data=signature_data)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount == 1

    def complete_request(self, user_id: str, transaction_id: uuid.UUID, **payer_fields: Any) -> bool:
        """Mark a pending payment request completed; False if it already was"""
        stmt = (
            update(TransactionRecord)
            .where(
                TransactionRecord.id == transaction_id,
                TransactionRecord.user_id == user_id,
                TransactionRecord.type == "requested",
                TransactionRecord.status != "completed",
            )
            .values(status="completed", **payer_fields)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount == 1


def to_domain_account(record: BankAccountRecord) -> BankAccount:
    """Map ORM account row to domain model"""
    return BankAccount(
        bank_name=record.bank_name,
        routing_number=record.routing_number,
        account_number=record.account_number,
        bank_address=record.bank_address,
        fractional_routing=record.fractional_routing,
        is_default=record.is_default,
        account_id=str(record.id),
    )


def to_domain_transaction(record: TransactionRecord) -> Transaction:
    """Map ORM transaction row to domain model"""
    return Transaction(
        amount_cents=record.amount_cents,
        recipient_name=record.recipient_name,
        memo=record.memo or "",
        date=record.date,
        check_number=record.check_number,
        signature_data=record.signature_data,
        delivery_method=record.delivery_method or "print",
        type=record.type,
        status=record.status,
        transaction_id=str(record.id),
    )

"""SQLAlchemy ORM models for issuer accounts and payments"""

import uuid
from sqlalchemy import Column, BigInteger, Boolean, DateTime, Text, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class BankAccountRecord(Base):
    """Linked issuer bank account"""

    __tablename__ = "bank_account"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    bank_name = Column(Text, nullable=False)
    bank_address = Column(Text, nullable=True)
    routing_number = Column(Text, nullable=False)
    account_number = Column(Text, nullable=False)
    fractional_routing = Column(Text, nullable=True)
    is_default = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class TransactionRecord(Base):
    """Sent, received, or requested payment"""

    __tablename__ = "payment_transaction"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    type = Column(Text, nullable=False, default="sent")
    recipient_name = Column(Text, nullable=False)
    recipient_address = Column(Text, nullable=True)
    amount_cents = Column(BigInteger, nullable=False)
    memo = Column(Text, nullable=False, default="")
    status = Column(Text, nullable=False, default="pending")
    date = Column(Text, nullable=False)  # ISO issue date, YYYY-MM-DD
    check_number = Column(Text, nullable=True)
    from_account_id = Column(Text, nullable=True)
    delivery_method = Column(Text, nullable=True)
    stripe_transfer_id = Column(Text, nullable=True)
    signature_data = Column(Text, nullable=True)

    # Filled in by the payer when a payment request is fulfilled
    payer_bank_name = Column(Text, nullable=True)
    payer_bank_address = Column(Text, nullable=True)
    payer_routing_number = Column(Text, nullable=True)
    payer_account_number = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

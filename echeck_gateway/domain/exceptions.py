"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidAmountError(DomainException):
    """Amount is negative, non-finite, or not a number"""

    pass


class AmountOutOfRangeError(DomainException):
    """Amount is too large to be written out on a check"""

    pass


class PayoutError(DomainException):
    """Payout provider rejected or failed the transfer"""

    pass


class MemoAssistantError(DomainException):
    """Memo suggestion service failed or returned nothing usable"""

    pass


class SignatureAlreadyCapturedError(DomainException):
    """Transaction already carries a signature"""

    pass


class NotPrintableError(DomainException):
    """Transaction was not issued as a printable check"""

    pass

from enum import Enum

class BillingStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    COMPLETED = "COMPLETED"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


PAID_BILLING_STATUSES = {BillingStatus.PAID.value, BillingStatus.COMPLETED.value}


def is_paid_status(status: str) -> bool:
    return (status or "").upper() in PAID_BILLING_STATUSES

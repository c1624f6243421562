"""Shared schema fragments"""

CURRENCY_PATTERN = "^(USD|CNY|ILS)$"
PAYMENT_STATUS_PATTERN = "^(pending|approved)$"
ALLOCATION_METHOD_PATTERN = "^(שווה|נפח|משקל|עלות|כמות)$"
MILESTONE_LEVEL_PATTERN = "^(product|order)$"


def reject_null(value):
    """Partial updates may omit a field but not clear a required column"""
    if value is None:
        raise ValueError("may not be null")
    return value

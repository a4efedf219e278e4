"""Currency rounding and rupee display formatting"""

import math
from decimal import ROUND_HALF_UP, Decimal

RUPEE = "₹"


def round_currency(amount: float, places: int = 0) -> float:
    """Round half-up to `places` decimals; non-finite amounts become 0"""
    if amount is None or not math.isfinite(amount):
        return 0.0
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(amount)).quantize(quantum, rounding=ROUND_HALF_UP))


def group_indian(digits: str) -> str:
    """Indian digit grouping: last three digits, then pairs (12,34,567)"""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_inr(amount: float) -> str:
    """
    Format an amount as whole rupees with Indian grouping.

    Example:
        123456.4 -> "₹1,23,456"
        nan      -> "₹0"
    """
    rounded = int(round_currency(amount))
    sign = "-" if rounded < 0 else ""
    return f"{sign}{RUPEE}{group_indian(str(abs(rounded)))}"

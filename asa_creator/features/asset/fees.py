"""Display-only fee hint for asset creation.

The authoritative fee comes from the node's suggested params at submission
time; this estimate is never put on a transaction.
"""

import math

BASE_FEE_ALGO = 0.1
SUPPLY_LOG_OFFSET = 5


def estimate_fee(total_supply: int) -> float:
    """``BASE_FEE * max(1, log10(total_supply) - 5)``, unclamped above."""
    if total_supply < 1:
        return BASE_FEE_ALGO
    multiplier = max(1.0, math.log10(total_supply) - SUPPLY_LOG_OFFSET)
    return BASE_FEE_ALGO * multiplier


def format_fee(fee: float) -> str:
    return f"{fee:.3f}"

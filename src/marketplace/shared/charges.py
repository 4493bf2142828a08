"""Platform service charges.

Money is rounded half-up to two decimals. Rates can be overridden per
deployment through the environment.
"""

import os
from decimal import ROUND_HALF_UP, Decimal

DELIVERY_SERVICE_RATE = float(os.getenv("DELIVERY_SERVICE_RATE", "0.10"))
WITHDRAWAL_SERVICE_RATE = float(os.getenv("WITHDRAWAL_SERVICE_RATE", "0.18"))

_CENT = Decimal("0.01")


def to_money(value) -> float:
    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def service_charge(amount: float, rate: float) -> float:
    """Return ``round(amount * rate, 2)`` computed in decimal arithmetic."""
    return to_money(Decimal(str(amount)) * Decimal(str(rate)))


def split_charge(amount: float, rate: float) -> tuple[float, float]:
    """Split a gross amount into ``(service_charge, net_amount)``."""
    charge = service_charge(amount, rate)
    return charge, to_money(Decimal(str(amount)) - Decimal(str(charge)))

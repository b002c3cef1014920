# jobtrack/services/rounding.py
from decimal import Decimal, ROUND_HALF_UP

def round_half_up(x: float) -> int:
    """Round to the nearest int with .5 going away from zero (round() would give 2 for 2.5)."""
    return int(Decimal(str(x)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal, localcontext

from domain.account import BALANCE_PRECISION

DISPLAY_PRECISION = Decimal("0.0001")


def format_decimal(value: Decimal) -> str:
    with localcontext(prec=BALANCE_PRECISION):
        quantized = value.quantize(DISPLAY_PRECISION, rounding=ROUND_HALF_EVEN).normalize()
    if quantized.is_zero():
        return "0"
    # Avoid scientific notation for integers.
    if quantized == quantized.to_integral():
        return f"{quantized:.0f}"
    return format(quantized, "f")

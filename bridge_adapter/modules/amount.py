"""
Amount Module

Exact conversion between human decimal text and integer base units.
Only string and integer arithmetic is used; no floats, no Decimal rounding.
"""

import re

from ..errors import AmountError, AssetResolutionError


AMOUNT_PATTERN = re.compile(r"-?([0-9]+(\.[0-9]*)?|\.[0-9]+)")

MAX_DECIMALS = 255


def _check_decimals(decimals: int) -> int:
    if isinstance(decimals, bool) or not isinstance(decimals, int) or not 0 <= decimals <= MAX_DECIMALS:
        raise AssetResolutionError.invalid_decimals("amount", decimals)
    return decimals


class AmountCodec:
    """
    Decimal string <-> base units

    Usage:
        AmountCodec.parse("0.5", 9)          # 500000000
        AmountCodec.format(500000000, 9)     # "0.5"
        AmountCodec.to_units("0", 18, allow_zero=True)  # 0
    """

    @staticmethod
    def to_units(text: str, decimals: int, allow_zero: bool = False) -> int:
        """
        Convert decimal text to base units

        Args:
            text: Decimal amount (e.g., "1.25", ".5", "10.")
            decimals: Number of fractional digits the asset supports
            allow_zero: Accept zero (used for call values)

        Returns:
            Integer amount in base units

        Raises:
            AmountError: EMPTY, NON_NUMERIC, PRECISION_EXCEEDED or NON_POSITIVE
        """
        _check_decimals(decimals)

        trimmed = (text or "").strip() if isinstance(text, str) else str(text).strip()
        if not trimmed:
            raise AmountError.empty()

        if not AMOUNT_PATTERN.fullmatch(trimmed):
            raise AmountError.non_numeric(trimmed)

        negative = trimmed.startswith("-")
        body = trimmed[1:] if negative else trimmed
        whole, _, fraction = body.partition(".")

        # Trailing zeros never add precision
        fraction = fraction.rstrip("0")
        if len(fraction) > decimals:
            raise AmountError.precision_exceeded(trimmed, decimals)

        units = int(whole or "0") * 10 ** decimals
        if fraction:
            units += int(fraction.ljust(decimals, "0"))
        if negative:
            units = -units

        if units < 0 or (units == 0 and not allow_zero):
            raise AmountError.non_positive(trimmed)

        return units

    @classmethod
    def parse(cls, text: str, decimals: int) -> int:
        """Convert a user amount to base units; the result is always > 0"""
        return cls.to_units(text, decimals, allow_zero=False)

    @staticmethod
    def format(units: int, decimals: int) -> str:
        """
        Format base units as the shortest exact decimal text

        No trailing fractional zeros and no trailing dot:
        format(500000000, 9) == "0.5", format(10**9, 9) == "1".
        """
        _check_decimals(decimals)

        sign = "-" if units < 0 else ""
        whole, fraction = divmod(abs(units), 10 ** decimals)
        if decimals == 0 or fraction == 0:
            return f"{sign}{whole}"

        fraction_text = str(fraction).rjust(decimals, "0").rstrip("0")
        return f"{sign}{whole}.{fraction_text}"

"""Fixed-point integer arithmetic for canonical-precision amounts.

All prices, rates and amounts are int. No float, no Decimal.
Canonical precision is 18 fractional digits: 1 USD == 10**18, and the
settlement currency's smallest unit is 10**-18 of a whole unit.
"""

from src.cl_common.errors import ArithmeticOverflowError

CANONICAL_PRECISION: int = 18
CANONICAL_UNIT: int = 10**CANONICAL_PRECISION

# Every stored or derived amount must fit an unsigned 256-bit word
MAX_UINT256: int = 2**256 - 1

# Largest digit count whose scale factor 10**n still fits MAX_UINT256
MAX_PRECISION: int = 77


def _check_bounds(value: int, what: str) -> int:
    if value > MAX_UINT256:
        raise ArithmeticOverflowError(f"{what} exceeds 256-bit bound")
    return value


def checked_mul(a: int, b: int) -> int:
    """Unsigned multiply that raises instead of silently exceeding MAX_UINT256."""
    if a < 0 or b < 0:
        raise ValueError(f"Operands must be non-negative, got {a} and {b}")
    return _check_bounds(a * b, f"{a} * {b}")


def normalize(
    raw_value: int,
    from_precision: int,
    to_precision: int = CANONICAL_PRECISION,
) -> int:
    """Rescale raw_value from from_precision fractional digits to to_precision.

    Fewer digits → multiply by 10**(to - from).
    More digits → floor-divide by 10**(from - to); sub-unit digits are dropped.
    Equal → unchanged.
    """
    if raw_value < 0:
        raise ValueError(f"raw_value must be non-negative, got {raw_value}")
    if from_precision < 0 or to_precision < 0:
        raise ValueError(
            f"Precision must be non-negative, got {from_precision} -> {to_precision}"
        )
    if from_precision > MAX_PRECISION or to_precision > MAX_PRECISION:
        raise ValueError(
            f"Precision must be at most {MAX_PRECISION}, got {from_precision} -> {to_precision}"
        )

    if from_precision < to_precision:
        return checked_mul(raw_value, 10 ** (to_precision - from_precision))
    if from_precision > to_precision:
        return raw_value // 10 ** (from_precision - to_precision)
    return _check_bounds(raw_value, f"{raw_value}")


def to_canonical(whole_units: int) -> int:
    """Whole reference-currency units → canonical fixed-point: 5 -> 5 * 10**18."""
    return checked_mul(whole_units, CANONICAL_UNIT)


def format_fixed(value: int, precision: int = CANONICAL_PRECISION) -> str:
    """Exact decimal rendering: 500000000000000 -> '0.0005', 2 * 10**21 -> '2,000'."""
    sign = "-" if value < 0 else ""
    whole, frac = divmod(abs(value), 10**precision)
    frac_str = f"{frac:0{precision}d}".rstrip("0") if precision else ""
    if frac_str:
        return f"{sign}{whole:,}.{frac_str}"
    return f"{sign}{whole:,}"


def usd_display(canonical: int) -> str:
    """Canonical USD → display string truncated to cents: 5 * 10**18 -> '$5.00'."""
    cents = abs(canonical) // 10 ** (CANONICAL_PRECISION - 2)
    sign = "-" if canonical < 0 else ""
    return f"{sign}${cents // 100:,}.{cents % 100:02d}"

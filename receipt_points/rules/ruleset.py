# receipt_points/rules/ruleset.py
from decimal import Decimal
from typing import Callable, Tuple

from ..schemas import Receipt

ROUND_DOLLAR_POINTS = 50
QUARTER_MULTIPLE_POINTS = 25
ITEM_PAIR_POINTS = 5
ODD_DAY_POINTS = 6
AFTERNOON_POINTS = 10

AFTERNOON_START_HOUR = 14  # inclusive
AFTERNOON_END_HOUR = 16    # exclusive

CENTS_PER_DOLLAR = 100
CENTS_PER_QUARTER = 25
# ceil(price * 0.2) == ceil(cents / 500)
CENTS_PER_DESCRIPTION_POINT = 500

def to_cents(amount: Decimal) -> int:
    """Exact integer cents. Works from the digits, so no decimal context
    precision limit applies however large the amount is."""
    _, digits, exponent = amount.as_tuple()
    value = int("".join(map(str, digits)) or "0")
    shift = exponent + 2
    return value * 10 ** shift if shift >= 0 else value // 10 ** -shift

def _is_ascii_alnum(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()

def retailer_name(receipt: Receipt, keep_spaces: bool = False) -> int:
    """1 point per ASCII letter or digit in the retailer name.

    The default strips everything else before counting. ``keep_spaces=True``
    keeps spaces in the stripped name, so each space also scores a point.
    """
    kept = [
        ch for ch in receipt.retailer
        if _is_ascii_alnum(ch) or (keep_spaces and ch == " ")
    ]
    return len(kept)

def round_dollar_total(receipt: Receipt) -> int:
    return ROUND_DOLLAR_POINTS if to_cents(receipt.total) % CENTS_PER_DOLLAR == 0 else 0

def quarter_multiple_total(receipt: Receipt) -> int:
    return QUARTER_MULTIPLE_POINTS if to_cents(receipt.total) % CENTS_PER_QUARTER == 0 else 0

def item_pairs(receipt: Receipt) -> int:
    return (len(receipt.items) // 2) * ITEM_PAIR_POINTS

def odd_purchase_day(receipt: Receipt) -> int:
    return ODD_DAY_POINTS if receipt.purchase_date.day % 2 == 1 else 0

def afternoon_purchase(receipt: Receipt) -> int:
    # 14:00 is in the window, 16:00 is not
    hour = receipt.purchase_time.hour
    return AFTERNOON_POINTS if AFTERNOON_START_HOUR <= hour < AFTERNOON_END_HOUR else 0

def item_descriptions(receipt: Receipt) -> int:
    """ceil(price * 0.2) for each item whose trimmed description length is a
    positive multiple of 3. Blank descriptions never score."""
    points = 0
    for item in receipt.items:
        length = len(item.short_description.strip())
        if length and length % 3 == 0:
            points += -(-to_cents(item.price) // CENTS_PER_DESCRIPTION_POINT)
    return points

# Evaluation order is fixed so breakdowns are reproducible.
RULES: Tuple[Tuple[str, Callable[[Receipt], int]], ...] = (
    ("retailer_name", retailer_name),
    ("round_dollar_total", round_dollar_total),
    ("quarter_multiple_total", quarter_multiple_total),
    ("item_pairs", item_pairs),
    ("odd_purchase_day", odd_purchase_day),
    ("afternoon_purchase", afternoon_purchase),
    ("item_descriptions", item_descriptions),
)

import re
from datetime import date, time
from decimal import Decimal
from typing import Annotated, Dict, Tuple

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

# Wire formats are ASCII-only and matched in full
MONEY_RE = re.compile(r"[0-9]{1,64}\.[0-9]{2}")
DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
TIME_RE = re.compile(r"[0-9]{2}:[0-9]{2}(:[0-9]{2})?")

def _parse_money(value) -> Decimal:
    if isinstance(value, Decimal):
        value = str(value)
    if not isinstance(value, str) or not MONEY_RE.fullmatch(value):
        raise ValueError("must be a string amount with two decimal places, e.g. '6.49'")
    return Decimal(value)

def _wire_string(pattern: re.Pattern, example: str, python_type: type):
    """Only accept `python_type` itself or a string in the documented format,
    so JSON numbers are never read as timestamps."""
    def check(value):
        if isinstance(value, python_type):
            return value
        if not isinstance(value, str) or not pattern.fullmatch(value):
            raise ValueError(f"must be a string formatted like {example!r}")
        return value
    return BeforeValidator(check)

Money = Annotated[Decimal, BeforeValidator(_parse_money)]
PurchaseDate = Annotated[date, _wire_string(DATE_RE, "2022-01-01", date)]
PurchaseTime = Annotated[time, _wire_string(TIME_RE, "13:01", time)]


class LineItem(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    short_description: str = Field(alias="shortDescription")
    price: Money


class Receipt(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    retailer: str
    purchase_date: PurchaseDate = Field(alias="purchaseDate")
    purchase_time: PurchaseTime = Field(alias="purchaseTime")
    items: Tuple[LineItem, ...] = ()
    total: Money


class ProcessResponse(BaseModel):
    id: str

class PointsResponse(BaseModel):
    score: int

class BreakdownResponse(BaseModel):
    score: int
    rules: Dict[str, int]

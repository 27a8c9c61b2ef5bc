# scoring.py
from __future__ import annotations
from typing import Dict

from ..rules.ruleset import RULES
from ..schemas import Receipt

def score_breakdown(receipt: Receipt) -> Dict[str, int]:
    """
    Returns {rule_name: points} for every rule, in evaluation order.
    Rules are independent; a rule that does not apply contributes 0.
    """
    return {name: rule(receipt) for name, rule in RULES}

def score_receipt(receipt: Receipt) -> int:
    return sum(score_breakdown(receipt).values())

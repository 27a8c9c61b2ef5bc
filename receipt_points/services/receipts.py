from typing import Dict

from ..schemas import Receipt
from ..storage.repository import ReceiptStore
from ..utils.logging import logger
from .scoring import score_breakdown, score_receipt

def submit_receipt(store: ReceiptStore, receipt: Receipt) -> str:
    receipt_id = store.store(receipt)
    logger.info("Accepted receipt %s from %r (%d items, total %s)",
                receipt_id, receipt.retailer, len(receipt.items), receipt.total)
    return receipt_id

def receipt_points(store: ReceiptStore, receipt_id: str) -> int:
    """Raises ReceiptNotFound for unknown ids."""
    points = score_receipt(store.lookup(receipt_id))
    logger.info("Receipt %s scored %d", receipt_id, points)
    return points

def receipt_breakdown(store: ReceiptStore, receipt_id: str) -> Dict[str, int]:
    return score_breakdown(store.lookup(receipt_id))

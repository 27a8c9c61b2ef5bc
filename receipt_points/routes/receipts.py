from fastapi import APIRouter, Depends

from ..schemas import Receipt, ProcessResponse, PointsResponse, BreakdownResponse
from ..services.receipts import submit_receipt, receipt_points, receipt_breakdown
from ..storage.repository import ReceiptStore, get_store

router = APIRouter(prefix="/receipts", tags=["receipts"])

@router.post("/process", response_model=ProcessResponse)
def process(payload: Receipt, store: ReceiptStore = Depends(get_store)):
    return ProcessResponse(id=submit_receipt(store, payload))

@router.get("/{receipt_id}/points", response_model=PointsResponse)
def points(receipt_id: str, store: ReceiptStore = Depends(get_store)):
    return PointsResponse(score=receipt_points(store, receipt_id))

@router.get("/{receipt_id}/breakdown", response_model=BreakdownResponse)
def breakdown(receipt_id: str, store: ReceiptStore = Depends(get_store)):
    rules = receipt_breakdown(store, receipt_id)
    return BreakdownResponse(score=sum(rules.values()), rules=rules)

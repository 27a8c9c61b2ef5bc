from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import settings
from .errors import ReceiptNotFound, IdGenerationExhausted
from .routes.receipts import router as receipts_router
from .utils.logging import logger

app = FastAPI(title="Receipt Points",
              description="Scores submitted purchase receipts",
    version="0.1.0",
    docs_url="/docs",          # Swagger UI
    redoc_url="/redoc",        # ReDoc
    openapi_url="/openapi.json")

app.include_router(receipts_router)

@app.exception_handler(RequestValidationError)
async def malformed_receipt(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST,
                        content={"detail": jsonable_encoder(exc.errors())})

@app.exception_handler(ReceiptNotFound)
async def receipt_not_found(request: Request, exc: ReceiptNotFound):
    logger.info("Lookup miss for receipt %s", exc.receipt_id)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND,
                        content={"detail": "No receipt found for that ID."})

@app.exception_handler(IdGenerationExhausted)
async def id_generation_exhausted(request: Request, exc: IdGenerationExhausted):
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                        content={"detail": "Could not allocate a receipt ID."})

@app.get("/health")
def health():
    return {"ok": True}

if __name__ == "__main__":
    import uvicorn
    logger.info("Starting receipt points service (env=%s)", settings.ENV)
    uvicorn.run("receipt_points.main:app", host=settings.HOST, port=settings.PORT)

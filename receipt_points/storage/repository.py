# receipt_points/storage/repository.py
from __future__ import annotations

import threading
import uuid
from contextlib import nullcontext
from typing import Callable, Dict, Optional, Protocol

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from ..config import settings
from ..database import create_db_engine, create_sessionmaker, Base
from ..errors import IdGenerationExhausted, ReceiptNotFound
from ..models import StoredReceipt
from ..schemas import Receipt
from ..utils.logging import logger

IdFactory = Callable[[], str]

def new_receipt_id() -> str:
    return str(uuid.uuid4())


class ReceiptStore(Protocol):
    def store(self, receipt: Receipt) -> str: ...

    def lookup(self, receipt_id: str) -> Receipt: ...


def _resolve_max_attempts(max_attempts: Optional[int]) -> int:
    if max_attempts is None:
        return settings.ID_MAX_ATTEMPTS
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
    return max_attempts

def _exhausted(attempts: int) -> IdGenerationExhausted:
    logger.error("Gave up allocating a receipt id after %d attempts", attempts)
    return IdGenerationExhausted(attempts)


class InMemoryReceiptStore:
    """Receipts in a dict; id check and insert happen under one lock."""

    def __init__(self, id_factory: Optional[IdFactory] = None, max_attempts: Optional[int] = None):
        self._id_factory = id_factory or new_receipt_id
        self._max_attempts = _resolve_max_attempts(max_attempts)
        self._receipts: Dict[str, Receipt] = {}
        self._lock = threading.Lock()

    def store(self, receipt: Receipt) -> str:
        with self._lock:
            for attempt in range(1, self._max_attempts + 1):
                receipt_id = self._id_factory()
                if receipt_id not in self._receipts:
                    self._receipts[receipt_id] = receipt
                    logger.info("Stored receipt %s", receipt_id)
                    return receipt_id
                logger.warning("Receipt id collision on %s (attempt %d/%d)",
                               receipt_id, attempt, self._max_attempts)
        raise _exhausted(self._max_attempts)

    def lookup(self, receipt_id: str) -> Receipt:
        with self._lock:
            receipt = self._receipts.get(receipt_id)
        if receipt is None:
            raise ReceiptNotFound(receipt_id)
        return receipt


class SqlReceiptStore:
    """
    Receipts as JSON documents in a SQL table keyed by id.
    A duplicate id fails the insert on the primary key and is retried.
    """

    def __init__(self, engine: Engine, id_factory: Optional[IdFactory] = None,
                 max_attempts: Optional[int] = None):
        self._id_factory = id_factory or new_receipt_id
        self._max_attempts = _resolve_max_attempts(max_attempts)
        self._sessions = create_sessionmaker(engine)
        # sqlite connections must not be used from two threads at once
        self._lock = threading.Lock() if engine.dialect.name == "sqlite" else nullcontext()
        Base.metadata.create_all(bind=engine)

    def store(self, receipt: Receipt) -> str:
        document = receipt.model_dump(mode="json", by_alias=True)
        for attempt in range(1, self._max_attempts + 1):
            receipt_id = self._id_factory()
            with self._lock, self._sessions() as db:
                db.add(StoredReceipt(id=receipt_id, document=document))
                try:
                    db.commit()
                except IntegrityError:
                    db.rollback()
                    logger.warning("Receipt id collision on %s (attempt %d/%d)",
                                   receipt_id, attempt, self._max_attempts)
                    continue
            logger.info("Stored receipt %s", receipt_id)
            return receipt_id
        raise _exhausted(self._max_attempts)

    def lookup(self, receipt_id: str) -> Receipt:
        with self._lock, self._sessions() as db:
            row = db.get(StoredReceipt, receipt_id)
            if row is None:
                raise ReceiptNotFound(receipt_id)
            document = row.document
        return Receipt.model_validate(document)


def build_store(backend: str) -> ReceiptStore:
    backend = (backend or "").strip().lower()
    if backend == "memory":
        return InMemoryReceiptStore()
    if backend == "sql":
        return SqlReceiptStore(create_db_engine(settings.DATABASE_URL))
    raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")

_store: Optional[ReceiptStore] = None
_store_lock = threading.Lock()

def get_store() -> ReceiptStore:
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                _store = build_store(settings.STORE_BACKEND)
                logger.info("Receipt store ready (backend=%s, env=%s)",
                            settings.STORE_BACKEND, settings.ENV)
    return _store

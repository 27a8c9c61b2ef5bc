import threading
from decimal import Decimal

import pytest
from pydantic import ValidationError

from receipt_points.config import Settings
from receipt_points.database import create_db_engine
from receipt_points.errors import IdGenerationExhausted, ReceiptNotFound
from receipt_points.schemas import Receipt
from receipt_points.storage.repository import InMemoryReceiptStore, SqlReceiptStore, build_store

RECEIPT = Receipt.model_validate({
    "retailer": "Walgreens",
    "purchaseDate": "2022-01-02",
    "purchaseTime": "08:13",
    "items": [
        {"shortDescription": "Pepsi - 12-oz", "price": "1.25"},
        {"shortDescription": "Dasani", "price": "1.40"},
    ],
    "total": "2.65",
})

def memory_store(**kw):
    return InMemoryReceiptStore(**kw)

def sql_store(**kw):
    return SqlReceiptStore(create_db_engine("sqlite://"), **kw)

backends = pytest.mark.parametrize("make_store", [memory_store, sql_store], ids=["memory", "sql"])

@backends
def test_store_then_lookup_round_trip(make_store):
    store = make_store()
    rid = store.store(RECEIPT)
    assert store.lookup(rid) == RECEIPT

@backends
def test_ids_are_distinct(make_store):
    store = make_store()
    ids = {store.store(RECEIPT) for _ in range(50)}
    assert len(ids) == 50

@backends
def test_lookup_unknown_id_raises(make_store):
    store = make_store()
    store.store(RECEIPT)
    with pytest.raises(ReceiptNotFound) as exc:
        store.lookup("does-not-exist")
    assert exc.value.receipt_id == "does-not-exist"

@backends
def test_collision_is_retried(make_store):
    ids = iter(["dup", "dup", "fresh"])
    store = make_store(id_factory=lambda: next(ids))
    assert store.store(RECEIPT) == "dup"
    assert store.store(RECEIPT) == "fresh"
    assert store.lookup("fresh") == RECEIPT

@backends
def test_collisions_exhaust_after_max_attempts(make_store):
    calls = []
    def always_dup():
        calls.append(1)
        return "dup"
    store = make_store(id_factory=always_dup, max_attempts=4)
    store.store(RECEIPT)
    calls.clear()
    with pytest.raises(IdGenerationExhausted) as exc:
        store.store(RECEIPT)
    assert exc.value.attempts == 4
    assert len(calls) == 4

def test_concurrent_stores_get_distinct_ids():
    store = InMemoryReceiptStore()
    results = []
    lock = threading.Lock()

    def worker():
        for _ in range(25):
            rid = store.store(RECEIPT)
            with lock:
                results.append(rid)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(results) == 200
    assert len(set(results)) == 200

def test_build_store_rejects_unknown_backend():
    with pytest.raises(ValueError):
        build_store("redis")
    assert isinstance(build_store("memory"), InMemoryReceiptStore)

@backends
def test_max_attempts_must_be_positive(make_store):
    with pytest.raises(ValueError):
        make_store(max_attempts=0)

def test_settings_reject_zero_id_attempts():
    with pytest.raises(ValidationError):
        Settings(ID_MAX_ATTEMPTS=0)

def test_sql_store_keeps_large_amounts_exact():
    store = sql_store()
    receipt = RECEIPT.model_copy(update={"total": Decimal("1" * 40 + ".00")})
    assert store.lookup(store.store(receipt)).total == Decimal("1" * 40 + ".00")

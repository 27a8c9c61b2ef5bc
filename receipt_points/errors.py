class ReceiptNotFound(LookupError):
    def __init__(self, receipt_id: str):
        super().__init__(f"No receipt stored under id {receipt_id!r}")
        self.receipt_id = receipt_id


class IdGenerationExhausted(RuntimeError):
    """The id factory kept producing ids that are already taken."""

    def __init__(self, attempts: int):
        super().__init__(f"Could not allocate a unique receipt id after {attempts} attempts")
        self.attempts = attempts

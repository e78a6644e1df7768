"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/Viewer
  2xxx: Lot
  3xxx: Bid
  9xxx: System

Placement errors (2001/2002, 3001-3005) are surfaced verbatim to the bidder.
ConsistencyFault is logged and self-healed, never returned to a client.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/Viewer ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Invalid or expired token", 401)


class AdminRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Administrator privileges required", 403)


# --- 2xxx: Lot ---

class LotNotFoundError(AppError):
    def __init__(self, lot_id: str) -> None:
        super().__init__(2001, f"Lot not found: {lot_id}", 404)


class LotClosedError(AppError):
    def __init__(self, lot_id: str) -> None:
        super().__init__(2002, f"Lot is closed for bidding: {lot_id}", 422)


class LotStillOpenError(AppError):
    def __init__(self, lot_id: str) -> None:
        super().__init__(2003, f"Lot has not closed yet: {lot_id}", 422)


class InvalidLotError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2004, f"Invalid lot: {detail}", 422)


# --- 3xxx: Bid ---

class InvalidPriceGranularityError(AppError):
    def __init__(self, price: int, step: int) -> None:
        super().__init__(
            3001, f"Bid price {price} must be a positive multiple of {step}", 422
        )


class BidTooLowError(AppError):
    def __init__(self, price: int) -> None:
        super().__init__(3002, f"Bid price {price} is not higher than the current bid", 422)


class BidTooHighError(AppError):
    def __init__(self, price: int, ceiling: int) -> None:
        super().__init__(3003, f"Bid price {price} exceeds the maximum of {ceiling}", 422)


class InvalidQuantityError(AppError):
    def __init__(self, units: int, unit_quantity: int) -> None:
        super().__init__(
            3004, f"Requested units {units} must be between 1 and {unit_quantity}", 422
        )


class MissingBidderNameError(AppError):
    def __init__(self) -> None:
        super().__init__(3005, "Bidder name is required", 422)


class BidNotFoundError(AppError):
    def __init__(self, bid_id: str) -> None:
        super().__init__(3006, f"Bid not found: {bid_id}", 404)


# --- 9xxx: System ---

class ConsistencyFault(AppError):
    """Cached leader fields on a closed lot disagree with the ledger."""

    def __init__(
        self,
        lot_id: str,
        cached: tuple[int, str | None],
        expected: tuple[int, str | None],
    ) -> None:
        self.lot_id = lot_id
        self.cached = cached
        self.expected = expected
        super().__init__(
            9001,
            f"Lot {lot_id} cache {cached} diverges from ledger {expected}",
            500,
        )


class StorageError(AppError):
    def __init__(self, detail: str = "Operation failed, please retry") -> None:
        super().__init__(9002, detail, 503)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9003, detail, 500)

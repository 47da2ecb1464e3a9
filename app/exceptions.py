# app/exceptions.py
"""
Domain errors raised by the parking engine.
Every error is terminal: callers get it verbatim, nothing is retried internally.
main.py maps ParkingError to a JSON response using status_code / error_code.
"""


class ParkingError(Exception):
    status_code = 400
    error_code = "PARKING_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ── NotFound ─────────────────────────────────────────────────────────────────
class NotFoundError(ParkingError):
    status_code = 404
    error_code = "NOT_FOUND"


class SlotNotFound(NotFoundError):
    error_code = "SLOT_NOT_FOUND"


class ZoneNotFound(NotFoundError):
    error_code = "ZONE_NOT_FOUND"


class SessionNotFound(NotFoundError):
    error_code = "SESSION_NOT_FOUND"


class NoActiveSession(NotFoundError):
    error_code = "NO_ACTIVE_SESSION"


# ── InvalidStateTransition ───────────────────────────────────────────────────
class InvalidStateTransitionError(ParkingError):
    status_code = 409
    error_code = "INVALID_STATE_TRANSITION"


class SlotChangeForbidden(InvalidStateTransitionError):
    error_code = "SLOT_CHANGE_FORBIDDEN"


class SessionNotActive(InvalidStateTransitionError):
    error_code = "SESSION_NOT_ACTIVE"


# ── ResourceUnavailable ──────────────────────────────────────────────────────
class ResourceUnavailableError(ParkingError):
    status_code = 409
    error_code = "RESOURCE_UNAVAILABLE"


class SlotUnavailable(ResourceUnavailableError):
    error_code = "SLOT_UNAVAILABLE"


class ZoneMismatch(ResourceUnavailableError):
    error_code = "ZONE_MISMATCH"


class NoAvailableSlots(ResourceUnavailableError):
    error_code = "NO_AVAILABLE_SLOTS"


# ── ValidationFailure ────────────────────────────────────────────────────────
class ValidationFailureError(ParkingError):
    status_code = 422
    error_code = "VALIDATION_FAILURE"


# ── Storage ──────────────────────────────────────────────────────────────────
class RecordStoreError(ParkingError):
    status_code = 500
    error_code = "RECORD_STORE_ERROR"

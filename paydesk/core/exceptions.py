from typing import Any, Dict, Optional

class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class InvalidPeriodError(AppException):
    """Raised for a pay period that cannot be parsed or whose start is after its end."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=400,
            error_code="INVALID_PERIOD",
            details=details
        )

class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            message=f"{entity} {entity_id} not found",
            status_code=404,
            error_code="NOT_FOUND",
            details={"entity": entity, "id": str(entity_id)}
        )

class DuplicateEntityError(AppException):
    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            message=f"{entity} {entity_id} already exists",
            status_code=409,
            error_code="DUPLICATE_ENTITY",
            details={"entity": entity, "id": str(entity_id)}
        )

class InvalidStatusTransitionError(AppException):
    """Payroll records only move forward: Draft -> Pending -> Paid."""
    def __init__(self, current: str, requested: str):
        super().__init__(
            message=f"Cannot move payroll record from {current} to {requested}",
            status_code=409,
            error_code="INVALID_STATUS_TRANSITION",
            details={"current": current, "requested": requested}
        )

class LedgerStateError(AppException):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=409,
            error_code="LEDGER_STATE",
            details=details
        )

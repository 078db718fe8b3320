"""
Domain exception taxonomy.

Services raise these; only the HTTP layer translates them into responses.
"""
from fastapi import HTTPException, status


class PartsLedgerException(Exception):
    code = "DOMAIN_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class ValidationException(PartsLedgerException):
    """Malformed input, or a change that would break a quantity invariant."""

    code = "VALIDATION_ERROR"


class EntityNotFoundException(PartsLedgerException):
    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class StateTransitionException(PartsLedgerException):
    """Illegal state-machine move, or an operation not allowed in the current state."""

    code = "INVALID_STATE"


class DuplicateEntityException(PartsLedgerException):
    code = "DUPLICATE_ENTITY"


_STATUS_CODES = {
    ValidationException: status.HTTP_400_BAD_REQUEST,
    EntityNotFoundException: status.HTTP_404_NOT_FOUND,
    StateTransitionException: status.HTTP_409_CONFLICT,
    DuplicateEntityException: status.HTTP_409_CONFLICT,
}


def to_http_exception(exc: PartsLedgerException) -> HTTPException:
    status_code = status.HTTP_400_BAD_REQUEST
    for exc_type, code in _STATUS_CODES.items():
        if isinstance(exc, exc_type):
            status_code = code
            break
    return HTTPException(status_code=status_code, detail=exc.to_dict())

"""Error taxonomy for the transaction API and store-outcome mapping."""

from typing import Optional

from .database import StoreResult, StoreStatus


class ApiError(Exception):
    status_code = 500
    message = 'Internal server error'

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidIdentifier(ApiError):
    status_code = 400
    message = 'Invalid transaction ID format'


class MissingIdentifier(ApiError):
    status_code = 400
    message = 'Transaction ID is required'


class InvalidField(ApiError):
    status_code = 400

    def __init__(self, field: str):
        self.field = field
        super().__init__(f'Invalid {field}')


class NotFound(ApiError):
    status_code = 404
    message = 'Transaction not found'


class DuplicateIdentifier(ApiError):
    status_code = 409
    message = 'A transaction with this ID already exists'


class InternalFailure(ApiError):
    status_code = 500


def error_for(result: StoreResult, failure_message: str) -> ApiError:
    """Translate a failed store outcome into the matching API error."""
    if result.status is StoreStatus.NOT_FOUND:
        return NotFound()
    if result.status is StoreStatus.CONFLICT:
        return DuplicateIdentifier()
    return InternalFailure(failure_message)

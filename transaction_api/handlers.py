"""Request handling for the transaction endpoints.

Each operation validates its input before touching the store, issues exactly
one store call and turns the outcome into a ``(status_code, payload)`` pair.
Failures are raised as :class:`~transaction_api.errors.ApiError` subclasses.
"""

from typing import Any, Dict, Optional, Tuple

from loguru import logger

from .database import TransactionStore
from .errors import InvalidField, InvalidIdentifier, MissingIdentifier, error_for
from .validation import coerce_amount, coerce_date, is_valid_object_id

DELETED_MESSAGE = 'Transaction deleted successfully'


def _require_valid_id(transaction_id: Any):
    if not is_valid_object_id(transaction_id):
        raise InvalidIdentifier()


def _coerce_description(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise InvalidField('description')


def _coerce_fields(body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'amount': coerce_amount(body.get('amount')),
        'date': coerce_date(body.get('date')),
        'description': _coerce_description(body.get('description')),
    }


class TransactionHandler:
    def __init__(self, store: TransactionStore):
        self.store = store

    async def list(self) -> Tuple[int, Any]:
        result = await self.store.list_all()
        if not result.ok:
            raise error_for(result, 'Failed to fetch transactions')
        return 200, result.transactions

    async def get(self, transaction_id: str) -> Tuple[int, Any]:
        _require_valid_id(transaction_id)
        result = await self.store.get(transaction_id)
        if not result.ok:
            raise error_for(result, 'Failed to fetch transaction')
        return 200, result.transaction

    async def create(self, body: Dict[str, Any]) -> Tuple[int, Any]:
        transaction_id = body.get('id')
        if not transaction_id:
            raise MissingIdentifier()
        _require_valid_id(transaction_id)
        fields = _coerce_fields(body)

        result = await self.store.create(transaction_id, **fields)
        if not result.ok:
            raise error_for(result, 'Failed to create transaction')
        logger.info(f"Created transaction {transaction_id}")
        return 201, result.transaction

    async def update(self, transaction_id: str, body: Dict[str, Any]) -> Tuple[int, Any]:
        _require_valid_id(transaction_id)
        fields = _coerce_fields(body)

        result = await self.store.update(transaction_id, **fields)
        if not result.ok:
            raise error_for(result, 'Failed to update transaction')
        logger.info(f"Updated transaction {transaction_id}")
        return 200, result.transaction

    async def delete(self, transaction_id: str) -> Tuple[int, Any]:
        _require_valid_id(transaction_id)
        result = await self.store.delete(transaction_id)
        if not result.ok:
            raise error_for(result, 'Failed to delete transaction')
        logger.info(f"Deleted transaction {transaction_id}")
        return 200, {'message': DELETED_MESSAGE}

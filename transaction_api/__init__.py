"""
Transaction Record API
----------------------

An HTTP JSON API over a store of financial transactions: list, fetch,
create, update and delete records keyed by 24-character hex identifiers.
"""

__version__ = '0.1.0'

from .database import StoreResult, StoreStatus, TransactionStore
from .handlers import TransactionHandler
from .validation import coerce_amount, coerce_date, is_valid_object_id

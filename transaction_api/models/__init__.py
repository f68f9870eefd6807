from .transaction import Transaction

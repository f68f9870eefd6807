from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class Transaction(BaseModel):
    """
    A stored financial transaction as returned by the API.
    """
    id: str
    amount: float
    date: datetime
    description: Optional[str] = None

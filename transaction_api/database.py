import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from loguru import logger
from sqlalchemy import Column, DateTime, Float, String, Text, delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from .models.transaction import Transaction

Base = declarative_base()


class TransactionRecord(Base):
    __tablename__ = 'transactions'

    id = Column(String(24), primary_key=True)
    amount = Column(Float, nullable=False)
    date = Column(DateTime, index=True, nullable=False)
    description = Column(Text, nullable=True)

    def to_model(self) -> Transaction:
        return Transaction(
            id=self.id,
            amount=self.amount,
            date=self.date.replace(tzinfo=timezone.utc),
            description=self.description
        )


def _to_naive_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class StoreStatus(enum.Enum):
    OK = 'ok'
    NOT_FOUND = 'not_found'
    CONFLICT = 'conflict'
    ERROR = 'error'


@dataclass
class StoreResult:
    """Outcome of a single store call."""
    status: StoreStatus
    transaction: Optional[Transaction] = None
    transactions: List[Transaction] = field(default_factory=list)
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is StoreStatus.OK

    @classmethod
    def found(cls, transaction: Transaction) -> 'StoreResult':
        return cls(StoreStatus.OK, transaction=transaction)

    @classmethod
    def listed(cls, transactions: List[Transaction]) -> 'StoreResult':
        return cls(StoreStatus.OK, transactions=transactions)

    @classmethod
    def not_found(cls) -> 'StoreResult':
        return cls(StoreStatus.NOT_FOUND)

    @classmethod
    def conflict(cls, detail: Optional[str] = None) -> 'StoreResult':
        return cls(StoreStatus.CONFLICT, detail=detail)

    @classmethod
    def error(cls, detail: str) -> 'StoreResult':
        return cls(StoreStatus.ERROR, detail=detail)


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine for the configured database."""
    return create_async_engine(database_url, echo=echo)


class TransactionStore:
    """Transaction persistence over an async SQLAlchemy engine.

    One instance is shared by the whole process. Every method opens its own
    session, issues a single statement and reports the outcome as a
    StoreResult; database exceptions do not escape.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(engine, expire_on_commit=False)

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False) -> 'TransactionStore':
        return cls(create_engine(database_url, echo=echo))

    async def init(self):
        """Create tables if they do not exist."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self):
        await self.engine.dispose()

    async def list_all(self) -> StoreResult:
        try:
            async with self.session_factory() as session:
                records = await session.scalars(
                    select(TransactionRecord).order_by(TransactionRecord.date.desc())
                )
                return StoreResult.listed([record.to_model() for record in records])
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database error listing transactions: {e}")
            return StoreResult.error(str(e))

    async def get(self, transaction_id: str) -> StoreResult:
        try:
            async with self.session_factory() as session:
                record = await session.get(TransactionRecord, transaction_id)
                if record is None:
                    return StoreResult.not_found()
                return StoreResult.found(record.to_model())
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database error fetching transaction {transaction_id}: {e}")
            return StoreResult.error(str(e))

    async def create(self, transaction_id: str, amount: float, date: datetime,
                     description: Optional[str]) -> StoreResult:
        record = TransactionRecord(
            id=transaction_id,
            amount=amount,
            date=_to_naive_utc(date),
            description=description
        )
        try:
            async with self.session_factory() as session:
                session.add(record)
                await session.commit()
                return StoreResult.found(record.to_model())
        except IntegrityError as e:
            logger.debug(f"Unique constraint violated for transaction {transaction_id}: {e}")
            return StoreResult.conflict(str(e))
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database error creating transaction {transaction_id}: {e}")
            return StoreResult.error(str(e))

    async def update(self, transaction_id: str, amount: float, date: datetime,
                     description: Optional[str]) -> StoreResult:
        try:
            async with self.session_factory() as session:
                record = await session.get(TransactionRecord, transaction_id)
                if record is None:
                    return StoreResult.not_found()
                record.amount = amount
                record.date = _to_naive_utc(date)
                record.description = description
                await session.commit()
                return StoreResult.found(record.to_model())
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database error updating transaction {transaction_id}: {e}")
            return StoreResult.error(str(e))

    async def delete(self, transaction_id: str) -> StoreResult:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    delete(TransactionRecord).where(TransactionRecord.id == transaction_id)
                )
                if result.rowcount == 0:
                    return StoreResult.not_found()
                await session.commit()
                return StoreResult(StoreStatus.OK)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database error deleting transaction {transaction_id}: {e}")
            return StoreResult.error(str(e))

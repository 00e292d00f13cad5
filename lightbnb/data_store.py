"""
Data store client for positional-parameter statements.

Statements use 1-indexed ``$n`` placeholders where ``params[n - 1]`` fills
placeholder ``n``. Values are always sent as bound parameters.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence, Tuple
import asyncio
import logging
import re
import time

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\$(\d+)")


def to_named_binds(template: str, params: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Rewrite ``$n`` placeholders as ``:p<n>`` named binds.

    Raises:
        ValueError: If a placeholder has no matching parameter
    """
    def replace(match: re.Match) -> str:
        index = int(match.group(1))
        if index < 1 or index > len(params):
            raise ValueError(
                f"Placeholder ${index} has no parameter ({len(params)} supplied)"
            )
        return f":p{index}"

    statement = _PLACEHOLDER.sub(replace, template)
    return statement, {f"p{i}": value for i, value in enumerate(params, start=1)}


@dataclass
class StatementRecord:
    """A statement submitted to the data store."""

    text: str
    params: tuple
    started_at: datetime
    duration: Optional[float] = None


class DataStore:
    """
    Executes positional-parameter statements on an async SQLAlchemy session.
    Database errors propagate to the caller unchanged.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def execute(self, template: str, params: Sequence[Any]) -> List[Dict[str, Any]]:
        """
        Execute a statement and return its rows as dictionaries.

        Args:
            template: Statement text with $1..$n placeholders
            params: Values for the placeholders, in order

        Returns:
            Rows keyed by column label
        """
        statement, binds = to_named_binds(template, params)
        start = time.perf_counter()

        result = await self.session.execute(text(statement), binds)
        rows = [dict(row) for row in result.mappings().all()]

        duration = time.perf_counter() - start
        logger.debug(
            "executed query",
            extra={"text": template, "params": list(params), "duration": duration}
        )
        return rows


class InstrumentedDataStore:
    """
    Wraps a data store to record the statements it runs and to flag checkouts
    held longer than ``slow_checkout_seconds``.
    """

    def __init__(self, store: Any, slow_checkout_seconds: float = 5.0):
        self.store = store
        self.slow_checkout_seconds = slow_checkout_seconds
        self.last_statement: Optional[StatementRecord] = None
        self.statement_count = 0
        self.checked_out_at: Optional[datetime] = None
        self._watchdog: Optional[asyncio.TimerHandle] = None

    @property
    def is_checked_out(self) -> bool:
        return self.checked_out_at is not None

    async def execute(self, template: str, params: Sequence[Any]) -> List[Dict[str, Any]]:
        """Execute through the wrapped store, recording the statement."""
        record = StatementRecord(
            text=template,
            params=tuple(params),
            started_at=datetime.now(timezone.utc)
        )
        self.last_statement = record
        self.statement_count += 1

        start = time.perf_counter()
        try:
            return await self.store.execute(template, params)
        finally:
            record.duration = time.perf_counter() - start

    @asynccontextmanager
    async def checkout(self) -> AsyncIterator["InstrumentedDataStore"]:
        """
        Hold the store for a unit of work.

        A checkout still open after ``slow_checkout_seconds`` is logged with
        the last statement it executed.
        """
        if self.is_checked_out:
            raise RuntimeError("Data store is already checked out")

        loop = asyncio.get_running_loop()
        self.checked_out_at = datetime.now(timezone.utc)
        self._watchdog = loop.call_later(self.slow_checkout_seconds, self._report_slow_checkout)
        try:
            yield self
        finally:
            self.release()

    def release(self) -> None:
        """End the current checkout and cancel its watchdog."""
        if self._watchdog is not None:
            self._watchdog.cancel()
            self._watchdog = None
        self.checked_out_at = None

    def _report_slow_checkout(self) -> None:
        last = self.last_statement
        logger.error(
            f"A data store checkout has been held for more than {self.slow_checkout_seconds} seconds",
            extra={
                "checked_out_at": self.checked_out_at.isoformat() if self.checked_out_at else None,
                "statement_count": self.statement_count,
                "last_statement": last.text if last else None,
                "last_params": list(last.params) if last else None,
            }
        )

"""
learnhub.db.unit_of_work

Transactional unit of work with bounded retry at the data-access boundary.

Responsibilities:
- Run a unit of work (fetch, authorize, mutate) inside one store transaction.
- Retry transient connection failures with exponential backoff (tenacity).
- Wrap any other store failure as InternalError without leaking driver detail.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from learnhub.errors import InternalError
from learnhub.observability.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")


def is_transient(exc: BaseException) -> bool:
    if isinstance(exc, DisconnectionError):
        return True
    if isinstance(exc, IntegrityError):
        return False
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    return isinstance(exc, OperationalError)


class UnitOfWork:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        attempts: int = 3,
        backoff_seconds: float = 0.2,
    ) -> None:
        self._session_factory = session_factory
        self._attempts = attempts
        self._backoff = backoff_seconds

    async def run(self, work: Callable[[AsyncSession], Awaitable[T]]) -> T:
        """
        Execute `work` in a fresh session and transaction. Commits on success,
        rolls back on any exception (including cancellation). Domain errors
        raised by `work` propagate unchanged and are never retried.
        """

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._attempts),
            wait=wait_exponential(multiplier=self._backoff, max=self._backoff * 8),
            retry=retry_if_exception(is_transient),
            before_sleep=self._log_retry,
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    async with self._session_factory() as session:
                        async with session.begin():
                            result = await work(session)
        except SQLAlchemyError as e:
            log.error("store_failure", error_type=type(e).__name__, error=str(e))
            raise InternalError() from e
        return result

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        log.warning(
            "store_retry",
            attempt=retry_state.attempt_number,
            error_type=type(exc).__name__ if exc else None,
        )


# --- Module Notes -----------------------------------------------------------
# Everything a request does against the store, including the ownership re-check,
# happens inside one `run` call, so a concurrent delete is observed as "not found"
# rather than as a stale snapshot.

"""Transaction runner with conflict retry

Runs a use case body inside the unit of work: commit on success, roll
back on any failure. Write conflicts (stale version, unique violation on
a racing insert, lock timeout) roll back and re-run the whole body so it
reads fresh state. Domain rule violations are returned as typed errors
and never retried.
"""

import asyncio
import logging
import random
from typing import Awaitable, Callable, Dict, Optional, TypeVar
from config import ApplicationConfig
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ErrorKind, InvoicingError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_RETRY_DELAY = 0.5  # Seconds


def retry_delay(attempt: int, base_delay: float) -> float:
    """Exponential backoff with jitter, capped at MAX_RETRY_DELAY"""
    delay = base_delay * (2 ** (attempt - 1))
    return min(delay, MAX_RETRY_DELAY) * random.uniform(0.5, 1.5)


def _describe(context: Optional[Dict[str, object]]) -> str:
    if not context:
        return ""
    return " " + " ".join(f"{key}={value}" for key, value in context.items())


async def run_in_transaction(
    uow: UnitOfWork,
    body: Callable[[], Awaitable[T]],
    operation: str,
    context: Optional[Dict[str, object]] = None,
    max_attempts: Optional[int] = None,
    base_delay: Optional[float] = None,
) -> Result[T]:
    """
    Run body atomically, retrying on write conflicts

    Args:
        uow: Unit of work owning the session the body's repositories use
        body: Coroutine factory; called once per attempt
        operation: Upper-case operation name, used for the <OPERATION>_FAILED code
        context: tenant_id / invoice_id etc. included in every log line
        max_attempts: Maximum attempts (default TRANSACTION_MAX_ATTEMPTS)
        base_delay: First backoff delay in seconds (default TRANSACTION_RETRY_BASE_DELAY)

    Returns:
        Result with the body's value, or an Error:
        - domain code with reason=<error kind> for rule violations
        - CONFLICT_RETRY_EXHAUSTED when every attempt hit a conflict
        - <OPERATION>_FAILED with the exception text for anything else
    """
    attempts = max_attempts or ApplicationConfig.TRANSACTION_MAX_ATTEMPTS
    delay = ApplicationConfig.TRANSACTION_RETRY_BASE_DELAY if base_delay is None else base_delay
    details = _describe(context)

    for attempt in range(1, attempts + 1):
        try:
            value = await body()
            await uow.commit()
            return Return.ok(value)

        except InvoicingError as e:
            await uow.rollback()
            logger.info(f"{operation} rejected ({e.code}): {e.message}{details}")
            return Return.err(Error(code=e.code, message=e.message, reason=e.kind.value))

        except Exception as e:
            await uow.rollback()

            if not uow.is_conflict(e):
                logger.exception(f"{operation} failed{details}: {e}")
                return Return.err(
                    Error(
                        code=f"{operation}_FAILED",
                        message=f"Failed to {operation.lower().replace('_', ' ')}",
                        reason=str(e),
                    )
                )

            if attempt == attempts:
                break

            wait = retry_delay(attempt, delay)
            logger.debug(
                f"{operation} write conflict on attempt {attempt}/{attempts}, "
                f"retrying in {wait:.3f}s{details}: {type(e).__name__}"
            )
            await asyncio.sleep(wait)

    logger.warning(f"{operation} gave up after {attempts} conflicting attempts{details}")
    return Return.err(
        Error(
            code="CONFLICT_RETRY_EXHAUSTED",
            message="The request conflicted with concurrent changes, please try again",
            reason=ErrorKind.CONFLICT_RETRY_EXHAUSTED.value,
        )
    )

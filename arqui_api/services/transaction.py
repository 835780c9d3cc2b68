"""Transaction boundary shared by the quote and catalog services."""

from contextlib import asynccontextmanager
from typing import AsyncIterator
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from arqui_api.exceptions import APIException, InternalError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def unit_of_work(db: AsyncSession, operation: str) -> AsyncIterator[AsyncSession]:
    """Commit everything done inside the block, or nothing.

    Domain errors roll back and propagate unchanged. Storage errors roll back
    and surface as ``InternalError``.
    """
    try:
        yield db
        await db.commit()
    except APIException:
        await db.rollback()
        raise
    except SQLAlchemyError as exc:
        await db.rollback()
        # Don't log exception text, it may contain bound parameters
        logger.error("%s failed: %s", operation, type(exc).__name__)
        raise InternalError(f"Failed to {operation}") from exc

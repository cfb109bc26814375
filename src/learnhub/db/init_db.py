"""
learnhub.db.init_db

Schema bootstrap for dev and test processes; production runs `alembic upgrade head`.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from learnhub.db import models  # noqa: F401  # registers users/courses/enrollments on Base.metadata
from learnhub.db.base import Base
from learnhub.observability.logging import get_logger

log = get_logger(__name__)


async def init_db(engine: AsyncEngine) -> None:
    # create_all is idempotent: existing tables are left as they are.
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.info("schema_ready", dialect=engine.dialect.name, tables=sorted(Base.metadata.tables))

"""Id Provider: process-wide SnowflakeGenerator singleton.

Invariants:
    - Exactly one generator per process, built on startup by init_id_generator
    - Callers only reach it through get_id_generator (FastAPI dependency)
"""

import logging

from gifapi.core.snowflake import SnowflakeGenerator

logger = logging.getLogger(__name__)

id_generator: SnowflakeGenerator | None = None


def init_id_generator(
    epoch_ms: int, worker_id: int, process_id: int,
) -> SnowflakeGenerator:
    global id_generator
    id_generator = SnowflakeGenerator(
        epoch_ms=epoch_ms, worker_id=worker_id, process_id=process_id,
    )
    logger.info(
        f"Snowflake generator ready (worker={worker_id}, process={process_id}, "
        f"epoch={epoch_ms})",
    )
    return id_generator


def get_id_generator() -> SnowflakeGenerator:
    """FastAPI dependency for the snowflake generator."""
    if not id_generator:
        raise RuntimeError("Id generator not initialized")
    return id_generator

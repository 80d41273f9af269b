"""FastAPI dependency injection."""

from typing import Optional

from fastapi import Depends

from ..application.services import AnalysisOrchestrator
from ..domain.services import PeakAnalysisEngine
from ..infrastructure.config import Settings, get_settings
from ..infrastructure.content import JsonChatLogSource
from ..infrastructure.database import Database
from ..infrastructure.storage.repositories import AnalysisRepository


# Settings dependency
def get_settings_dep() -> Settings:
    """Get application settings."""
    return get_settings()


# Database dependencies
_db_instance: Optional[Database] = None


async def get_database(settings: Settings = Depends(get_settings_dep)) -> Database:
    """Get database instance (singleton)."""
    global _db_instance
    if _db_instance is None:
        _db_instance = Database(settings.database_url, echo=settings.database_echo)
        await _db_instance.init_db()
    return _db_instance


async def close_database() -> None:
    """Dispose of the shared database instance, if any."""
    global _db_instance
    if _db_instance is not None:
        await _db_instance.close()
        _db_instance = None


# Repository and service dependencies
async def get_analysis_repository(
    db: Database = Depends(get_database),
) -> AnalysisRepository:
    """Get analysis repository."""
    return AnalysisRepository(db)


def get_content_fetcher(
    settings: Settings = Depends(get_settings_dep),
) -> JsonChatLogSource:
    """Get the chat log source."""
    return JsonChatLogSource(settings.chat_log_dir, settings.known_emotes)


async def get_orchestrator(
    settings: Settings = Depends(get_settings_dep),
    content_fetcher: JsonChatLogSource = Depends(get_content_fetcher),
    repository: AnalysisRepository = Depends(get_analysis_repository),
) -> AnalysisOrchestrator:
    """Get the analysis orchestrator."""
    return AnalysisOrchestrator(
        content_fetcher=content_fetcher,
        repository=repository,
        engine=PeakAnalysisEngine(max_workers=settings.engine_max_workers),
    )

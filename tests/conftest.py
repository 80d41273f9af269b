"""Pytest configuration and fixtures."""

from pathlib import Path

import logfire
import pytest
import pytest_asyncio

from chat_peaks.domain.models.config import AnalysisConfig
from chat_peaks.infrastructure.database import Database

from tests.factories import burst_log


@pytest.fixture(scope="session", autouse=True)
def configure_test_logfire():
    """Keep spans local during tests."""
    logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def plain_config() -> AnalysisConfig:
    """Fixed thresholds, no content gating."""
    return AnalysisConfig(
        message_threshold=50,
        peak_window_size=30,
        sensitivity_mode="balanced",
        use_adaptive_thresholds=False,
        content_analysis=False,
    )


@pytest.fixture
def content_config() -> AnalysisConfig:
    """Fixed thresholds with content gating."""
    return AnalysisConfig(
        message_threshold=50,
        peak_window_size=30,
        sensitivity_mode="balanced",
        use_adaptive_thresholds=False,
        content_analysis=True,
    )


@pytest.fixture
def single_burst_log():
    """600 s log, quiet except for 100 messages in [300, 330)."""
    return burst_log()


@pytest_asyncio.fixture
async def test_database(tmp_path: Path):
    """File-backed SQLite database with tables created."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'analyses.db'}")
    await database.init_db()
    yield database
    await database.close()

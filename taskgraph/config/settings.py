"""
Configuration settings for the task dependency engine.
Load configuration from environment variables or a .env file.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_file = Path(__file__).parent.parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)


class Settings:
    """Application settings loaded from environment variables."""

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', '')

    # ============================================================================
    # Dependency Store
    # ============================================================================
    DEPENDENCY_ID_PREFIX = os.getenv('TASKGRAPH_DEPENDENCY_ID_PREFIX', 'dep-')
    DEFAULT_USER = os.getenv('TASKGRAPH_DEFAULT_USER', 'system')

    # ============================================================================
    # CPM
    # ============================================================================
    # Slack below this (in days) marks a task as critical
    CRITICAL_TOLERANCE = float(os.getenv('TASKGRAPH_CRITICAL_TOLERANCE', '0.01'))
    NEAR_CRITICAL_DAYS = float(os.getenv('TASKGRAPH_NEAR_CRITICAL_DAYS', '5.0'))

    @classmethod
    def validate_required_settings(cls) -> list[str]:
        """
        Validate that settings hold usable values.
        Returns list of problems found.
        """
        problems = []

        if cls.CRITICAL_TOLERANCE <= 0:
            problems.append('TASKGRAPH_CRITICAL_TOLERANCE must be positive')
        if cls.NEAR_CRITICAL_DAYS < 0:
            problems.append('TASKGRAPH_NEAR_CRITICAL_DAYS must not be negative')
        if not cls.DEPENDENCY_ID_PREFIX:
            problems.append('TASKGRAPH_DEPENDENCY_ID_PREFIX must not be empty')

        return problems


# Create settings instance
settings = Settings()

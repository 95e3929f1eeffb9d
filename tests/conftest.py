# Path: tests/conftest.py
"""
Pytest Configuration and Shared Fixtures for xbrl_tree

Provides common test fixtures used across all test modules.
"""

import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Make tests/fixtures importable as 'fixtures'
TESTS_ROOT = Path(__file__).parent
sys.path.insert(0, str(TESTS_ROOT))

from fixtures.sample_tables import create_sample_tables, create_small_example, write_tables  # noqa: E402


CONFIG_ENV_KEYS = (
    'XBRL_TREE_ENV_FILE',
    'XBRL_TREE_ENVIRONMENT',
    'XBRL_TREE_TABLES_DIR',
    'XBRL_TREE_TABLE_FORMAT',
    'XBRL_TREE_OUTPUT_DIR',
    'XBRL_TREE_LOG_DIR',
    'XBRL_TREE_LOG_LEVEL',
    'XBRL_TREE_LOG_CONSOLE',
    'XBRL_TREE_LABEL_LANG',
    'XBRL_TREE_PATH_ID_WIDTH',
    'XBRL_TREE_PERIOD_ORDER',
)


# ==============================================================================
# ENVIRONMENT FIXTURES
# ==============================================================================

@pytest.fixture
def clean_env(monkeypatch):
    """Remove every XBRL_TREE_* variable from the environment."""
    for key in CONFIG_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    # point at a file that does not exist so no .env is picked up
    monkeypatch.setenv('XBRL_TREE_ENV_FILE', '/nonexistent/xbrl_tree.env')


@pytest.fixture
def mock_env_vars(clean_env, temp_dir):
    """Provide mock environment variables for testing."""
    env_vars = {
        'XBRL_TREE_ENVIRONMENT': 'test',
        'XBRL_TREE_TABLES_DIR': str(temp_dir / 'tables'),
        'XBRL_TREE_TABLE_FORMAT': 'csv',
        'XBRL_TREE_OUTPUT_DIR': str(temp_dir / 'output'),
        'XBRL_TREE_LOG_LEVEL': 'debug',
        'XBRL_TREE_LOG_CONSOLE': 'false',
        'XBRL_TREE_LABEL_LANG': 'en-GB',
        'XBRL_TREE_PATH_ID_WIDTH': '3',
        'XBRL_TREE_PERIOD_ORDER': 'descending',
    }

    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ==============================================================================
# SAMPLE DATA FIXTURES
# ==============================================================================

@pytest.fixture
def sample_tables():
    """Balance sheet, income statement and parenthetical roles in memory."""
    return create_sample_tables()


@pytest.fixture
def small_example_tables():
    """root -> A -> A1 with A1 = 100 at 2013-12-31."""
    return create_small_example()


@pytest.fixture
def tables_dir(temp_dir, sample_tables):
    """Sample tables written as CSV files."""
    return write_tables(sample_tables, temp_dir / 'tables')


# ==============================================================================
# MOCK FIXTURES
# ==============================================================================

@pytest.fixture
def mock_config(tables_dir):
    """Create a mock ConfigLoader pointing at the sample tables."""
    config = MagicMock()
    config.get.side_effect = lambda key, default=None: {
        'environment': 'test',
        'tables_dir': tables_dir,
        'table_format': 'csv',
        'label_lang': 'en-US',
        'path_id_width': 2,
        'period_order': 'ascending',
    }.get(key, default)
    return config


# ==============================================================================
# UTILITY FIXTURES
# ==============================================================================

@pytest.fixture
def reset_singletons():
    """Reset any singleton instances between tests."""
    from xbrl_tree.config_loader import ConfigLoader
    ConfigLoader._instance = None
    ConfigLoader._initialized = False

    yield

    ConfigLoader._instance = None
    ConfigLoader._initialized = False

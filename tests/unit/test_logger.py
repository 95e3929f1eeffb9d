# Path: tests/unit/test_logger.py
"""
Tests for IPO logging setup.
"""

import logging

import pytest

from xbrl_tree.core.logger import get_input_logger, get_output_logger, get_process_logger, setup_ipo_logging
from xbrl_tree.core.logger.ipo_logging import IPOFilter


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLoggerNames:
    """Test layer prefixes."""

    def test_prefixes(self):
        assert get_input_logger('table_reader').name == 'input.table_reader'
        assert get_process_logger('hierarchy.tree_builder').name == 'process.hierarchy.tree_builder'
        assert get_output_logger('main').name == 'output.main'


class TestIPOFilter:
    """Test layer filtering."""

    def test_filter(self):
        layer_filter = IPOFilter('process')

        def make(name):
            return logging.LogRecord(name, logging.INFO, __file__, 1, 'msg', None, None)

        assert layer_filter.filter(make('process.hierarchy'))
        assert layer_filter.filter(make('process'))
        assert not layer_filter.filter(make('processing'))
        assert not layer_filter.filter(make('input.table_reader'))


class TestSetupIpoLogging:
    """Test handler setup."""

    def test_console_only(self, restore_root_logger):
        setup_ipo_logging(log_level='warning')
        assert restore_root_logger.level == logging.WARNING
        assert len(restore_root_logger.handlers) == 1

    def test_silent(self, restore_root_logger):
        setup_ipo_logging(console_output=False)
        assert restore_root_logger.handlers == []

    def test_log_files(self, restore_root_logger, temp_dir):
        setup_ipo_logging(log_dir=temp_dir / 'logs', log_level='DEBUG', console_output=False)
        get_process_logger('hierarchy.test').info('built tree')
        get_input_logger('test').info('read table')
        for handler in restore_root_logger.handlers:
            handler.flush()

        process_log = (temp_dir / 'logs' / 'process_activity.log').read_text()
        input_log = (temp_dir / 'logs' / 'input_activity.log').read_text()
        full_log = (temp_dir / 'logs' / 'full_activity.log').read_text()
        assert 'built tree' in process_log
        assert 'read table' not in process_log
        assert 'read table' in input_log
        assert 'built tree' in full_log and 'read table' in full_log

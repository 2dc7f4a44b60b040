"""Tests for catalog_reconciler/common/log_config.py"""

import logging
import sys

from catalog_reconciler.common.log_config import PACKAGE_LOGGER, setup_logging


class TestSetupLogging:
    def teardown_method(self):
        """Reset logger between tests."""
        logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.NOTSET)

    def test_default_level_is_info(self):
        setup_logging()
        logger = logging.getLogger(PACKAGE_LOGGER)
        assert logger.level == logging.INFO

    def test_verbose_sets_debug(self):
        setup_logging(verbose=True)
        logger = logging.getLogger(PACKAGE_LOGGER)
        assert logger.level == logging.DEBUG

    def test_quiet_sets_warning(self):
        setup_logging(quiet=True)
        logger = logging.getLogger(PACKAGE_LOGGER)
        assert logger.level == logging.WARNING

    def test_handler_outputs_to_stderr(self):
        setup_logging()
        logger = logging.getLogger(PACKAGE_LOGGER)
        assert len(logger.handlers) == 1
        handler = logger.handlers[0]
        assert handler.stream is sys.stderr

    def test_repeated_calls_do_not_duplicate_handlers(self):
        setup_logging()
        setup_logging(verbose=True)
        logger = logging.getLogger(PACKAGE_LOGGER)
        assert len(logger.handlers) == 1

    def test_log_file_receives_records(self, tmp_path):
        log_path = tmp_path / "logs" / "reconcile.log"
        setup_logging(log_file=log_path)
        logger = logging.getLogger(PACKAGE_LOGGER)
        assert len(logger.handlers) == 2
        logging.getLogger(f"{PACKAGE_LOGGER}.reconciler").info("Updated 3 products")
        for handler in logger.handlers:
            handler.flush()
        assert "INFO     catalog_reconciler.reconciler: Updated 3 products" in log_path.read_text(encoding="utf-8")

    def test_http_client_logs_quiet_unless_verbose(self):
        setup_logging()
        assert logging.getLogger("urllib3").level == logging.WARNING
        setup_logging(verbose=True)
        assert logging.getLogger("urllib3").level == logging.DEBUG

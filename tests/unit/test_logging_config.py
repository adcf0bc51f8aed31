# -*- coding: utf-8 -*-

"""
Unit tests for loguru sink setup.
"""

import sys
from unittest.mock import patch

from loguru import logger

from tether.logging_config import setup_logging


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_installs_single_sink_at_level(self):
        """
        What it does: Verifies the default sink is replaced by one at the given level.
        """
        with patch("tether.logging_config.logger") as mock_logger:
            mock_logger.add.return_value = 7

            sink_id = setup_logging("debug")

        assert sink_id == 7
        mock_logger.remove.assert_called_once_with()
        assert mock_logger.add.call_args.kwargs["level"] == "DEBUG"

    def test_uses_configured_level_by_default(self):
        """
        What it does: Verifies LOG_LEVEL from config is used when no level is given.
        """
        with (
            patch("tether.logging_config.LOG_LEVEL", "WARNING"),
            patch("tether.logging_config.logger") as mock_logger,
        ):
            setup_logging()

        assert mock_logger.add.call_args.kwargs["level"] == "WARNING"

    def test_returns_removable_sink_id(self):
        """
        What it does: Verifies the returned id can be removed from the real logger.
        """
        sink_id = setup_logging("info")

        logger.remove(sink_id)
        logger.add(sys.stderr)

# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import io
import logging

from slicejson.core.log import LOGGER_NAME, configure_logging, verbosity_to_level


def test_verbosity_levels():
	assert verbosity_to_level(-1) == logging.ERROR
	assert verbosity_to_level(0) == logging.WARNING
	assert verbosity_to_level(1) == logging.INFO
	assert verbosity_to_level(5) == logging.DEBUG


def test_reconfiguring_replaces_only_our_handler():
	logger = logging.getLogger(LOGGER_NAME)
	foreign = logging.NullHandler()
	logger.addHandler(foreign)
	try:
		first = io.StringIO()
		second = io.StringIO()
		configure_logging(1, stream=first)
		configure_logging(2, stream=second)

		logging.getLogger(f"{LOGGER_NAME}.loader.closure").debug("hello")

		assert first.getvalue() == ""
		assert "DEBUG | slicejson.loader.closure | hello" in second.getvalue()
		assert foreign in logger.handlers
	finally:
		logger.removeHandler(foreign)

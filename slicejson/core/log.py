# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Logging setup for the command-line driver.

Library modules only create module-level loggers under the `slicejson`
namespace; handlers are installed here, once, by the driver. Re-configuring
replaces the handler this module installed and leaves foreign handlers alone.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOGGER_NAME = "slicejson"
CONSOLE_FORMAT = "%(levelname)s | %(name)s | %(message)s"

_HANDLER_TAG_ATTR = "_slicejson_handler"


def verbosity_to_level(verbosity: int) -> int:
	"""Map `-q` / default / `-v` / `-vv` to a logging level."""
	if verbosity < 0:
		return logging.ERROR
	if verbosity == 0:
		return logging.WARNING
	if verbosity == 1:
		return logging.INFO
	return logging.DEBUG


def configure_logging(verbosity: int = 0, *, stream: TextIO | None = None) -> logging.Logger:
	"""Install a single stderr handler on the package logger and return it."""
	logger = logging.getLogger(LOGGER_NAME)
	level = verbosity_to_level(verbosity)
	logger.setLevel(level)

	for handler in list(logger.handlers):
		if getattr(handler, _HANDLER_TAG_ATTR, False):
			logger.removeHandler(handler)
			handler.close()

	handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
	handler.setLevel(level)
	handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
	setattr(handler, _HANDLER_TAG_ATTR, True)
	logger.addHandler(handler)
	return logger


__all__ = ["LOGGER_NAME", "configure_logging", "verbosity_to_level"]

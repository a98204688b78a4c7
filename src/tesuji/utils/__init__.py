"""Utility helpers shared across Tesuji."""

# Tesuji
# Copyright (C) 2026  Tesuji developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging
from typing import Union

PACKAGE_LOGGER_NAME = "tesuji"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _package_logger() -> logging.Logger:
    root = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.WARNING)
    return root


def setup_logger(name: str) -> logging.Logger:
    """Return the logger for a module.

    Every module logger is a child of the ``tesuji`` logger, which owns the
    single stream handler, so the level set by :func:`configure_logging`
    applies to the whole package.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        The configured logger
    """
    _package_logger()
    if name != PACKAGE_LOGGER_NAME and not name.startswith(PACKAGE_LOGGER_NAME + "."):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Set the log level of the package logger (e.g. ``"DEBUG"``)."""
    if isinstance(level, str):
        level = level.upper()
    _package_logger().setLevel(level)

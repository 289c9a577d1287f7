"""Shared helpers: logger setup and id generation."""

# Alliance Pairing
# Copyright (C) 2025  Alliance Pairing developers
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
import uuid

PACKAGE_LOGGER_NAME = "alliancepairing"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_package_logger() -> logging.Logger:
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
        package_logger.setLevel(logging.INFO)
    return package_logger


def setup_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` under the package root logger.

    The root ``alliancepairing`` logger gets a single stream handler the
    first time this is called. Child loggers propagate to it.

    Args:
        name: Usually the calling module's ``__name__``

    Returns:
        The configured logger
    """
    _configure_package_logger()
    if name == PACKAGE_LOGGER_NAME or name.startswith(PACKAGE_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{name}")


def generate_id(prefix: str) -> str:
    """Generate a unique id such as ``match-1a2b3c4d5e6f``."""
    return f"{prefix.lower()}-{uuid.uuid4().hex[:12]}"

# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""Runtime configuration for structcheck tooling.

Checking itself is configuration-free; these settings govern logging and the
schema document cache used by the loader and the CLI.
"""

import logging
import os
import sys
from dataclasses import dataclass

LOGGER_NAME = "structcheck"


class _BelowLevelFilter(logging.Filter):
    """Pass only records strictly below ``level``."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self._level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self._level


def _level(name: str, default: int) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


@dataclass
class EngineConfig:
    """Configuration for logging and schema document caching."""
    log_level: str = "WARNING"
    print_level: str = "WARNING"
    cache_enabled: bool = True

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create configuration from ``STRUCTCHECK_*`` environment variables."""
        return cls(
            log_level=os.getenv("STRUCTCHECK_LOG_LEVEL", "WARNING"),
            print_level=os.getenv("STRUCTCHECK_PRINT_LEVEL", "WARNING"),
            cache_enabled=os.getenv("STRUCTCHECK_CACHE_ENABLED", "true").lower() == "true",
        )

    def set_logging(self) -> logging.Logger:
        """Route the ``structcheck`` logger: records below ``print_level`` to stdout, the rest to stderr."""
        level = _level(self.log_level, logging.WARNING)
        stderr_level = max(_level(self.print_level, logging.WARNING), logging.DEBUG)
        formatter = logging.Formatter("%(name)s - %(levelname)s - %(message)s")

        logger = logging.getLogger(LOGGER_NAME)
        logger.handlers.clear()
        logger.setLevel(level)
        logger.propagate = False

        stdout_handler = logging.StreamHandler(stream=sys.stdout)
        stdout_handler.addFilter(_BelowLevelFilter(stderr_level))
        stdout_handler.setFormatter(formatter)

        stderr_handler = logging.StreamHandler(stream=sys.stderr)
        stderr_handler.setLevel(stderr_level)
        stderr_handler.setFormatter(formatter)

        logger.addHandler(stdout_handler)
        logger.addHandler(stderr_handler)
        return logger


# Global configuration instance
engine_config = EngineConfig.from_env()

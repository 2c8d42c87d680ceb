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

"""Configuration management for the record validator."""

import os
import logging
from dataclasses import dataclass

from . import SCHEMA_FORMAT_VERSION
from .utils.logging_utils import DEFAULT_FORMAT, configure_split_stream_logging

ENV_PREFIX = "RECORD_VALIDATOR_"


@dataclass
class ValidatorConfig:
    """Process-level settings for logging, file caching and schema loading."""
    log_level: str = "WARNING"
    print_level: str = "WARNING"
    cache_enabled: bool = False
    default_format_version: str = SCHEMA_FORMAT_VERSION

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv(f'{ENV_PREFIX}LOG_LEVEL', 'WARNING'),
            print_level=os.getenv(f'{ENV_PREFIX}PRINT_LEVEL', 'WARNING'),
            cache_enabled=os.getenv(f'{ENV_PREFIX}CACHE_ENABLED', 'false').lower() == 'true',
            default_format_version=os.getenv(f'{ENV_PREFIX}DEFAULT_FORMAT', SCHEMA_FORMAT_VERSION),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        stderr_level = getattr(logging, self.print_level.upper(), logging.WARNING)

        formatter = logging.Formatter(DEFAULT_FORMAT)
        configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)

        return logging.getLogger('record_validator')


# Global configuration instance
validator_config = ValidatorConfig.from_env()

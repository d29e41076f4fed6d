# Copyright 2023 The Chromium Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

from launchconfig.config import (DEFAULT_OPTIONS, LaunchOptions,
                                 normalize_cli_config)
from launchconfig.exception import (ConfigError, InvalidDataError,
                                    InvalidJSONError, InvalidURLError,
                                    InvalidValueError, OptionParseError,
                                    SchemaError)
from launchconfig.validation import (format_issues, parse_cli_option,
                                     parse_unknown, parse_with_schema)

__all__ = (
    "ConfigError",
    "DEFAULT_OPTIONS",
    "InvalidDataError",
    "InvalidJSONError",
    "InvalidURLError",
    "InvalidValueError",
    "LaunchOptions",
    "OptionParseError",
    "SchemaError",
    "format_issues",
    "normalize_cli_config",
    "parse_cli_option",
    "parse_unknown",
    "parse_with_schema",
)

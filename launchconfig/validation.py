# Copyright 2023 The Chromium Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, NoReturn

from launchconfig.exception import (InvalidDataError, InvalidJSONError,
                                    InvalidValueError)
from launchconfig.schema import Issue, Schema, SchemaResult


def format_issues(issues: Iterable[Issue]) -> str:
  return "\n".join(f"  - {issue.path_str}: {issue.message}" for issue in issues)


def _reject_constant(name: str) -> NoReturn:
  # Python's json module accepts NaN and Infinity, strict JSON does not.
  raise ValueError(f"Unexpected token {name} in JSON")


def loads_strict(json_string: str) -> Any:
  return json.loads(json_string, parse_constant=_reject_constant)


def parse_cli_option(flag_name: str, json_string: str, schema: Schema) -> Any:
  """JSON-decodes json_string and validates the result against schema.
  Raises InvalidJSONError or InvalidDataError with flag_name context."""
  try:
    parsed = loads_strict(json_string)
  except (ValueError, RecursionError) as e:
    raise InvalidJSONError(flag_name,
                           f"Invalid JSON for \"{flag_name}\": {e}") from e
  return _validate(flag_name, parsed, schema)


def parse_unknown(flag_name: str, data: Any, schema: Schema) -> Any:
  """Schema-only validation for already-parsed data."""
  return _validate(flag_name, data, schema)


def _validate(flag_name: str, data: Any, schema: Schema) -> Any:
  result: SchemaResult = schema.check(data)
  if not result.success:
    logging.debug("%s: %d schema issue(s)", flag_name, len(result.issues))
    raise InvalidDataError(
        flag_name,
        f"Invalid data for \"{flag_name}\":\n{format_issues(result.issues)}",
        result.issues)
  return result.value


def parse_with_schema(schema: Schema, value: Any, flag_name: str) -> Any:
  """Validates a single flag value, typically a numeric string from the
  command line. The error message contains both the value and flag_name."""
  result: SchemaResult = schema.check(value)
  if not result.success:
    messages = "; ".join(issue.message for issue in result.issues)
    raise InvalidValueError(
        flag_name, f"Invalid value '{value}' for {flag_name}: {messages}")
  return result.value

# Copyright 2023 The Chromium Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.
"""argparse type= callables for the launch options.

Every callable raises a ConfigError, which is an argparse.ArgumentTypeError,
so argparse reports its message verbatim.
"""

from __future__ import annotations

from typing import Any, Callable, List

from launchconfig.schema import Schema
from launchconfig.schemas import POSITIVE_FLOAT, POSITIVE_INT
from launchconfig.validation import parse_cli_option, parse_with_schema


def parse_positive_int(value: str, flag_name: str = "value") -> int:
  return parse_with_schema(POSITIVE_INT, value, flag_name)


def parse_positive_float(value: str, flag_name: str = "value") -> float:
  return parse_with_schema(POSITIVE_FLOAT, value, flag_name)


def positive_int_type(flag_name: str) -> Callable[[str], int]:

  def parse(value: str) -> int:
    return parse_positive_int(value, flag_name)

  return parse


def positive_float_type(flag_name: str) -> Callable[[str], float]:

  def parse(value: str) -> float:
    return parse_positive_float(value, flag_name)

  return parse


def json_option_type(flag_name: str, schema: Schema) -> Callable[[str], Any]:
  """Returns a type callable that decodes and validates a json flag value,
  for instance: type=json_option_type("--cookies", schemas.COOKIES)."""

  def parse(value: str) -> Any:
    return parse_cli_option(flag_name, value, schema)

  return parse


def parse_comma_list(value: str) -> List[str]:
  return [item for item in value.split(",") if item]

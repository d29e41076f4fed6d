# Copyright 2023 The Chromium Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

from __future__ import annotations

import argparse
import contextlib
from typing import TYPE_CHECKING, Generator, Sequence, Tuple

if TYPE_CHECKING:
  from launchconfig.schema import Issue


class SchemaError(ValueError):
  """Raised by Schema.parse() when a value does not match its schema."""

  def __init__(self, issues: Sequence[Issue]):
    self.issues: Tuple[Issue, ...] = tuple(issues)
    super().__init__("; ".join(str(issue) for issue in self.issues))


class ConfigError(argparse.ArgumentTypeError):
  """Base class for all launch option errors.
  Subclasses argparse.ArgumentTypeError so that argparse type callables can
  raise it directly and the message is reported verbatim.
  """

  def __init__(self, flag: str, message: str):
    super().__init__(message)
    self.flag = flag
    self.message = message

  def __str__(self) -> str:
    return self.message


class InvalidJSONError(ConfigError):
  pass


class InvalidDataError(ConfigError):

  def __init__(self, flag: str, message: str, issues: Sequence[Issue] = ()):
    super().__init__(flag, message)
    self.issues: Tuple[Issue, ...] = tuple(issues)


class InvalidValueError(ConfigError):
  pass


class InvalidURLError(ConfigError):
  pass


class OptionParseError(ConfigError):
  """Wraps a failure while parsing a list-like option and prefixes the
  message with the flag that failed.
  """


@contextlib.contextmanager
def option_parse_error_wrapper(flag: str) -> Generator[None, None, None]:
  """Converts raised ValueError and ArgumentTypeError to OptionParseError
  that are associated with the given flag.
  """
  try:
    yield
  except (ValueError, argparse.ArgumentTypeError) as e:
    raise OptionParseError(
        flag, f"Problem parsing \"{flag}\" options - {e}") from e

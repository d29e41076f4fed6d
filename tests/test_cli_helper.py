# Copyright 2023 The Chromium Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

import argparse
import sys
import unittest

import pytest

from launchconfig import cli_helper, schemas
from launchconfig.exception import InvalidJSONError, InvalidValueError


class _ArgumentParser(argparse.ArgumentParser):

  def error(self, message):
    raise argparse.ArgumentError(None, message)


class CliHelperTestCase(unittest.TestCase):

  def test_parse_positive_int(self):
    self.assertEqual(cli_helper.parse_positive_int("12"), 12)
    with self.assertRaisesRegex(InvalidValueError, "'-1' for --width"):
      cli_helper.parse_positive_int("-1", "--width")

  def test_parse_positive_float(self):
    self.assertEqual(cli_helper.parse_positive_float("0.5"), 0.5)
    with self.assertRaises(InvalidValueError):
      cli_helper.parse_positive_float("0")

  def test_parse_comma_list(self):
    self.assertListEqual(cli_helper.parse_comma_list("a,,b,"), ["a", "b"])
    self.assertListEqual(cli_helper.parse_comma_list(""), [])

  def test_json_option_type(self):
    parse = cli_helper.json_option_type("--headers", schemas.HEADERS)
    self.assertDictEqual(parse('{"a": "b"}'), {"a": "b"})
    with self.assertRaisesRegex(InvalidJSONError, "--headers"):
      parse("{a: b}")


class ArgparseIntegrationTestCase(unittest.TestCase):

  def setUp(self):
    self.parser = _ArgumentParser()
    self.parser.add_argument(
        "--width", type=cli_helper.positive_int_type("--width"))
    self.parser.add_argument(
        "--cpuThrottle", type=cli_helper.positive_float_type("--cpuThrottle"))
    self.parser.add_argument(
        "--cookies",
        type=cli_helper.json_option_type("--cookies", schemas.COOKIES))

  def test_valid(self):
    args = self.parser.parse_args([
        "--width", "800", "--cpuThrottle", "2.5", "--cookies",
        '{"name": "a", "value": "b"}'
    ])
    self.assertEqual(args.width, 800)
    self.assertEqual(args.cpuThrottle, 2.5)
    self.assertDictEqual(args.cookies, {"name": "a", "value": "b"})

  def test_invalid_number_message(self):
    with self.assertRaises(argparse.ArgumentError) as cm:
      self.parser.parse_args(["--width", "wide"])
    self.assertIn("Invalid value 'wide' for --width", str(cm.exception))

  def test_invalid_json_message(self):
    with self.assertRaises(argparse.ArgumentError) as cm:
      self.parser.parse_args(["--cookies", '{"name": "a"}'])
    self.assertIn('Invalid data for "--cookies"', str(cm.exception))


if __name__ == "__main__":
  sys.exit(pytest.main([__file__]))

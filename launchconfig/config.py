# Copyright 2023 The Chromium Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

from __future__ import annotations

import dataclasses
import logging
import urllib.parse
from typing import (Any, Callable, Dict, Final, Iterable, List, Mapping,
                    Optional, Union)

from launchconfig.cli_helper import parse_comma_list
from launchconfig.exception import InvalidURLError, option_parse_error_wrapper
from launchconfig.schema import json_type_name
from launchconfig.schemas import (POSITIVE_FLOAT, POSITIVE_INT, STRING_ARRAY,
                                  get_option_schema)
from launchconfig.validation import (parse_cli_option, parse_unknown,
                                     parse_with_schema)

DELAY_USING_VALUES: Final = ("fulfill", "continue")

# Options that carry structured data, either as json text from the command
# line or as already-parsed values from programmatic callers.
STRUCTURED_OPTIONS: Final = ("cookies", "headers", "auth", "delay",
                             "firefoxPrefs", "overrideHost")

OptionsT = Union[Mapping[str, Any], Any]

_JSON_NAME_OVERRIDES: Final = {"disable_js": "disableJS"}

# Schemes that always need a host, file: urls may omit it.
_HOST_SCHEMES: Final = ("http", "https", "ws", "wss", "ftp")


def _json_name(field_name: str) -> str:
  if field_name in _JSON_NAME_OVERRIDES:
    return _JSON_NAME_OVERRIDES[field_name]
  head, *tail = field_name.split("_")
  return head + "".join(part.capitalize() for part in tail)


@dataclasses.dataclass(frozen=True)
class LaunchOptions:
  url: Optional[str] = None
  browser: str = "chrome"
  width: int = 1366
  height: int = 768
  frame_rate: int = 1
  timeout: int = 30000
  # The list-valued defaults have to be declared before the `list` field
  # below shadows the builtin in the class body.
  block_domains: List[str] = dataclasses.field(default_factory=list)
  block: List[str] = dataclasses.field(default_factory=list)
  disable_js: bool = False
  debug: bool = False
  html: bool = False
  open_html: bool = False
  list: bool = False
  connection_type: Optional[str] = None
  auth: Optional[Dict[str, Any]] = None
  zip: bool = False
  dry: bool = False
  delay_using: str = "continue"
  cookies: Optional[Any] = None
  headers: Optional[Dict[str, str]] = None
  delay: Optional[Dict[str, Any]] = None
  firefox_prefs: Optional[Dict[str, Any]] = None
  override_host: Optional[Dict[str, str]] = None
  args: Optional[List[str]] = None
  cpu_throttle: Optional[float] = None
  upload_url: Optional[str] = None

  def to_json(self) -> Dict[str, Any]:
    return {
        _json_name(field.name): getattr(self, field.name)
        for field in dataclasses.fields(self)
    }


DEFAULT_OPTIONS: Final = LaunchOptions()


def _option_getter(options: OptionsT) -> Callable[[str], Any]:
  if isinstance(options, Mapping):
    return options.get
  return lambda name: getattr(options, name, None)


def normalize_cli_config(options: OptionsT) -> LaunchOptions:
  """Normalize CLI or programmatic options into a LaunchOptions config.

  options is either a mapping keyed by the option names (for instance
  "frameRate") or an attribute object such as an argparse.Namespace.
  Structured options may be json text or already-parsed values. The first
  invalid option raises a ConfigError, options is never modified.
  """
  get = _option_getter(options)
  defaults = DEFAULT_OPTIONS
  config: Dict[str, Any] = {
      "url": get("url"),
      "browser": get("browser") or defaults.browser,
      "width": _positive_int_option("--width", get("width"), defaults.width),
      "height": _positive_int_option("--height", get("height"),
                                     defaults.height),
      "frame_rate": _positive_int_option("--frameRate", get("frameRate"),
                                         defaults.frame_rate),
      "timeout": _positive_int_option("--timeout", get("timeout"),
                                      defaults.timeout),
      "block_domains": list(defaults.block_domains),
      "block": list(defaults.block),
      "disable_js": get("disableJS") or defaults.disable_js,
      "debug": get("debug") or defaults.debug,
      "html": get("html") or defaults.html,
      "open_html": get("openHtml") or defaults.open_html,
      "list": get("list") or defaults.list,
      "connection_type": get("connectionType") or defaults.connection_type,
      "auth": defaults.auth,
      "zip": get("zip") or defaults.zip,
      "dry": get("dry") or defaults.dry,
      "delay_using": defaults.delay_using,
  }

  for name in STRUCTURED_OPTIONS:
    value = get(name)
    if value is not None and value != "":
      field_name = _snake_case(name)
      config[field_name] = _structured_option(f"--{name}", value)

  delay_using = get("delayUsing")
  if delay_using in DELAY_USING_VALUES:
    config["delay_using"] = delay_using
  elif delay_using is not None:
    logging.debug("Ignoring unknown --delayUsing value: %r", delay_using)

  flags = get("flags")
  if flags is not None:
    if isinstance(flags, str):
      config["args"] = parse_comma_list(flags)
    else:
      config["args"] = parse_unknown("--flags", flags, STRING_ARRAY)

  cpu_throttle = get("cpuThrottle")
  if cpu_throttle:
    if isinstance(cpu_throttle, (str, bool)):
      cpu_throttle = parse_with_schema(POSITIVE_FLOAT, cpu_throttle,
                                       "--cpuThrottle")
    config["cpu_throttle"] = cpu_throttle

  block = get("block")
  if block:
    with option_parse_error_wrapper("--block"):
      config["block"] = parse_json_array_or_comma_separated_strings(
          "--block", block)

  block_domains = get("blockDomains")
  if block_domains:
    with option_parse_error_wrapper("--blockDomains"):
      config["block_domains"] = parse_json_array_or_comma_separated_strings(
          "--blockDomains", block_domains)

  upload_url = get("uploadUrl")
  if upload_url:
    if not is_valid_url(upload_url):
      raise InvalidURLError("--uploadUrl", "--uploadUrl must be a valid URL")
    config["upload_url"] = upload_url

  return LaunchOptions(**config)


def _snake_case(name: str) -> str:
  return "".join(f"_{char.lower()}" if char.isupper() else char
                 for char in name)


def _positive_int_option(flag_name: str, value: Any, default: int) -> Any:
  # Explicit None check, 0 is a valid explicit value for programmatic callers.
  if value is None:
    return default
  if isinstance(value, (str, bool)):
    return parse_with_schema(POSITIVE_INT, value, flag_name)
  return value


def _structured_option(flag_name: str, value: Any) -> Any:
  schema = get_option_schema(flag_name)
  if isinstance(value, str):
    logging.debug("%s: parsing json text", flag_name)
    return parse_cli_option(flag_name, value, schema)
  logging.debug("%s: validating %s value", flag_name, json_type_name(value))
  return parse_unknown(flag_name, value, schema)


def parse_json_array_or_comma_separated_strings(
    flag_name: str, choices: Union[str, Iterable[str]]) -> List[str]:
  """Parse the command line parameters options whether they be a json array
  or comma separated strings.

  Each entry containing a "[" is decoded as a json array of strings, any
  other entry is split on commas. Empty items are dropped and the results of
  all entries are concatenated in order.
  """
  if isinstance(choices, str):
    choices = (choices,)
  chosen: List[str] = []
  for opt_group in choices:
    if not isinstance(opt_group, str):
      raise ValueError(
          f"Expected string entry, received {json_type_name(opt_group)}")
    if "[" in opt_group:
      chosen.extend(parse_cli_option(flag_name, opt_group, STRING_ARRAY))
    else:
      chosen.extend(parse_comma_list(opt_group))
  return chosen


def is_valid_url(value: Any) -> bool:
  if not isinstance(value, str):
    return False
  try:
    parsed = urllib.parse.urlsplit(value)
    # Raises ValueError for non-numeric or out of range ports.
    parsed.port  # pylint: disable=pointless-statement
  except ValueError:
    return False
  if not parsed.scheme:
    return False
  if any(char.isspace() or not char.isprintable() for char in parsed.netloc):
    return False
  if parsed.scheme in _HOST_SCHEMES:
    return bool(parsed.hostname)
  return bool(parsed.netloc or parsed.path)

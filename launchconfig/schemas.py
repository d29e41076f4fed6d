# Copyright 2023 The Chromium Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

from __future__ import annotations

import dataclasses
import textwrap
from typing import Dict, Final, List

import tabulate

from launchconfig.schema import (ArraySchema, BoolSchema, EnumSchema, Field,
                                 NumberSchema, ObjectSchema, RecordSchema,
                                 Schema, StrSchema, UnionSchema)

SAME_SITE_VALUES: Final = ("Strict", "Lax", "None")
AUTH_SEND_VALUES: Final = ("unauthorized", "always")

# domain+path or url identify the cookie target. Neither is enforced here,
# missing targets are filled in from the test url later on.
COOKIE: Final = ObjectSchema(
    "Cookie", (
        Field("name", StrSchema()),
        Field("value", StrSchema()),
        Field("domain", StrSchema(), required=False),
        Field("path", StrSchema(), required=False),
        Field("expires", NumberSchema(), required=False),
        Field("httpOnly", BoolSchema(), required=False),
        Field("secure", BoolSchema(), required=False),
        Field("sameSite", EnumSchema(SAME_SITE_VALUES), required=False),
        Field("url", StrSchema(), required=False),
    ),
    passthrough=True)

COOKIES: Final = UnionSchema((ArraySchema(COOKIE), COOKIE))

HEADERS: Final = RecordSchema(StrSchema())

AUTH: Final = ObjectSchema("Auth", (
    Field("username", StrSchema()),
    Field("password", StrSchema()),
    Field("origin", StrSchema(), required=False),
    Field("send", EnumSchema(AUTH_SEND_VALUES), required=False),
))

FIREFOX_PREFS: Final = RecordSchema(
    UnionSchema((StrSchema(), NumberSchema(), BoolSchema())))

OVERRIDE_HOST: Final = RecordSchema(StrSchema())

DELAY: Final = RecordSchema(NumberSchema())

STRING_ARRAY: Final = ArraySchema(StrSchema())

POSITIVE_INT: Final = NumberSchema(integer=True, positive=True, coerce=True)
POSITIVE_FLOAT: Final = NumberSchema(positive=True, coerce=True)


@dataclasses.dataclass(frozen=True)
class OptionSchema:
  flag: str
  schema: Schema
  help: str


OPTION_SCHEMAS: Final[Dict[str, OptionSchema]] = {
    option.flag: option for option in (
        OptionSchema("--cookies", COOKIES,
                     "A cookie object or a list of cookie objects."),
        OptionSchema("--headers", HEADERS,
                     "Extra HTTP headers sent with every request."),
        OptionSchema("--auth", AUTH, "HTTP authentication credentials."),
        OptionSchema("--firefoxPrefs", FIREFOX_PREFS,
                     "Firefox about:config preferences."),
        OptionSchema("--overrideHost", OVERRIDE_HOST,
                     "Maps a host name to a replacement host."),
        OptionSchema("--delay", DELAY,
                     "Maps url regexes to a response delay in ms."),
        OptionSchema("--block", STRING_ARRAY,
                     "Url substrings to block, as json array or csv."),
        OptionSchema("--blockDomains", STRING_ARRAY,
                     "Domains to block, as json array or csv."),
        OptionSchema("--width", POSITIVE_INT, "Viewport width in pixels."),
        OptionSchema("--height", POSITIVE_INT, "Viewport height in pixels."),
        OptionSchema("--frameRate", POSITIVE_INT,
                     "Video recording frame rate."),
        OptionSchema("--timeout", POSITIVE_INT, "Page load timeout in ms."),
        OptionSchema("--cpuThrottle", POSITIVE_FLOAT,
                     "CPU slowdown multiplier (Chromium only)."),
    )
}


def get_option_schema(flag: str) -> Schema:
  try:
    return OPTION_SCHEMAS[flag].schema
  except KeyError as e:
    raise ValueError(f"No schema registered for option '{flag}'") from e


def options_help(width: int = 40) -> str:
  rows: List[List[str]] = []
  for option in OPTION_SCHEMAS.values():
    rows.append([
        option.flag,
        "\n".join(textwrap.wrap(option.schema.type_name, width)),
        option.help,
    ])
  return tabulate.tabulate(rows, headers=["Option", "Type", "Description"])

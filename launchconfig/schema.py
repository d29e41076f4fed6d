# Copyright 2023 The Chromium Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.
""" Composable schema objects used to validate structured launch options. """

from __future__ import annotations

import abc
import dataclasses
import logging
import math
from typing import (Any, Dict, List, Mapping, Optional, Sequence, Tuple,
                    Union)

from launchconfig.exception import SchemaError

PathItemT = Union[str, int]
PathT = Tuple[PathItemT, ...]


def json_type_name(value: Any) -> str:
  """Returns the JSON name of the value's type, as used in issue messages."""
  if value is None:
    return "null"
  # bool is a subclass of int and has to be checked first.
  if isinstance(value, bool):
    return "boolean"
  if isinstance(value, float) and math.isnan(value):
    return "nan"
  if isinstance(value, (int, float)):
    return "number"
  if isinstance(value, str):
    return "string"
  if isinstance(value, (list, tuple)):
    return "array"
  if isinstance(value, Mapping):
    return "object"
  return type(value).__name__


def is_number(value: Any) -> bool:
  return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclasses.dataclass(frozen=True)
class Issue:
  path: PathT
  message: str

  @property
  def path_str(self) -> str:
    if not self.path:
      return "(root)"
    return ".".join(str(item) for item in self.path)

  def __str__(self) -> str:
    return f"{self.path_str}: {self.message}"


@dataclasses.dataclass(frozen=True)
class SchemaResult:
  value: Any = None
  issues: Tuple[Issue, ...] = ()

  @property
  def success(self) -> bool:
    return not self.issues

  @classmethod
  def ok(cls, value: Any) -> SchemaResult:
    return cls(value=value)

  @classmethod
  def fail(cls, path: PathT, message: str) -> SchemaResult:
    return cls(issues=(Issue(path, message),))


class Schema(abc.ABC):

  @property
  @abc.abstractmethod
  def type_name(self) -> str:
    pass

  @abc.abstractmethod
  def accepts_kind(self, value: Any) -> bool:
    """Returns True if the top-level type of value is one this schema can
    check further, regardless of whether its contents are valid."""

  @abc.abstractmethod
  def check(self, value: Any, path: PathT = ()) -> SchemaResult:
    pass

  def parse(self, value: Any) -> Any:
    result = self.check(value)
    if not result.success:
      raise SchemaError(result.issues)
    return result.value

  def _type_mismatch(self, value: Any, path: PathT) -> SchemaResult:
    return SchemaResult.fail(
        path, f"Expected {self.type_name}, received {json_type_name(value)}")

  def __str__(self) -> str:
    return self.type_name


class StrSchema(Schema):

  @property
  def type_name(self) -> str:
    return "string"

  def accepts_kind(self, value: Any) -> bool:
    return isinstance(value, str)

  def check(self, value: Any, path: PathT = ()) -> SchemaResult:
    if not isinstance(value, str):
      return self._type_mismatch(value, path)
    return SchemaResult.ok(value)


class BoolSchema(Schema):

  @property
  def type_name(self) -> str:
    return "boolean"

  def accepts_kind(self, value: Any) -> bool:
    return isinstance(value, bool)

  def check(self, value: Any, path: PathT = ()) -> SchemaResult:
    if not isinstance(value, bool):
      return self._type_mismatch(value, path)
    return SchemaResult.ok(value)


class NumberSchema(Schema):
  """Accepts int and float values, never bool.

  coerce:   convert str input with float() before any other check.
  integer:  reject non-integral values, integral floats are returned as int.
  positive: require value > 0.
  """

  def __init__(self,
               integer: bool = False,
               positive: bool = False,
               coerce: bool = False):
    self.integer = integer
    self.positive = positive
    self.coerce = coerce

  @property
  def type_name(self) -> str:
    name = "integer" if self.integer else "number"
    if self.positive:
      return f"positive {name}"
    return name

  def accepts_kind(self, value: Any) -> bool:
    if self.coerce and isinstance(value, str):
      return True
    return is_number(value)

  def check(self, value: Any, path: PathT = ()) -> SchemaResult:
    number = value
    if self.coerce and isinstance(value, str):
      # float() accepts digit separators, json style numbers do not.
      if "_" in value:
        return SchemaResult.fail(path, "Expected number, received nan")
      try:
        number = float(value)
      except ValueError:
        return SchemaResult.fail(path, "Expected number, received nan")
    if not is_number(number):
      return SchemaResult.fail(
          path, f"Expected number, received {json_type_name(number)}")
    if not math.isfinite(number):
      return SchemaResult.fail(
          path, f"Expected finite number, received {json_type_name(number)}")
    issues: List[Issue] = []
    if self.integer:
      if isinstance(number, float):
        if number.is_integer():
          number = int(number)
        else:
          issues.append(Issue(path, "Expected integer, received float"))
    if self.positive and number <= 0:
      issues.append(Issue(path, "Number must be greater than 0"))
    if issues:
      return SchemaResult(issues=tuple(issues))
    return SchemaResult.ok(number)


class EnumSchema(Schema):

  def __init__(self, values: Sequence[str]):
    assert values, "EnumSchema needs at least one value"
    self.values: Tuple[str, ...] = tuple(values)

  @property
  def type_name(self) -> str:
    return " | ".join(f"'{value}'" for value in self.values)

  def accepts_kind(self, value: Any) -> bool:
    return isinstance(value, str)

  def check(self, value: Any, path: PathT = ()) -> SchemaResult:
    if not isinstance(value, str):
      return self._type_mismatch(value, path)
    if value not in self.values:
      return SchemaResult.fail(
          path, f"Invalid enum value. Expected {self.type_name}, "
          f"received '{value}'")
    return SchemaResult.ok(value)


class ArraySchema(Schema):

  def __init__(self, item: Schema):
    self.item = item

  @property
  def type_name(self) -> str:
    return f"List[{self.item.type_name}]"

  def accepts_kind(self, value: Any) -> bool:
    return isinstance(value, (list, tuple))

  def check(self, value: Any, path: PathT = ()) -> SchemaResult:
    if not self.accepts_kind(value):
      return self._type_mismatch(value, path)
    items: List[Any] = []
    issues: List[Issue] = []
    for index, item in enumerate(value):
      result = self.item.check(item, path + (index,))
      issues.extend(result.issues)
      items.append(result.value)
    if issues:
      return SchemaResult(issues=tuple(issues))
    return SchemaResult.ok(items)


class RecordSchema(Schema):
  """A mapping from arbitrary string keys to values of a single schema."""

  def __init__(self, value: Schema):
    self.value = value

  @property
  def type_name(self) -> str:
    return f"Dict[string, {self.value.type_name}]"

  def accepts_kind(self, value: Any) -> bool:
    return isinstance(value, Mapping)

  def check(self, value: Any, path: PathT = ()) -> SchemaResult:
    if not self.accepts_kind(value):
      return self._type_mismatch(value, path)
    record: Dict[str, Any] = {}
    issues: List[Issue] = []
    for key, item in value.items():
      item_path = path + (key,)
      if not isinstance(key, str):
        issues.append(
            Issue(item_path,
                  f"Expected string key, received {json_type_name(key)}"))
        continue
      result = self.value.check(item, item_path)
      issues.extend(result.issues)
      record[key] = result.value
    if issues:
      return SchemaResult(issues=tuple(issues))
    return SchemaResult.ok(record)


@dataclasses.dataclass(frozen=True)
class Field:
  name: str
  schema: Schema
  required: bool = True
  help: str = ""


class ObjectSchema(Schema):
  """An object with a fixed set of known fields.

  Known fields are validated strictly. Unknown fields are dropped, unless
  passthrough is set in which case they are copied through unmodified.
  The output keeps the key order of the input.
  """

  def __init__(self,
               name: str,
               fields: Sequence[Field],
               passthrough: bool = False):
    self.name = name
    self.fields: Dict[str, Field] = {}
    for field in fields:
      assert field.name not in self.fields, f"Duplicate field: {field.name}"
      self.fields[field.name] = field
    self.passthrough = passthrough

  @property
  def type_name(self) -> str:
    return self.name

  def accepts_kind(self, value: Any) -> bool:
    return isinstance(value, Mapping)

  def check(self, value: Any, path: PathT = ()) -> SchemaResult:
    if not self.accepts_kind(value):
      return self._type_mismatch(value, path)
    checked: Dict[str, Any] = {}
    issues: List[Issue] = []
    for field in self.fields.values():
      field_path = path + (field.name,)
      if field.name not in value:
        if field.required:
          issues.append(Issue(field_path, "Required"))
        continue
      result = field.schema.check(value[field.name], field_path)
      issues.extend(result.issues)
      checked[field.name] = result.value
    if issues:
      return SchemaResult(issues=tuple(issues))
    data: Dict[str, Any] = {}
    for key, item in value.items():
      if key in checked:
        data[key] = checked[key]
      elif self.passthrough:
        data[key] = item
      else:
        logging.debug("%s: dropping unknown field '%s'", self.name, key)
    return SchemaResult.ok(data)


class UnionSchema(Schema):
  """Accepts the first option that validates successfully.

  On failure the issues of the first option that accepts the value's kind
  are reported, so that a list of broken items reports one issue per item.
  If no option accepts the kind, a single issue for the whole value is
  reported.
  """

  def __init__(self, options: Sequence[Schema]):
    assert len(options) >= 2, "UnionSchema needs at least two options"
    self.options: Tuple[Schema, ...] = tuple(options)

  @property
  def type_name(self) -> str:
    return " | ".join(option.type_name for option in self.options)

  def accepts_kind(self, value: Any) -> bool:
    return any(option.accepts_kind(value) for option in self.options)

  def check(self, value: Any, path: PathT = ()) -> SchemaResult:
    first_failure: Optional[SchemaResult] = None
    for option in self.options:
      result = option.check(value, path)
      if result.success:
        return result
      if first_failure is None and option.accepts_kind(value):
        first_failure = result
    if first_failure is not None:
      return first_failure
    return self._type_mismatch(value, path)

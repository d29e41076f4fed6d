# Copyright 2023 The Chromium Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

import sys
import unittest

import pytest

from launchconfig.exception import SchemaError
from launchconfig.schema import (ArraySchema, BoolSchema, EnumSchema, Field,
                                 Issue, NumberSchema, ObjectSchema,
                                 RecordSchema, StrSchema, UnionSchema,
                                 json_type_name)


class JsonTypeNameTestCase(unittest.TestCase):

  def test_names(self):
    self.assertEqual(json_type_name(None), "null")
    self.assertEqual(json_type_name(True), "boolean")
    self.assertEqual(json_type_name(1), "number")
    self.assertEqual(json_type_name(1.5), "number")
    self.assertEqual(json_type_name(float("nan")), "nan")
    self.assertEqual(json_type_name("a"), "string")
    self.assertEqual(json_type_name([]), "array")
    self.assertEqual(json_type_name({}), "object")
    self.assertEqual(json_type_name(object()), "object")


class ScalarSchemaTestCase(unittest.TestCase):

  def test_str(self):
    self.assertEqual(StrSchema().parse("a"), "a")
    result = StrSchema().check(1, ("field",))
    self.assertFalse(result.success)
    self.assertTupleEqual(result.issues,
                          (Issue(("field",), "Expected string, received number"),))

  def test_bool(self):
    self.assertIs(BoolSchema().parse(False), False)
    with self.assertRaises(SchemaError):
      BoolSchema().parse(0)

  def test_number_rejects_bool(self):
    with self.assertRaises(SchemaError):
      NumberSchema().parse(True)

  def test_number_without_coercion(self):
    with self.assertRaises(SchemaError):
      NumberSchema().parse("1")
    self.assertEqual(NumberSchema().parse(-1.5), -1.5)

  def test_integer_issues_are_collected(self):
    result = NumberSchema(integer=True, positive=True).check(-1.5)
    self.assertListEqual([issue.message for issue in result.issues], [
        "Expected integer, received float",
        "Number must be greater than 0",
    ])

  def test_integral_float_to_int(self):
    value = NumberSchema(integer=True).parse(3.0)
    self.assertEqual(value, 3)
    self.assertIsInstance(value, int)

  def test_enum(self):
    schema = EnumSchema(("a", "b"))
    self.assertEqual(schema.parse("a"), "a")
    result = schema.check("c")
    self.assertEqual(result.issues[0].message,
                     "Invalid enum value. Expected 'a' | 'b', received 'c'")
    self.assertEqual(schema.check(1).issues[0].message,
                     "Expected 'a' | 'b', received number")


class ContainerSchemaTestCase(unittest.TestCase):

  def test_array_copies(self):
    data = ["a", "b"]
    result = ArraySchema(StrSchema()).parse(data)
    self.assertListEqual(result, data)
    self.assertIsNot(result, data)

  def test_record_non_string_key(self):
    result = RecordSchema(StrSchema()).check({1: "a"})
    self.assertEqual(result.issues[0].path, (1,))

  def test_object_missing_and_wrong(self):
    schema = ObjectSchema("Test", (
        Field("a", StrSchema()),
        Field("b", StrSchema(), required=False),
        Field("c", NumberSchema()),
    ))
    result = schema.check({"b": 1})
    self.assertListEqual([str(issue) for issue in result.issues], [
        "a: Required",
        "b: Expected string, received number",
        "c: Required",
    ])

  def test_object_keeps_input_order(self):
    schema = ObjectSchema(
        "Test", (Field("a", StrSchema()), Field("b", StrSchema())),
        passthrough=True)
    result = schema.parse({"x": 1, "b": "2", "a": "1"})
    self.assertListEqual(list(result.keys()), ["x", "b", "a"])

  def test_object_drops_unknown(self):
    schema = ObjectSchema("Test", (Field("a", StrSchema()),))
    self.assertDictEqual(schema.parse({"a": "1", "b": 2}), {"a": "1"})

  def test_object_null_is_not_missing(self):
    schema = ObjectSchema("Test", (Field("a", StrSchema(), required=False),))
    with self.assertRaises(SchemaError):
      schema.parse({"a": None})

  def test_object_does_not_modify_input(self):
    schema = ObjectSchema("Test", (Field("a", StrSchema()),))
    data = {"a": "1", "b": 2}
    schema.parse(data)
    self.assertDictEqual(data, {"a": "1", "b": 2})

  def test_object_duplicate_field(self):
    with self.assertRaises(AssertionError):
      ObjectSchema("Test", (Field("a", StrSchema()), Field("a", StrSchema())))


class UnionSchemaTestCase(unittest.TestCase):

  def setUp(self):
    self.item = ObjectSchema("Item", (Field("id", StrSchema()),))
    self.schema = UnionSchema((ArraySchema(self.item), self.item))

  def test_options(self):
    self.assertDictEqual(self.schema.parse({"id": "a"}), {"id": "a"})
    self.assertListEqual(self.schema.parse([{"id": "a"}]), [{"id": "a"}])

  def test_matching_kind_issues(self):
    result = self.schema.check([{"id": "a"}, {}])
    self.assertTupleEqual(result.issues, (Issue((1, "id"), "Required"),))
    result = self.schema.check({"id": 1})
    self.assertTupleEqual(result.issues,
                          (Issue(("id",), "Expected string, received number"),))

  def test_no_matching_kind(self):
    result = self.schema.check(1)
    self.assertTupleEqual(
        result.issues,
        (Issue((), "Expected List[Item] | Item, received number"),))

  def test_scalar_union(self):
    schema = UnionSchema((StrSchema(), NumberSchema(), BoolSchema()))
    self.assertEqual(schema.parse(1), 1)
    self.assertIs(schema.parse(True), True)
    with self.assertRaises(SchemaError):
      schema.parse([])


if __name__ == "__main__":
  sys.exit(pytest.main([__file__]))

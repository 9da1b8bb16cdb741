import unittest

import numpy as np

from vecparam_data_model.data_types import DataType, MsgType, ScalarKind
from vecparam_data_model.rpc_packets import (
    CollectionSchema, FieldData, FieldSchema, InsertRequest, KeyValuePair, MsgBase, ScalarField, SearchRequest,
    VectorField,
)
from vecparam_exception_model.exception import ParamException


class TestScalarField(unittest.TestCase):

    def test_numeric_data_is_typed_and_read_only(self):
        sf = ScalarField(kind=ScalarKind.INT_DATA, data=[1, 2, 3])
        self.assertEqual(sf.data.dtype, np.int32)
        self.assertEqual(len(sf), 3)
        with self.assertRaises(ValueError):
            sf.data[0] = 10

    def test_float_overflow_rejected(self):
        with self.assertRaises(ParamException):
            ScalarField(kind=ScalarKind.FLOAT_DATA, data=[1e39])
        with self.assertRaises(ParamException):
            VectorField(dim=1, float_vector=[1e39])

    def test_string_data_is_tuple(self):
        sf = ScalarField(kind=ScalarKind.STRING_DATA, data=["a", "b"])
        self.assertEqual(sf.data, ("a", "b"))

    def test_equality(self):
        self.assertEqual(ScalarField(ScalarKind.LONG_DATA, [1, 2]), ScalarField(ScalarKind.LONG_DATA, [1, 2]))
        self.assertNotEqual(ScalarField(ScalarKind.LONG_DATA, [1, 2]), ScalarField(ScalarKind.INT_DATA, [1, 2]))
        self.assertNotEqual(ScalarField(ScalarKind.STRING_DATA, ["a"]), ScalarField(ScalarKind.STRING_DATA, ["b"]))


class TestVectorField(unittest.TestCase):

    def test_requires_exactly_one_payload(self):
        with self.assertRaises(ParamException):
            VectorField(dim=2)
        with self.assertRaises(ParamException):
            VectorField(dim=2, float_vector=np.zeros(2), binary_vector=b"\x00")

    def test_float_payload(self):
        vf = VectorField(dim=2, float_vector=[1.0, 2.0, 3.0, 4.0])
        self.assertTrue(vf.is_float())
        self.assertEqual(vf.float_vector.dtype, np.float32)
        self.assertEqual(vf, VectorField(dim=2, float_vector=np.array([1, 2, 3, 4], dtype=np.float32)))

    def test_binary_payload(self):
        vf = VectorField(dim=16, binary_vector=bytearray(b"\x01\x02"))
        self.assertFalse(vf.is_float())
        self.assertEqual(vf.binary_vector, b"\x01\x02")
        self.assertNotEqual(vf, VectorField(dim=8, binary_vector=b"\x01\x02"))


class TestFieldData(unittest.TestCase):

    def test_requires_exactly_one_payload(self):
        with self.assertRaises(ParamException):
            FieldData(field_name="f", type=DataType.INT64)
        with self.assertRaises(ParamException):
            FieldData(field_name="f", type=DataType.INT64,
                      scalars=ScalarField(ScalarKind.LONG_DATA, [1]),
                      vectors=VectorField(dim=8, binary_vector=b"\x00"))


class TestRequests(unittest.TestCase):

    def test_sequences_are_frozen_to_tuples(self):
        schema = FieldSchema(name="vec", data_type=DataType.FLOAT_VECTOR,
                             type_params=[KeyValuePair(key="dim", value="2")])
        self.assertIsInstance(schema.type_params, tuple)

        collection = CollectionSchema(name="c", fields=[schema])
        self.assertEqual(collection.fields, (schema,))

        request = InsertRequest(base=MsgBase(msg_type=MsgType.INSERT), collection_name="c",
                                partition_name="_default", num_rows=0, fields_data=[])
        self.assertEqual(request.fields_data, ())

    def test_get_search_param(self):
        request = SearchRequest(collection_name="c", placeholder_group=b"",
                                search_params=[KeyValuePair(key="topk", value="10")])
        self.assertEqual(request.get_search_param("topk"), "10")
        self.assertIsNone(request.get_search_param("params"))


if __name__ == '__main__':
    unittest.main()

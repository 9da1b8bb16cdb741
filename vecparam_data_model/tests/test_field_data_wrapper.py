import unittest

import numpy as np

from vecparam_data_model.data_types import DataType, ScalarKind
from vecparam_data_model.field_data_wrapper import FieldDataWrapper
from vecparam_data_model.rpc_packets import FieldData, ScalarField, VectorField
from vecparam_exception_model.exception import IllegalResponseException


class TestFieldDataWrapper(unittest.TestCase):

    def test_float_vectors(self):
        fd = FieldData(field_name="vec", type=DataType.FLOAT_VECTOR,
                       vectors=VectorField(dim=2, float_vector=np.array([1, 2, 3, 4, 5, 6], dtype=np.float32)))
        wrapper = FieldDataWrapper(fd)

        self.assertTrue(wrapper.is_vector_field())
        self.assertEqual(wrapper.get_dim(), 2)
        self.assertEqual(wrapper.get_row_count(), 3)
        self.assertEqual(wrapper.get_field_data(), [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])

    def test_binary_vectors(self):
        fd = FieldData(field_name="bin", type=DataType.BINARY_VECTOR,
                       vectors=VectorField(dim=16, binary_vector=b"\x01\x02\x03\x04"))
        wrapper = FieldDataWrapper(fd)

        self.assertEqual(wrapper.get_dim(), 16)
        self.assertEqual(wrapper.get_row_count(), 2)
        self.assertEqual(wrapper.get_field_data(), [b"\x01\x02", b"\x03\x04"])

    def test_scalars(self):
        fd = FieldData(field_name="id", type=DataType.INT64,
                       scalars=ScalarField(kind=ScalarKind.LONG_DATA, data=[7, 8, 9]))
        wrapper = FieldDataWrapper(fd)

        self.assertFalse(wrapper.is_vector_field())
        self.assertEqual(wrapper.get_row_count(), 3)
        self.assertEqual(wrapper.get_field_data(), [7, 8, 9])
        self.assertIsInstance(wrapper.get_field_data()[0], int)

    def test_strings(self):
        fd = FieldData(field_name="name", type=DataType.VARCHAR,
                       scalars=ScalarField(kind=ScalarKind.STRING_DATA, data=["a", "b"]))
        self.assertEqual(FieldDataWrapper(fd).get_field_data(), ["a", "b"])

    def test_dim_of_scalar_field_fails(self):
        fd = FieldData(field_name="id", type=DataType.INT64,
                       scalars=ScalarField(kind=ScalarKind.LONG_DATA, data=[1]))
        with self.assertRaises(IllegalResponseException):
            FieldDataWrapper(fd).get_dim()

    def test_payload_not_multiple_of_dim(self):
        fd = FieldData(field_name="vec", type=DataType.FLOAT_VECTOR,
                       vectors=VectorField(dim=2, float_vector=np.array([1, 2, 3], dtype=np.float32)))
        with self.assertRaises(IllegalResponseException):
            FieldDataWrapper(fd).get_row_count()

    def test_binary_dim_not_multiple_of_eight(self):
        fd = FieldData(field_name="bin", type=DataType.BINARY_VECTOR,
                       vectors=VectorField(dim=4, binary_vector=b"\x01"))
        with self.assertRaises(IllegalResponseException):
            FieldDataWrapper(fd).get_dim()

    def test_vector_type_with_scalar_payload(self):
        fd = FieldData(field_name="vec", type=DataType.FLOAT_VECTOR,
                       scalars=ScalarField(kind=ScalarKind.FLOAT_DATA, data=[1.0]))
        with self.assertRaises(IllegalResponseException):
            FieldDataWrapper(fd).get_field_data()

    def test_float_type_with_binary_payload(self):
        fd = FieldData(field_name="vec", type=DataType.FLOAT_VECTOR,
                       vectors=VectorField(dim=8, binary_vector=b"\x01"))
        with self.assertRaises(IllegalResponseException):
            FieldDataWrapper(fd).get_row_count()


if __name__ == '__main__':
    unittest.main()

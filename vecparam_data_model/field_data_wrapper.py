from typing import Any, List

from vecparam_data_model.data_types import DataType
from vecparam_data_model.rpc_packets import FieldData
from vecparam_exception_model.exception import IllegalResponseException


class FieldDataWrapper:
    """
    Reads a ``FieldData`` wire record back into client-side rows.

    Float vector rows come back as lists of floats, binary vector rows as
    ``bytes`` of ``dim / 8`` length and scalars as native Python values.
    """

    def __init__(self, field_data: FieldData):
        self.field_data = field_data

    def is_vector_field(self) -> bool:
        return self.field_data.type.is_vector()

    def get_dim(self) -> int:
        """
        Dimension of a vector field, in floats for float vectors and in bits
        for binary vectors.
        """
        if not self.is_vector_field():
            raise IllegalResponseException("Non-vector field has no dimension",
                                           field_name=self.field_data.field_name)
        vectors = self.field_data.vectors
        if vectors is None or vectors.dim <= 0:
            raise IllegalResponseException("Vector field carries no valid dimension",
                                           field_name=self.field_data.field_name)
        if self.field_data.type == DataType.BINARY_VECTOR and vectors.dim % 8 != 0:
            raise IllegalResponseException(f"Binary vector dimension {vectors.dim} is not a multiple of 8",
                                           field_name=self.field_data.field_name)
        return vectors.dim

    def get_row_count(self) -> int:
        if self.is_vector_field():
            dim = self.get_dim()
            if self.field_data.type == DataType.FLOAT_VECTOR:
                total = len(self._float_payload())
            else:
                total = len(self._binary_payload()) * 8
            if total % dim != 0:
                raise IllegalResponseException(f"Vector payload of size {total} is not a multiple of dim {dim}",
                                               field_name=self.field_data.field_name)
            return total // dim

        scalars = self.field_data.scalars
        if scalars is None:
            raise IllegalResponseException("Scalar field carries no scalar data",
                                           field_name=self.field_data.field_name)
        return len(scalars)

    def get_field_data(self) -> List[Any]:
        row_count = self.get_row_count()
        if self.field_data.type == DataType.FLOAT_VECTOR:
            dim = self.get_dim()
            return self._float_payload().reshape(row_count, dim).tolist()
        if self.field_data.type == DataType.BINARY_VECTOR:
            width = self.get_dim() // 8
            payload = self._binary_payload()
            return [payload[i * width:(i + 1) * width] for i in range(row_count)]

        data = self.field_data.scalars.data
        if isinstance(data, tuple):
            return list(data)
        return data.tolist()

    def _float_payload(self):
        vectors = self.field_data.vectors
        if not vectors.is_float():
            raise IllegalResponseException("Float vector field carries no float data",
                                           field_name=self.field_data.field_name)
        return vectors.float_vector

    def _binary_payload(self) -> bytes:
        vectors = self.field_data.vectors
        if vectors.is_float():
            raise IllegalResponseException("Binary vector field carries no binary data",
                                           field_name=self.field_data.field_name)
        return vectors.binary_vector

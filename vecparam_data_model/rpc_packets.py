"""Wire-format request and schema records exchanged with the remote service."""

from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np

from vecparam_data_model.data_types import DataType, DslType, MsgType, ScalarKind
from vecparam_exception_model.exception import ParamException

# numpy dtype of each numeric scalar payload; STRING_DATA is a tuple of str
SCALAR_DTYPES = {
    ScalarKind.LONG_DATA: np.int64,
    ScalarKind.INT_DATA: np.int32,
    ScalarKind.BOOL_DATA: np.bool_,
    ScalarKind.FLOAT_DATA: np.float32,
    ScalarKind.DOUBLE_DATA: np.float64,
}


def _frozen_array(values, dtype) -> np.ndarray:
    with np.errstate(over='ignore'):
        arr = np.array(values, dtype=dtype).reshape(-1)
    if arr.dtype.kind == 'f':
        src = np.asarray(values, dtype=np.float64).reshape(-1)
        if np.any(np.isinf(arr) & np.isfinite(src)):
            raise ParamException(f"Values out of range for {arr.dtype}")
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True)
class KeyValuePair:
    key: str
    value: str


@dataclass(frozen=True)
class MsgBase:
    msg_type: MsgType
    msg_id: int = 0
    timestamp: int = 0
    source_id: int = 0


@dataclass(frozen=True, eq=False)
class ScalarField:
    """
    Scalar column payload.

    Attributes:
        kind: Which typed array ``data`` holds.
        data: A read-only numpy array for numeric kinds, a tuple of str for STRING_DATA.
    """
    kind: ScalarKind
    data: Union[np.ndarray, Sequence[str]]

    def __post_init__(self):
        if self.kind == ScalarKind.STRING_DATA:
            object.__setattr__(self, 'data', tuple(self.data))
        else:
            object.__setattr__(self, 'data', _frozen_array(self.data, SCALAR_DTYPES[self.kind]))

    def __len__(self):
        return len(self.data)

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        if self.kind != other.kind:
            return False
        if self.kind == ScalarKind.STRING_DATA:
            return self.data == other.data
        return np.array_equal(self.data, other.data)


@dataclass(frozen=True, eq=False)
class VectorField:
    """
    Vector column payload: a dimension plus exactly one of a flat float32
    array (row-major) or a packed byte buffer.
    """
    dim: int
    float_vector: Optional[np.ndarray] = None
    binary_vector: Optional[bytes] = None

    def __post_init__(self):
        if (self.float_vector is None) == (self.binary_vector is None):
            raise ParamException("VectorField must hold exactly one of float_vector or binary_vector")
        if self.float_vector is not None:
            object.__setattr__(self, 'float_vector', _frozen_array(self.float_vector, np.float32))
        else:
            object.__setattr__(self, 'binary_vector', bytes(self.binary_vector))

    def is_float(self) -> bool:
        return self.float_vector is not None

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        if self.dim != other.dim or self.is_float() != other.is_float():
            return False
        if self.is_float():
            return np.array_equal(self.float_vector, other.float_vector)
        return self.binary_vector == other.binary_vector


@dataclass(frozen=True)
class FieldData:
    """A marshalled column: field name, type tag and either a scalar or a vector payload."""
    field_name: str
    type: DataType
    scalars: Optional[ScalarField] = None
    vectors: Optional[VectorField] = None

    def __post_init__(self):
        if (self.scalars is None) == (self.vectors is None):
            raise ParamException("FieldData must hold exactly one of scalars or vectors",
                                 field_name=self.field_name)


@dataclass(frozen=True)
class FieldSchema:
    name: str
    data_type: DataType
    description: str = ""
    is_primary_key: bool = False
    auto_id: bool = False
    type_params: Sequence[KeyValuePair] = ()

    def __post_init__(self):
        object.__setattr__(self, 'type_params', tuple(self.type_params))


@dataclass(frozen=True)
class CollectionSchema:
    """Schema of a collection as returned by a describe-collection call."""
    name: str
    description: str = ""
    auto_id: bool = False
    fields: Sequence[FieldSchema] = ()

    def __post_init__(self):
        object.__setattr__(self, 'fields', tuple(self.fields))


@dataclass(frozen=True)
class InsertRequest:
    base: MsgBase
    collection_name: str
    partition_name: str
    num_rows: int
    fields_data: Sequence[FieldData] = ()
    db_name: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'fields_data', tuple(self.fields_data))


@dataclass(frozen=True)
class SearchRequest:
    """
    Attributes:
        placeholder_group: Serialized ``PlaceholderGroup`` holding the target vectors.
        dsl: Boolean filter expression, empty when no filter is applied.
        search_params: ``anns_field``, ``topk``, ``metric_type``, ``round_decimal``
                       and optionally ``params``.
    """
    collection_name: str
    placeholder_group: bytes
    dsl_type: DslType = DslType.BOOL_EXPR_V1
    dsl: str = ""
    partition_names: Sequence[str] = ()
    output_fields: Sequence[str] = ()
    search_params: Sequence[KeyValuePair] = ()
    travel_timestamp: int = 0
    guarantee_timestamp: int = 0
    db_name: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'partition_names', tuple(self.partition_names))
        object.__setattr__(self, 'output_fields', tuple(self.output_fields))
        object.__setattr__(self, 'search_params', tuple(self.search_params))

    def get_search_param(self, key: str) -> Optional[str]:
        for kv in self.search_params:
            if kv.key == key:
                return kv.value
        return None


@dataclass(frozen=True)
class QueryRequest:
    collection_name: str
    expr: str
    partition_names: Sequence[str] = ()
    output_fields: Sequence[str] = ()
    travel_timestamp: int = 0
    guarantee_timestamp: int = 0
    db_name: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'partition_names', tuple(self.partition_names))
        object.__setattr__(self, 'output_fields', tuple(self.output_fields))


@dataclass(frozen=True)
class GetIndexBuildProgressRequest:
    collection_name: str
    field_name: str = ""
    index_name: str = ""
    db_name: str = ""

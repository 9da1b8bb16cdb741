"""Marshals a named, typed column of values into a ``FieldData`` wire record.

Vector columns are flattened into one vector block (row-major float32 data or
concatenated packed bytes plus the dimension); scalar columns become a typed
array under the matching scalar kind. INT8/INT16/INT32 columns are widened to
32-bit storage but keep their declared type tag.
"""

import logging
from collections.abc import Sequence
from typing import Any, Callable, Dict, List, Tuple

import numpy as np

from vecparam_data_model.data_types import DataType, ScalarKind
from vecparam_data_model.rpc_packets import FieldData, ScalarField, VectorField
from vecparam_data_model.vector_values import as_float_row
from vecparam_exception_model.exception import ParamException

logger = logging.getLogger(__name__)


def _is_int(v: Any) -> bool:
    return isinstance(v, (int, np.integer)) and not isinstance(v, (bool, np.bool_))


def _is_bool(v: Any) -> bool:
    return isinstance(v, (bool, np.bool_))


def _is_float(v: Any) -> bool:
    return isinstance(v, (float, np.floating))


def _is_str(v: Any) -> bool:
    return isinstance(v, str)


# data type -> (scalar kind, element check, readable name of the expected python type)
_SCALAR_RULES: Dict[DataType, Tuple[ScalarKind, Callable[[Any], bool], str]] = {
    DataType.INT64: (ScalarKind.LONG_DATA, _is_int, "int"),
    DataType.INT32: (ScalarKind.INT_DATA, _is_int, "int"),
    DataType.INT16: (ScalarKind.INT_DATA, _is_int, "int"),
    DataType.INT8: (ScalarKind.INT_DATA, _is_int, "int"),
    DataType.BOOL: (ScalarKind.BOOL_DATA, _is_bool, "bool"),
    DataType.FLOAT: (ScalarKind.FLOAT_DATA, _is_float, "float"),
    DataType.DOUBLE: (ScalarKind.DOUBLE_DATA, _is_float, "float"),
    DataType.STRING: (ScalarKind.STRING_DATA, _is_str, "str"),
    DataType.VARCHAR: (ScalarKind.STRING_DATA, _is_str, "str"),
}

_INT_RANGES: Dict[DataType, Tuple[int, int]] = {
    DataType.INT8: (-2 ** 7, 2 ** 7 - 1),
    DataType.INT16: (-2 ** 15, 2 ** 15 - 1),
    DataType.INT32: (-2 ** 31, 2 ** 31 - 1),
    DataType.INT64: (-2 ** 63, 2 ** 63 - 1),
}


def _check_values(field_name: str, data_type: DataType, values: Any) -> None:
    if values is None:
        raise ParamException("Cannot generate FieldData from null object", field_name=field_name)
    if not isinstance(data_type, DataType) or data_type in (DataType.NONE, DataType.UNRECOGNIZED):
        raise ParamException(f"Cannot support this dataType: {data_type}", field_name=field_name)
    if isinstance(values, (str, bytes, bytearray)) or not isinstance(values, (Sequence, np.ndarray)):
        raise ParamException(f"Values of field must be a list, got {type(values).__name__}",
                             field_name=field_name)


def _float_rows(field_name: str, values: Any) -> List[np.ndarray]:
    if len(values) == 0:
        raise ParamException("FloatVector field must have at least one row", field_name=field_name)

    rows: List[np.ndarray] = []
    for obj in values:
        try:
            rows.append(as_float_row(obj, name="The type of FloatVector"))
        except ParamException as e:
            raise ParamException(e.message, field_name=field_name) from e

    dim = rows[0].size
    if dim == 0:
        raise ParamException("FloatVector rows cannot be empty", field_name=field_name)
    for i, row in enumerate(rows):
        if row.size != dim:
            raise ParamException(f"Vector dimension must be equal: row {i} has {row.size}, expected {dim}",
                                 field_name=field_name)
    return rows


def _binary_rows(field_name: str, values: Any) -> List[bytes]:
    if len(values) == 0:
        raise ParamException("BinaryVector field must have at least one row", field_name=field_name)

    rows: List[bytes] = []
    for obj in values:
        if not isinstance(obj, (bytes, bytearray)):
            raise ParamException(f"The type of BinaryVector must be bytes, got {type(obj).__name__}",
                                 field_name=field_name)
        rows.append(bytes(obj))

    width = len(rows[0])
    if width == 0:
        raise ParamException("BinaryVector rows cannot be empty", field_name=field_name)
    for i, row in enumerate(rows):
        if len(row) != width:
            raise ParamException(f"Vector dimension must be equal: row {i} has {len(row)} bytes, expected {width}",
                                 field_name=field_name)
    return rows


def _overflows_float32(v: Any) -> bool:
    with np.errstate(over='ignore'):
        return bool(np.isinf(np.float32(v)) and np.isfinite(v))


def _check_scalars(field_name: str, data_type: DataType, values: Any) -> None:
    _, is_valid, expected = _SCALAR_RULES[data_type]
    bounds = _INT_RANGES.get(data_type)
    for v in values:
        if not is_valid(v):
            raise ParamException(f"The {data_type.name} field expects {expected} values, got {type(v).__name__}",
                                 field_name=field_name)
        if bounds is not None and not bounds[0] <= int(v) <= bounds[1]:
            raise ParamException(f"Value {v} is out of range for {data_type.name}", field_name=field_name)
        if data_type == DataType.FLOAT and _overflows_float32(v):
            raise ParamException(f"Value {v} is out of range for {data_type.name}", field_name=field_name)


def validate_field_values(field_name: str, data_type: DataType, values: Any) -> None:
    """
    Check values against a declared data type without building a wire record.

    Raises:
        ParamException: If values are null, the data type is unsupported, or any
                        value does not match the data type.
    """
    _check_values(field_name, data_type, values)
    if data_type == DataType.FLOAT_VECTOR:
        _float_rows(field_name, values)
    elif data_type == DataType.BINARY_VECTOR:
        _binary_rows(field_name, values)
    else:
        _check_scalars(field_name, data_type, values)


def gen_field_data(field_name: str, data_type: DataType, values: Any) -> FieldData:
    """
    Marshal a column of values into a FieldData record.

    Args:
        field_name: Name of the collection field.
        data_type: Declared type of the field.
        values: One entry per row. Vector rows are themselves sequences, a
                list of floats for FLOAT_VECTOR and bytes for BINARY_VECTOR.

    Returns:
        FieldData with a vector block or a scalar array.

    Raises:
        ParamException: If the values cannot be marshalled as ``data_type``.
    """
    _check_values(field_name, data_type, values)

    if data_type == DataType.FLOAT_VECTOR:
        rows = _float_rows(field_name, values)
        floats = np.concatenate(rows)
        dim = floats.size // len(rows)
        logger.debug(f"Marshalled {len(rows)} float vectors of dim {dim} for field {field_name}")
        return FieldData(field_name=field_name, type=data_type,
                         vectors=VectorField(dim=dim, float_vector=floats))

    if data_type == DataType.BINARY_VECTOR:
        rows = _binary_rows(field_name, values)
        dim = len(rows[0]) * 8
        logger.debug(f"Marshalled {len(rows)} binary vectors of dim {dim} for field {field_name}")
        return FieldData(field_name=field_name, type=data_type,
                         vectors=VectorField(dim=dim, binary_vector=b"".join(rows)))

    _check_scalars(field_name, data_type, values)
    kind = _SCALAR_RULES[data_type][0]
    data = list(values)
    logger.debug(f"Marshalled {len(data)} {data_type.name} values for field {field_name}")
    return FieldData(field_name=field_name, type=data_type, scalars=ScalarField(kind=kind, data=data))

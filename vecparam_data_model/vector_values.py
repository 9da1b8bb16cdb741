"""Tagged vector values used as search targets.

Callers pick the vector kind explicitly by constructing either a
``FloatVector`` or a ``BinaryVector``; the converters never guess the kind
from the shape of a raw Python object.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from numbers import Real
from typing import Sequence, Union

import numpy as np

from vecparam_data_model.data_types import PlaceholderType
from vecparam_exception_model.exception import ParamException


class TargetVector(ABC):
    """Common interface of the search target vector variants."""

    @property
    @abstractmethod
    def placeholder_type(self) -> PlaceholderType:
        ...

    @property
    @abstractmethod
    def dim(self) -> int:
        ...

    @abstractmethod
    def to_bytes(self) -> bytes:
        ...


def _to_float32(src: np.ndarray, name: str) -> np.ndarray:
    with np.errstate(over='ignore'):
        arr = src.astype(np.float32)
    if np.any(np.isinf(arr) & np.isfinite(src)):
        raise ParamException(f"{name} values must be within float32 range")
    return arr


def as_float_row(row, name: str = "Float vector") -> np.ndarray:
    """
    Validate a single float vector row and return it as a float32 array.

    A row is a 1-D list, tuple or numpy array of real numbers; booleans are
    rejected.
    """
    if isinstance(row, np.ndarray):
        if row.ndim != 1 or row.dtype.kind not in 'fiu':
            raise ParamException(f"{name} must be a 1-D numeric array, got {row.dtype} with shape {row.shape}")
        return _to_float32(row.astype(np.float64), name)

    if not isinstance(row, (list, tuple)):
        raise ParamException(f"{name} must be a list of floats, got {type(row).__name__}")
    for v in row:
        if isinstance(v, (bool, np.bool_)) or not isinstance(v, (Real, np.floating, np.integer)):
            raise ParamException(f"{name} must be a list of floats, got element of type {type(v).__name__}")
    return _to_float32(np.asarray(row, dtype=np.float64), name)


@dataclass(frozen=True, eq=False)
class FloatVector(TargetVector):
    """A dense float vector, held as a read-only float32 array."""
    values: Union[Sequence[float], np.ndarray]

    def __post_init__(self):
        arr = as_float_row(self.values)
        if arr.size == 0:
            raise ParamException("Float vector cannot be empty")
        arr.flags.writeable = False
        object.__setattr__(self, 'values', arr)

    @property
    def placeholder_type(self) -> PlaceholderType:
        return PlaceholderType.FLOAT_VECTOR

    @property
    def dim(self) -> int:
        return int(self.values.size)

    def to_bytes(self) -> bytes:
        # little-endian float32, regardless of host byte order
        return self.values.astype('<f4').tobytes()

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return np.array_equal(self.values, other.values)

    def __hash__(self):
        return hash(self.to_bytes())


@dataclass(frozen=True)
class BinaryVector(TargetVector):
    """A bit-packed binary vector; every byte holds eight dimensions."""
    data: Union[bytes, bytearray]

    def __post_init__(self):
        if not isinstance(self.data, (bytes, bytearray)):
            raise ParamException(f"Binary vector must be bytes, got {type(self.data).__name__}")
        if len(self.data) == 0:
            raise ParamException("Binary vector cannot be empty")
        object.__setattr__(self, 'data', bytes(self.data))

    @property
    def placeholder_type(self) -> PlaceholderType:
        return PlaceholderType.BINARY_VECTOR

    @property
    def dim(self) -> int:
        return len(self.data) * 8

    def to_bytes(self) -> bytes:
        return self.data

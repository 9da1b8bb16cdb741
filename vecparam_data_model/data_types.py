"""Enumerations shared by the wire records and the parameter builders."""

from enum import Enum, IntEnum


class DataType(IntEnum):
    """
    Data type of a collection field.

    Values follow the remote schema protocol so that they can be put on the
    wire unchanged.
    """
    UNRECOGNIZED = -1
    NONE = 0
    BOOL = 1
    INT8 = 2
    INT16 = 3
    INT32 = 4
    INT64 = 5

    FLOAT = 10
    DOUBLE = 11

    STRING = 20
    VARCHAR = 21

    BINARY_VECTOR = 100
    FLOAT_VECTOR = 101

    def is_vector(self) -> bool:
        return self in (DataType.FLOAT_VECTOR, DataType.BINARY_VECTOR)


class PlaceholderType(IntEnum):
    """Type tag of a placeholder value carrying search target vectors."""
    NONE = 0
    BINARY_VECTOR = 100
    FLOAT_VECTOR = 101


class MsgType(IntEnum):
    """Request kind marker carried in a message base."""
    UNDEFINED = 0
    INSERT = 400


class DslType(IntEnum):
    DSL = 0
    BOOL_EXPR_V1 = 1


class ScalarKind(Enum):
    """Which typed array a scalar field payload holds."""
    LONG_DATA = 1
    INT_DATA = 2
    BOOL_DATA = 3
    FLOAT_DATA = 4
    DOUBLE_DATA = 5
    STRING_DATA = 6


class MetricType(Enum):
    L2 = "L2"
    IP = "IP"
    # binary vector metrics
    HAMMING = "HAMMING"
    JACCARD = "JACCARD"
    TANIMOTO = "TANIMOTO"
    SUBSTRUCTURE = "SUBSTRUCTURE"
    SUPERSTRUCTURE = "SUPERSTRUCTURE"

    def is_float_metric(self) -> bool:
        return self in (MetricType.L2, MetricType.IP)

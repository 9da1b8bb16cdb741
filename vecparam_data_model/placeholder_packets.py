"""Search target placeholders.

A ``PlaceholderGroup`` travels inside a ``SearchRequest`` as an opaque byte
blob: the serialized ``milvus.proto.common.PlaceholderGroup`` message the
server parses. The dataclasses here are the client-side view of that message.
"""

from dataclasses import dataclass
from typing import List, Sequence

from google.protobuf.message import DecodeError
from pymilvus.grpc_gen import common_pb2 as common_types

from vecparam_data_model.constants import VECTOR_TAG
from vecparam_data_model.data_types import PlaceholderType
from vecparam_exception_model.exception import IllegalResponseException


@dataclass(frozen=True)
class PlaceholderValue:
    """
    One batch of encoded target vectors.

    Attributes:
        tag: Label the server binds the vectors to, always ``$0`` for searches.
        type: Kind of every vector in ``values``.
        values: One encoded blob per target vector.
    """
    tag: str
    type: PlaceholderType
    values: Sequence[bytes] = ()

    def __post_init__(self):
        object.__setattr__(self, 'values', tuple(bytes(v) for v in self.values))

    def to_proto(self) -> common_types.PlaceholderValue:
        return common_types.PlaceholderValue(tag=self.tag, type=int(self.type), values=list(self.values))

    @staticmethod
    def from_proto(message: common_types.PlaceholderValue) -> 'PlaceholderValue':
        try:
            pl_type = PlaceholderType(message.type)
        except ValueError as e:
            raise IllegalResponseException(f"Unknown placeholder type: {message.type}", cause=e)
        return PlaceholderValue(tag=message.tag, type=pl_type, values=list(message.values))


@dataclass(frozen=True)
class PlaceholderGroup:
    placeholders: Sequence[PlaceholderValue] = ()

    def __post_init__(self):
        object.__setattr__(self, 'placeholders', tuple(self.placeholders))

    @staticmethod
    def for_vectors(pl_type: PlaceholderType, blobs: Sequence[bytes], tag: str = VECTOR_TAG) -> 'PlaceholderGroup':
        return PlaceholderGroup(placeholders=[PlaceholderValue(tag=tag, type=pl_type, values=blobs)])

    def to_proto(self) -> common_types.PlaceholderGroup:
        return common_types.PlaceholderGroup(placeholders=[p.to_proto() for p in self.placeholders])

    def to_bytes(self) -> bytes:
        """Serializes the group as the protocol's PlaceholderGroup message."""
        return self.to_proto().SerializeToString()

    @staticmethod
    def from_bytes(data: bytes) -> 'PlaceholderGroup':
        try:
            message = common_types.PlaceholderGroup.FromString(data)
        except (DecodeError, UnicodeDecodeError) as e:
            raise IllegalResponseException("Malformed placeholder group", cause=e)
        placeholders: List[PlaceholderValue] = [PlaceholderValue.from_proto(p) for p in message.placeholders]
        return PlaceholderGroup(placeholders=placeholders)

import struct
import unittest

from pymilvus.grpc_gen import common_pb2

from vecparam_data_model.data_types import PlaceholderType
from vecparam_data_model.placeholder_packets import PlaceholderGroup, PlaceholderValue
from vecparam_exception_model.exception import IllegalResponseException


class TestPlaceholderGroup(unittest.TestCase):

    def setUp(self):
        self.blobs = [struct.pack('<2f', 1.0, 2.0), struct.pack('<2f', 3.0, 4.0)]
        self.group = PlaceholderGroup.for_vectors(PlaceholderType.FLOAT_VECTOR, self.blobs)

    def test_for_vectors_uses_default_tag(self):
        self.assertEqual(len(self.group.placeholders), 1)
        value = self.group.placeholders[0]
        self.assertEqual(value.tag, "$0")
        self.assertEqual(value.type, PlaceholderType.FLOAT_VECTOR)
        self.assertEqual(value.values, tuple(self.blobs))

    def test_bytes_are_protocol_message(self):
        message = common_pb2.PlaceholderGroup.FromString(self.group.to_bytes())
        self.assertEqual(len(message.placeholders), 1)
        self.assertEqual(message.placeholders[0].tag, "$0")
        self.assertEqual(message.placeholders[0].type, common_pb2.PlaceholderType.FloatVector)
        self.assertEqual(list(message.placeholders[0].values), self.blobs)

    def test_reads_protocol_message(self):
        message = common_pb2.PlaceholderGroup(placeholders=[
            common_pb2.PlaceholderValue(tag="$0", type=common_pb2.PlaceholderType.BinaryVector,
                                        values=[b"\x01", b"\x02"]),
        ])
        group = PlaceholderGroup.from_bytes(message.SerializeToString())
        self.assertEqual(group, PlaceholderGroup(placeholders=[
            PlaceholderValue(tag="$0", type=PlaceholderType.BINARY_VECTOR, values=[b"\x01", b"\x02"]),
        ]))

    def test_bytes_round_trip(self):
        self.assertEqual(PlaceholderGroup.from_bytes(self.group.to_bytes()), self.group)

    def test_empty_group(self):
        group = PlaceholderGroup()
        self.assertEqual(PlaceholderGroup.from_bytes(group.to_bytes()), group)

    def test_truncated_buffer(self):
        # field 1, length 5, but only two bytes follow
        with self.assertRaises(IllegalResponseException):
            PlaceholderGroup.from_bytes(b"\x0a\x05ab")

    def test_tag_not_utf8(self):
        value = b"\x0a\x02\xff\xfe"
        data = b"\x0a" + bytes([len(value)]) + value
        with self.assertRaises(IllegalResponseException):
            PlaceholderGroup.from_bytes(data)

    def test_unknown_placeholder_type(self):
        # 102 is a half-precision vector, which this client never sends
        message = common_pb2.PlaceholderGroup(placeholders=[
            common_pb2.PlaceholderValue(tag="$0", type=102, values=[b"\x01"]),
        ])
        with self.assertRaises(IllegalResponseException):
            PlaceholderGroup.from_bytes(message.SerializeToString())


if __name__ == '__main__':
    unittest.main()

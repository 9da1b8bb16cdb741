import os
import unittest
from unittest.mock import patch

from vecparam_data_model.data_types import DataType, MetricType
from vecparam_param import search_param
from vecparam_param.config import ParamSettings
from vecparam_param.insert_param import Field, InsertParam


class TestParamSettings(unittest.TestCase):

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            s = ParamSettings()
        self.assertEqual(s.default_partition_name, "_default")
        self.assertEqual(s.default_metric_type, "L2")
        self.assertEqual(s.default_round_decimal, -1)
        self.assertEqual(s.default_search_params, "{}")
        self.assertEqual(s.default_guarantee_timestamp, 1)

    def test_env_override(self):
        env = {
            "VECPARAM_DEFAULT_PARTITION_NAME": "hot",
            "VECPARAM_DEFAULT_METRIC_TYPE": "IP",
            "VECPARAM_DEFAULT_ROUND_DECIMAL": "3",
            "VECPARAM_DEFAULT_GUARANTEE_TIMESTAMP": "0",
        }
        with patch.dict(os.environ, env, clear=True):
            s = ParamSettings()
        self.assertEqual(s.default_partition_name, "hot")
        self.assertEqual(s.default_metric_type, "IP")
        self.assertEqual(s.default_round_decimal, 3)
        self.assertEqual(s.default_guarantee_timestamp, 0)

    def test_builders_read_settings(self):
        with patch.object(search_param.settings, "default_metric_type", "IP"):
            param = (search_param.SearchParam.new_builder()
                     .with_collection_name("c").with_vector_field_name("vec").with_top_k(1)
                     .with_float_vectors([[1.0]]).build())
        self.assertEqual(param.metric_type, MetricType.IP)

        with patch.object(search_param.settings, "default_partition_name", "hot"):
            param = InsertParam(collection_name="c", fields=[Field("id", DataType.INT64, [1])])
        self.assertEqual(param.partition_name, "hot")


if __name__ == '__main__':
    unittest.main()

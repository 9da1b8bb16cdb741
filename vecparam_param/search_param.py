from dataclasses import dataclass, field
from typing import List, Sequence, Union

from vecparam_data_model.data_types import MetricType
from vecparam_data_model.vector_values import BinaryVector, FloatVector, TargetVector
from vecparam_exception_model.exception import ParamException
from vecparam_param.config import settings
from vecparam_param.param_builder import ParamBuilder
from vecparam_param.param_checks import check_null_empty_string, check_timestamp

MIN_ROUND_DECIMAL = -1
MAX_ROUND_DECIMAL = 6


def _to_metric_type(value: Union[MetricType, str]) -> MetricType:
    if isinstance(value, MetricType):
        return value
    try:
        return MetricType(str(value).upper())
    except ValueError:
        raise ParamException(f"Metric type is illegal: {value}", param_name="Metric type")


@dataclass(frozen=True)
class SearchParam:
    """
    Parameters for the ``search`` interface.

    Attributes:
        collection_name: Collection to search.
        vector_field_name: Vector field the target vectors are compared against.
        top_k: Number of most similar results per target vector.
        vectors: Target vectors, all ``FloatVector`` or all ``BinaryVector``, of one dimension.
        metric_type: Distance metric; L2/IP for float vectors, the others for binary vectors.
        partition_names: Partitions to restrict the search to, empty for all.
        out_fields: Scalar fields returned with each hit.
        expr: Boolean filter expression, empty for none.
        round_decimal: Decimal places distances are rounded to, -1 for no rounding.
        params: Extra index search parameters as a JSON string.
        travel_timestamp: Search the data as of this timestamp, 0 for latest.
        guarantee_timestamp: Wait until the server has applied writes up to this timestamp.
    """
    collection_name: str
    vector_field_name: str
    top_k: int
    vectors: Sequence[TargetVector]
    metric_type: Union[MetricType, str] = field(default_factory=lambda: settings.default_metric_type)
    partition_names: Sequence[str] = ()
    out_fields: Sequence[str] = ()
    expr: str = ""
    round_decimal: int = field(default_factory=lambda: settings.default_round_decimal)
    params: str = field(default_factory=lambda: settings.default_search_params)
    travel_timestamp: int = 0
    guarantee_timestamp: int = field(default_factory=lambda: settings.default_guarantee_timestamp)

    def __post_init__(self):
        check_null_empty_string(self.collection_name, "Collection name")
        check_null_empty_string(self.vector_field_name, "Target field name")
        for name in self.partition_names:
            check_null_empty_string(name, "Partition name")
        for name in self.out_fields:
            check_null_empty_string(name, "Output field name")

        if not isinstance(self.top_k, int) or isinstance(self.top_k, bool) or self.top_k <= 0:
            raise ParamException(f"TopK value is illegal: {self.top_k}", param_name="TopK")

        metric_type = _to_metric_type(self.metric_type)

        if not isinstance(self.round_decimal, int) or not MIN_ROUND_DECIMAL <= self.round_decimal <= MAX_ROUND_DECIMAL:
            raise ParamException(
                f"round_decimal can not be larger than {MAX_ROUND_DECIMAL} or less than {MIN_ROUND_DECIMAL}",
                param_name="round_decimal")

        check_timestamp(self.travel_timestamp, "travel timestamp")
        check_timestamp(self.guarantee_timestamp, "guarantee timestamp")

        self._check_vectors(metric_type)

        object.__setattr__(self, 'metric_type', metric_type)
        object.__setattr__(self, 'vectors', tuple(self.vectors))
        object.__setattr__(self, 'partition_names', tuple(self.partition_names))
        object.__setattr__(self, 'out_fields', tuple(self.out_fields))
        object.__setattr__(self, 'expr', self.expr or "")
        object.__setattr__(self, 'params', self.params or "")

    def _check_vectors(self, metric_type: MetricType) -> None:
        if not self.vectors:
            raise ParamException("Target vectors can not be empty", param_name="Vectors")

        for vector in self.vectors:
            if not isinstance(vector, TargetVector):
                raise ParamException(
                    f"Search target vector type is illegal(Only allow FloatVector or BinaryVector), "
                    f"got {type(vector).__name__}", param_name="Vectors")

        first = self.vectors[0]
        for vector in self.vectors:
            if vector.placeholder_type != first.placeholder_type:
                raise ParamException("Target vectors must be all float vectors or all binary vectors",
                                     param_name="Vectors")
            if vector.dim != first.dim:
                raise ParamException("Target vector dimension must be equal", param_name="Vectors")

        if isinstance(first, FloatVector) and not metric_type.is_float_metric():
            raise ParamException(f"Target vector is float but metric type is incorrect: {metric_type.value}",
                                 param_name="Metric type")
        if isinstance(first, BinaryVector) and metric_type.is_float_metric():
            raise ParamException(f"Target vector is binary but metric type is incorrect: {metric_type.value}",
                                 param_name="Metric type")

    @staticmethod
    def new_builder() -> 'SearchParamBuilder':
        return SearchParamBuilder()


class SearchParamBuilder(ParamBuilder):
    param_cls = SearchParam

    def with_collection_name(self, collection_name: str) -> 'SearchParamBuilder':
        return self._set('collection_name', collection_name)

    def with_vector_field_name(self, vector_field_name: str) -> 'SearchParamBuilder':
        return self._set('vector_field_name', vector_field_name)

    def with_top_k(self, top_k: int) -> 'SearchParamBuilder':
        return self._set('top_k', top_k)

    def with_metric_type(self, metric_type: Union[MetricType, str]) -> 'SearchParamBuilder':
        return self._set('metric_type', metric_type)

    def with_vectors(self, vectors: List[TargetVector]) -> 'SearchParamBuilder':
        return self._set('vectors', list(vectors))

    def with_float_vectors(self, vectors: List[Sequence[float]]) -> 'SearchParamBuilder':
        return self._set('vectors', [FloatVector(v) for v in vectors])

    def with_binary_vectors(self, vectors: List[bytes]) -> 'SearchParamBuilder':
        return self._set('vectors', [BinaryVector(v) for v in vectors])

    def with_partition_names(self, partition_names: List[str]) -> 'SearchParamBuilder':
        return self._set('partition_names', list(partition_names))

    def add_partition_name(self, partition_name: str) -> 'SearchParamBuilder':
        self._values.setdefault('partition_names', []).append(partition_name)
        return self

    def with_out_fields(self, out_fields: List[str]) -> 'SearchParamBuilder':
        return self._set('out_fields', list(out_fields))

    def add_out_field(self, field_name: str) -> 'SearchParamBuilder':
        self._values.setdefault('out_fields', []).append(field_name)
        return self

    def with_expr(self, expr: str) -> 'SearchParamBuilder':
        return self._set('expr', expr)

    def with_round_decimal(self, round_decimal: int) -> 'SearchParamBuilder':
        return self._set('round_decimal', round_decimal)

    def with_params(self, params: str) -> 'SearchParamBuilder':
        return self._set('params', params)

    def with_travel_timestamp(self, ts: int) -> 'SearchParamBuilder':
        return self._set('travel_timestamp', ts)

    def with_guarantee_timestamp(self, ts: int) -> 'SearchParamBuilder':
        return self._set('guarantee_timestamp', ts)

    def build(self) -> SearchParam:
        check_null_empty_string(self._values.get('collection_name'), "Collection name")
        check_null_empty_string(self._values.get('vector_field_name'), "Target field name")
        if 'top_k' not in self._values:
            raise ParamException("TopK value is illegal: None", param_name="TopK")
        self._values.setdefault('vectors', [])
        return super().build()

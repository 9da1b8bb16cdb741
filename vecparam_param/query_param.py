from dataclasses import dataclass, field
from typing import List, Sequence

from vecparam_param.config import settings
from vecparam_param.param_builder import ParamBuilder
from vecparam_param.param_checks import check_null_empty_string, check_timestamp


@dataclass(frozen=True)
class QueryParam:
    """
    Parameters for the ``query`` interface: retrieve entities matching a boolean expression.

    Attributes:
        collection_name: Collection to query.
        expr: Boolean expression selecting the entities, e.g. ``"id in [1, 2]"``.
        partition_names: Partitions to restrict the query to, empty for all.
        out_fields: Fields returned for each entity.
        travel_timestamp: Query the data as of this timestamp, 0 for latest.
        guarantee_timestamp: Wait until the server has applied writes up to this timestamp.
    """
    collection_name: str
    expr: str
    partition_names: Sequence[str] = ()
    out_fields: Sequence[str] = ()
    travel_timestamp: int = 0
    guarantee_timestamp: int = field(default_factory=lambda: settings.default_guarantee_timestamp)

    def __post_init__(self):
        check_null_empty_string(self.collection_name, "Collection name")
        check_null_empty_string(self.expr, "Expression")
        for name in self.partition_names:
            check_null_empty_string(name, "Partition name")
        for name in self.out_fields:
            check_null_empty_string(name, "Output field name")
        check_timestamp(self.travel_timestamp, "travel timestamp")
        check_timestamp(self.guarantee_timestamp, "guarantee timestamp")

        object.__setattr__(self, 'partition_names', tuple(self.partition_names))
        object.__setattr__(self, 'out_fields', tuple(self.out_fields))

    @staticmethod
    def new_builder() -> 'QueryParamBuilder':
        return QueryParamBuilder()


class QueryParamBuilder(ParamBuilder):
    param_cls = QueryParam

    def with_collection_name(self, collection_name: str) -> 'QueryParamBuilder':
        return self._set('collection_name', collection_name)

    def with_expr(self, expr: str) -> 'QueryParamBuilder':
        return self._set('expr', expr)

    def with_partition_names(self, partition_names: List[str]) -> 'QueryParamBuilder':
        return self._set('partition_names', list(partition_names))

    def add_partition_name(self, partition_name: str) -> 'QueryParamBuilder':
        self._values.setdefault('partition_names', []).append(partition_name)
        return self

    def with_out_fields(self, out_fields: List[str]) -> 'QueryParamBuilder':
        return self._set('out_fields', list(out_fields))

    def add_out_field(self, field_name: str) -> 'QueryParamBuilder':
        self._values.setdefault('out_fields', []).append(field_name)
        return self

    def with_travel_timestamp(self, ts: int) -> 'QueryParamBuilder':
        return self._set('travel_timestamp', ts)

    def with_guarantee_timestamp(self, ts: int) -> 'QueryParamBuilder':
        return self._set('guarantee_timestamp', ts)

    def build(self) -> QueryParam:
        check_null_empty_string(self._values.get('collection_name'), "Collection name")
        check_null_empty_string(self._values.get('expr'), "Expression")
        return super().build()

from dataclasses import dataclass

from vecparam_param.param_builder import ParamBuilder
from vecparam_param.param_checks import check_null_empty_string


@dataclass(frozen=True)
class GetIndexBuildProgressParam:
    """Parameters for the ``getIndexBuildProgress`` interface."""
    collection_name: str

    def __post_init__(self):
        check_null_empty_string(self.collection_name, "Collection name")

    @staticmethod
    def new_builder() -> 'GetIndexBuildProgressParamBuilder':
        return GetIndexBuildProgressParamBuilder()


class GetIndexBuildProgressParamBuilder(ParamBuilder):
    param_cls = GetIndexBuildProgressParam

    def with_collection_name(self, collection_name: str) -> 'GetIndexBuildProgressParamBuilder':
        return self._set('collection_name', collection_name)

    def build(self) -> GetIndexBuildProgressParam:
        check_null_empty_string(self._values.get('collection_name'), "Collection name")
        return super().build()

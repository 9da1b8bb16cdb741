import logging
from typing import Dict, List, Sequence

from vecparam_data_model.constants import METRIC_TYPE, PARAMS, ROUND_DECIMAL, TOP_K, VECTOR_FIELD
from vecparam_data_model.data_types import DslType, MsgType
from vecparam_data_model.placeholder_packets import PlaceholderGroup
from vecparam_data_model.rpc_packets import (
    CollectionSchema, FieldData, FieldSchema, GetIndexBuildProgressRequest, InsertRequest, KeyValuePair, MsgBase,
    QueryRequest, SearchRequest,
)
from vecparam_exception_model.exception import ParamException
from vecparam_param.field_data_marshaller import gen_field_data
from vecparam_param.field_type import FieldType
from vecparam_param.get_index_build_progress_param import GetIndexBuildProgressParam
from vecparam_param.insert_param import Field, InsertParam
from vecparam_param.param_checks import check_null_empty_string
from vecparam_param.query_param import QueryParam
from vecparam_param.search_param import SearchParam

logger = logging.getLogger(__name__)


class ParamUtils:
    """Converts validated client parameters into wire request records, and schema records back."""

    @staticmethod
    def check_null_empty_string(target: str, name: str) -> None:
        check_null_empty_string(target, name)

    @staticmethod
    def convert_insert_param(insert_param: InsertParam, field_types: Sequence[FieldType]) -> InsertRequest:
        """
        Build an InsertRequest whose columns follow the schema declaration order.

        Args:
            insert_param: Validated insert parameters.
            field_types: Collection schema, in declaration order.

        Raises:
            ParamException: If a schema field is missing, an auto-generated field is
                            supplied, or a field's data type differs from the schema.
        """
        by_name: Dict[str, Field] = {f.name: f for f in insert_param.fields}
        schema_names = {ft.name for ft in field_types}

        fields_data: List[FieldData] = []
        for field_type in field_types:
            supplied = by_name.get(field_type.name)
            if supplied is None:
                if field_type.auto_id:
                    continue
                raise ParamException(f"The field: {field_type.name} is not provided.",
                                     field_name=field_type.name)
            if field_type.auto_id:
                raise ParamException(f"The primary key: {field_type.name} is auto generated, no need to input.",
                                     field_name=field_type.name)
            if field_type.data_type != supplied.data_type:
                raise ParamException(f"The field: {field_type.name} data type doesn't match the collection schema.",
                                     field_name=field_type.name)
            fields_data.append(gen_field_data(supplied.name, supplied.data_type, supplied.values))

        ignored = [name for name in by_name if name not in schema_names]
        if ignored:
            logger.warning(f"Fields {ignored} are not in the schema of collection "
                           f"{insert_param.collection_name} and were ignored")

        request = InsertRequest(
            base=MsgBase(msg_type=MsgType.INSERT),
            collection_name=insert_param.collection_name,
            partition_name=insert_param.partition_name,
            num_rows=insert_param.row_count,
            fields_data=fields_data,
            db_name=""
        )
        logger.debug(f"Converted insert of {request.num_rows} rows into {len(fields_data)} columns "
                     f"for collection {request.collection_name}")
        return request

    @staticmethod
    def convert_search_param(search_param: SearchParam) -> SearchRequest:
        """
        Build a SearchRequest.

        The target vectors are packed into a single ``$0`` placeholder: float
        vectors as little-endian float32 bytes, binary vectors as-is.
        """
        vectors = search_param.vectors
        pl_type = vectors[0].placeholder_type
        placeholder_group = PlaceholderGroup.for_vectors(pl_type, [v.to_bytes() for v in vectors]).to_bytes()

        search_params = [
            KeyValuePair(key=VECTOR_FIELD, value=search_param.vector_field_name),
            KeyValuePair(key=TOP_K, value=str(search_param.top_k)),
            KeyValuePair(key=METRIC_TYPE, value=search_param.metric_type.value),
            KeyValuePair(key=ROUND_DECIMAL, value=str(search_param.round_decimal)),
        ]
        if search_param.params:
            search_params.append(KeyValuePair(key=PARAMS, value=search_param.params))

        request = SearchRequest(
            collection_name=search_param.collection_name,
            placeholder_group=placeholder_group,
            dsl_type=DslType.BOOL_EXPR_V1,
            dsl=search_param.expr if search_param.expr else "",
            partition_names=search_param.partition_names,
            output_fields=search_param.out_fields,
            search_params=search_params,
            travel_timestamp=search_param.travel_timestamp,
            guarantee_timestamp=search_param.guarantee_timestamp,
            db_name=""
        )
        logger.debug(f"Converted search of {len(vectors)} {pl_type.name} targets "
                     f"on {search_param.collection_name}.{search_param.vector_field_name}")
        return request

    @staticmethod
    def convert_query_param(query_param: QueryParam) -> QueryRequest:
        request = QueryRequest(
            collection_name=query_param.collection_name,
            expr=query_param.expr,
            partition_names=query_param.partition_names,
            output_fields=query_param.out_fields,
            travel_timestamp=query_param.travel_timestamp,
            guarantee_timestamp=query_param.guarantee_timestamp,
            db_name=""
        )
        logger.debug(f"Converted query on {request.collection_name}: {request.expr}")
        return request

    @staticmethod
    def convert_get_index_build_progress_param(param: GetIndexBuildProgressParam) -> GetIndexBuildProgressRequest:
        return GetIndexBuildProgressRequest(collection_name=param.collection_name, db_name="")

    @staticmethod
    def convert_to_field_type(field_schema: FieldSchema) -> FieldType:
        """Convert a wire FieldSchema into a FieldType"""
        return FieldType(
            name=field_schema.name,
            data_type=field_schema.data_type,
            description=field_schema.description,
            primary_key=field_schema.is_primary_key,
            auto_id=field_schema.auto_id,
            type_params={kv.key: kv.value for kv in field_schema.type_params}
        )

    @staticmethod
    def convert_from_field_type(field_type: FieldType) -> FieldSchema:
        """Convert a FieldType into a wire FieldSchema"""
        return FieldSchema(
            name=field_type.name,
            data_type=field_type.data_type,
            description=field_type.description,
            is_primary_key=field_type.primary_key,
            auto_id=field_type.auto_id,
            type_params=[KeyValuePair(key=k, value=v) for k, v in field_type.type_params.items()]
        )

    @staticmethod
    def convert_collection_schema(schema: CollectionSchema) -> List[FieldType]:
        """Field types of a described collection, in declaration order."""
        field_types = [ParamUtils.convert_to_field_type(fs) for fs in schema.fields]
        logger.debug(f"Collection {schema.name} has {len(field_types)} fields")
        return field_types

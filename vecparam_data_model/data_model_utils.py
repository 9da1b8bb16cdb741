import base64
import binascii
from enum import Enum
from typing import Optional, Type, TypeVar

import numpy as np

from vecparam_data_model.data_models import (
    FieldDataModel, FieldSchemaModel, InsertRequestModel, KeyValuePairModel, NumpyArray, QueryRequestModel,
    ScalarFieldModel, SearchRequestModel, VectorFieldModel,
)
from vecparam_data_model.data_types import DataType, DslType, MsgType, ScalarKind
from vecparam_data_model.rpc_packets import (
    FieldData, FieldSchema, InsertRequest, KeyValuePair, MsgBase, QueryRequest, ScalarField, SearchRequest,
    VectorField,
)
from vecparam_exception_model.exception import IllegalResponseException

E = TypeVar('E', bound=Enum)


def _enum_by_name(enum_cls: Type[E], name: str) -> E:
    try:
        return enum_cls[name]
    except KeyError as e:
        raise IllegalResponseException(f"Unknown {enum_cls.__name__}: {name}", cause=e)


def _b64decode(value: str, field_name: Optional[str] = None) -> bytes:
    try:
        return base64.b64decode(value.encode('ascii'), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise IllegalResponseException("Malformed base64 payload", field_name=field_name, cause=e)


def _to_numpy(array: NumpyArray, field_name: str) -> np.ndarray:
    try:
        return array.to_numpy()
    except (binascii.Error, TypeError, ValueError) as e:
        raise IllegalResponseException("Malformed numpy payload", field_name=field_name, cause=e)


class DataModelUtils:
    @staticmethod
    def convert_from_field_data(field_data: FieldData) -> FieldDataModel:
        """Convert FieldData to an API model"""
        scalars = None
        vectors = None
        if field_data.scalars is not None:
            if field_data.scalars.kind == ScalarKind.STRING_DATA:
                scalars = ScalarFieldModel(kind=field_data.scalars.kind.name, strings=list(field_data.scalars.data))
            else:
                scalars = ScalarFieldModel(kind=field_data.scalars.kind.name,
                                           numeric=NumpyArray.from_numpy(field_data.scalars.data))
        else:
            vf = field_data.vectors
            if vf.is_float():
                vectors = VectorFieldModel(dim=vf.dim, float_vector=NumpyArray.from_numpy(vf.float_vector))
            else:
                vectors = VectorFieldModel(dim=vf.dim,
                                           binary_vector=base64.b64encode(vf.binary_vector).decode('ascii'))

        return FieldDataModel(field_name=field_data.field_name, type=field_data.type.name,
                              scalars=scalars, vectors=vectors)

    @staticmethod
    def convert_to_field_data(model: FieldDataModel) -> FieldData:
        """Convert API model to FieldData"""
        scalars = None
        vectors = None
        if model.scalars is not None:
            kind = _enum_by_name(ScalarKind, model.scalars.kind)
            if kind == ScalarKind.STRING_DATA:
                scalars = ScalarField(kind=kind, data=model.scalars.strings or [])
            elif model.scalars.numeric is None:
                raise IllegalResponseException("Numeric scalar field carries no data", field_name=model.field_name)
            else:
                scalars = ScalarField(kind=kind, data=_to_numpy(model.scalars.numeric, model.field_name))
        elif model.vectors is not None:
            if model.vectors.float_vector is not None:
                vectors = VectorField(dim=model.vectors.dim,
                                      float_vector=_to_numpy(model.vectors.float_vector, model.field_name))
            elif model.vectors.binary_vector is not None:
                vectors = VectorField(dim=model.vectors.dim,
                                      binary_vector=_b64decode(model.vectors.binary_vector, model.field_name))
            else:
                raise IllegalResponseException("Vector field carries no data", field_name=model.field_name)
        else:
            raise IllegalResponseException("Field data carries no payload", field_name=model.field_name)

        return FieldData(field_name=model.field_name, type=_enum_by_name(DataType, model.type),
                         scalars=scalars, vectors=vectors)

    @staticmethod
    def convert_from_field_schema(schema: FieldSchema) -> FieldSchemaModel:
        return FieldSchemaModel(
            name=schema.name,
            data_type=schema.data_type.name,
            description=schema.description,
            is_primary_key=schema.is_primary_key,
            auto_id=schema.auto_id,
            type_params=[KeyValuePairModel(key=kv.key, value=kv.value) for kv in schema.type_params]
        )

    @staticmethod
    def convert_to_field_schema(model: FieldSchemaModel) -> FieldSchema:
        return FieldSchema(
            name=model.name,
            data_type=_enum_by_name(DataType, model.data_type),
            description=model.description,
            is_primary_key=model.is_primary_key,
            auto_id=model.auto_id,
            type_params=[KeyValuePair(key=kv.key, value=kv.value) for kv in model.type_params]
        )

    @staticmethod
    def convert_from_insert_request(request: InsertRequest) -> InsertRequestModel:
        """Convert InsertRequest to an API model"""
        return InsertRequestModel(
            msg_type=request.base.msg_type.name,
            collection_name=request.collection_name,
            partition_name=request.partition_name,
            num_rows=request.num_rows,
            fields_data=[DataModelUtils.convert_from_field_data(fd) for fd in request.fields_data],
            db_name=request.db_name
        )

    @staticmethod
    def convert_to_insert_request(model: InsertRequestModel) -> InsertRequest:
        """Convert API model to InsertRequest"""
        return InsertRequest(
            base=MsgBase(msg_type=_enum_by_name(MsgType, model.msg_type)),
            collection_name=model.collection_name,
            partition_name=model.partition_name,
            num_rows=model.num_rows,
            fields_data=[DataModelUtils.convert_to_field_data(fd) for fd in model.fields_data],
            db_name=model.db_name
        )

    @staticmethod
    def convert_from_search_request(request: SearchRequest) -> SearchRequestModel:
        """Convert SearchRequest to an API model, the placeholder group stays opaque"""
        return SearchRequestModel(
            collection_name=request.collection_name,
            placeholder_group=base64.b64encode(request.placeholder_group).decode('ascii'),
            dsl_type=request.dsl_type.name,
            dsl=request.dsl,
            partition_names=list(request.partition_names),
            output_fields=list(request.output_fields),
            search_params=[KeyValuePairModel(key=kv.key, value=kv.value) for kv in request.search_params],
            travel_timestamp=request.travel_timestamp,
            guarantee_timestamp=request.guarantee_timestamp,
            db_name=request.db_name
        )

    @staticmethod
    def convert_to_search_request(model: SearchRequestModel) -> SearchRequest:
        """Convert API model to SearchRequest"""
        return SearchRequest(
            collection_name=model.collection_name,
            placeholder_group=_b64decode(model.placeholder_group),
            dsl_type=_enum_by_name(DslType, model.dsl_type),
            dsl=model.dsl,
            partition_names=model.partition_names,
            output_fields=model.output_fields,
            search_params=[KeyValuePair(key=kv.key, value=kv.value) for kv in model.search_params],
            travel_timestamp=model.travel_timestamp,
            guarantee_timestamp=model.guarantee_timestamp,
            db_name=model.db_name
        )

    @staticmethod
    def convert_from_query_request(request: QueryRequest) -> QueryRequestModel:
        return QueryRequestModel(
            collection_name=request.collection_name,
            expr=request.expr,
            partition_names=list(request.partition_names),
            output_fields=list(request.output_fields),
            travel_timestamp=request.travel_timestamp,
            guarantee_timestamp=request.guarantee_timestamp,
            db_name=request.db_name
        )

    @staticmethod
    def convert_to_query_request(model: QueryRequestModel) -> QueryRequest:
        return QueryRequest(
            collection_name=model.collection_name,
            expr=model.expr,
            partition_names=model.partition_names,
            output_fields=model.output_fields,
            travel_timestamp=model.travel_timestamp,
            guarantee_timestamp=model.guarantee_timestamp,
            db_name=model.db_name
        )

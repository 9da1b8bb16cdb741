from dataclasses import dataclass, field
from typing import Any, List, Sequence

from vecparam_data_model.data_types import DataType
from vecparam_exception_model.exception import ParamException
from vecparam_param.config import settings
from vecparam_param.field_data_marshaller import validate_field_values
from vecparam_param.param_builder import ParamBuilder
from vecparam_param.param_checks import check_null_empty_string


@dataclass(frozen=True, eq=False)
class Field:
    """
    One column of insert data.

    The data type tags the values: they are checked against it when the
    field is constructed, so a Field never holds values of the wrong type.

    Attributes:
        name: Name of the collection field.
        data_type: Declared type of the values.
        values: One entry per row; vector rows are lists of floats (FLOAT_VECTOR)
                or bytes (BINARY_VECTOR) of equal length.
    """
    name: str
    data_type: DataType
    values: Sequence[Any]

    def __post_init__(self):
        check_null_empty_string(self.name, "Field name")
        validate_field_values(self.name, self.data_type, self.values)
        if len(self.values) == 0:
            raise ParamException("Field value cannot be empty", field_name=self.name)
        object.__setattr__(self, 'values', tuple(self.values))

    @property
    def row_count(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class InsertParam:
    """
    Parameters for the ``insert`` interface.

    Attributes:
        collection_name: Target collection.
        fields: Columns to insert, all with the same number of rows.
        partition_name: Target partition, ``_default`` unless configured otherwise.
        row_count: Number of rows, derived from ``fields``.
    """
    collection_name: str
    fields: Sequence[Field]
    partition_name: str = field(default_factory=lambda: settings.default_partition_name)

    row_count: int = field(init=False)

    def __post_init__(self):
        check_null_empty_string(self.collection_name, "Collection name")
        check_null_empty_string(self.partition_name, "Partition name")

        if not self.fields:
            raise ParamException("Fields cannot be empty", param_name="Fields")

        names = set()
        for f in self.fields:
            if not isinstance(f, Field):
                raise ParamException(f"Field must be an InsertParam Field, got {type(f).__name__}",
                                     param_name="Fields")
            if f.name in names:
                raise ParamException(f"Duplicated field name: {f.name}", field_name=f.name)
            names.add(f.name)

        count = self.fields[0].row_count
        for f in self.fields:
            if f.row_count != count:
                raise ParamException("Row count of fields must be equal", field_name=f.name)

        object.__setattr__(self, 'fields', tuple(self.fields))
        object.__setattr__(self, 'row_count', count)

    @staticmethod
    def new_builder() -> 'InsertParamBuilder':
        return InsertParamBuilder()


class InsertParamBuilder(ParamBuilder):
    param_cls = InsertParam

    def with_collection_name(self, collection_name: str) -> 'InsertParamBuilder':
        return self._set('collection_name', collection_name)

    def with_partition_name(self, partition_name: str) -> 'InsertParamBuilder':
        return self._set('partition_name', partition_name)

    def with_fields(self, fields: List[Field]) -> 'InsertParamBuilder':
        return self._set('fields', list(fields))

    def add_field(self, name: str, data_type: DataType, values: Sequence[Any]) -> 'InsertParamBuilder':
        self._values.setdefault('fields', []).append(Field(name=name, data_type=data_type, values=values))
        return self

    def build(self) -> InsertParam:
        check_null_empty_string(self._values.get('collection_name'), "Collection name")
        self._values.setdefault('fields', [])
        return super().build()

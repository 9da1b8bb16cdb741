from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from vecparam_data_model.constants import VECTOR_DIM
from vecparam_data_model.data_types import DataType
from vecparam_exception_model.exception import ParamException
from vecparam_param.param_builder import ParamBuilder
from vecparam_param.param_checks import check_null_empty_string


@dataclass(frozen=True)
class FieldType:
    """
    Client-side schema of one collection field.

    Attributes:
        name: Field name, unique within a collection schema.
        data_type: Declared data type.
        description: Free-form description.
        primary_key: Whether the field is the primary key.
        auto_id: Whether the server generates the field values; such fields
                 must not be supplied on insert.
        type_params: Read-only string key/value parameters, e.g. ``{"dim": "128"}``.
    """
    name: str
    data_type: DataType
    description: str = ""
    primary_key: bool = False
    auto_id: bool = False
    type_params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        check_null_empty_string(self.name, "Field name")
        if not isinstance(self.data_type, DataType) or self.data_type in (DataType.NONE, DataType.UNRECOGNIZED):
            raise ParamException(f"Field data type is illegal: {self.data_type}", field_name=self.name)

        params = {str(k): str(v) for k, v in (self.type_params or {}).items()}
        if self.data_type.is_vector():
            if VECTOR_DIM not in params:
                raise ParamException("Vector field dimension must be specified", field_name=self.name)
            try:
                dim = int(params[VECTOR_DIM])
            except ValueError:
                raise ParamException(f"Vector field dimension must be an integer, got {params[VECTOR_DIM]}",
                                     field_name=self.name)
            if dim <= 0:
                raise ParamException("Vector field dimension must be larger than zero", field_name=self.name)

        object.__setattr__(self, 'type_params', MappingProxyType(params))

    def __hash__(self):
        return hash((self.name, self.data_type, self.description, self.primary_key, self.auto_id,
                     frozenset(self.type_params.items())))

    def get_dimension(self) -> Optional[int]:
        dim = self.type_params.get(VECTOR_DIM)
        return int(dim) if dim is not None else None

    @staticmethod
    def new_builder() -> 'FieldTypeBuilder':
        return FieldTypeBuilder()


class FieldTypeBuilder(ParamBuilder):
    param_cls = FieldType

    def with_name(self, name: str) -> 'FieldTypeBuilder':
        return self._set('name', name)

    def with_description(self, description: str) -> 'FieldTypeBuilder':
        return self._set('description', description)

    def with_data_type(self, data_type: DataType) -> 'FieldTypeBuilder':
        return self._set('data_type', data_type)

    def with_primary_key(self, primary_key: bool) -> 'FieldTypeBuilder':
        return self._set('primary_key', primary_key)

    def with_auto_id(self, auto_id: bool) -> 'FieldTypeBuilder':
        return self._set('auto_id', auto_id)

    def with_type_params(self, type_params: Mapping[str, str]) -> 'FieldTypeBuilder':
        return self._set('type_params', dict(type_params))

    def add_type_param(self, key: str, value: str) -> 'FieldTypeBuilder':
        self._values.setdefault('type_params', {})[key] = value
        return self

    def with_dimension(self, dimension: int) -> 'FieldTypeBuilder':
        return self.add_type_param(VECTOR_DIM, str(dimension))

    def build(self) -> FieldType:
        check_null_empty_string(self._values.get('name'), "Field name")
        if 'data_type' not in self._values:
            raise ParamException("Field data type must be specified", field_name=self._values['name'])
        return super().build()

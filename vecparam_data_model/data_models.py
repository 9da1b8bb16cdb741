import base64
from typing import List, Optional

import numpy as np
from pydantic import BaseModel, Field


class NumpyArray(BaseModel):
    """Model for serialized numpy array"""
    b64: str = Field(..., description="Base64 encoded array data")
    dtype: str = Field(..., description="NumPy dtype as string")
    shape: List[int] = Field(..., description="Array shape")

    def to_numpy(self) -> np.ndarray:
        """Convert to numpy array"""
        raw = base64.b64decode(self.b64.encode('ascii'))
        dtype = np.dtype(self.dtype)
        return np.frombuffer(raw, dtype=dtype).reshape(self.shape)

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> 'NumpyArray':
        """Create from numpy array"""
        return cls(
            b64=base64.b64encode(array.tobytes()).decode('ascii'),
            dtype=str(array.dtype),
            shape=list(array.shape)
        )


class KeyValuePairModel(BaseModel):
    key: str
    value: str


class ScalarFieldModel(BaseModel):
    """Model for a scalar column payload; numeric kinds use ``numeric``, STRING_DATA uses ``strings``"""
    kind: str = Field(..., description="Scalar kind name, e.g. LONG_DATA")
    numeric: Optional[NumpyArray] = Field(None, description="Numeric column data")
    strings: Optional[List[str]] = Field(None, description="String column data")


class VectorFieldModel(BaseModel):
    dim: int = Field(..., description="Vector dimension, in bits for binary vectors")
    float_vector: Optional[NumpyArray] = Field(None, description="Flat row-major float32 data")
    binary_vector: Optional[str] = Field(None, description="Base64 encoded packed binary data")


class FieldDataModel(BaseModel):
    field_name: str
    type: str = Field(..., description="Data type name, e.g. FLOAT_VECTOR")
    scalars: Optional[ScalarFieldModel] = None
    vectors: Optional[VectorFieldModel] = None


class FieldSchemaModel(BaseModel):
    name: str
    data_type: str = Field(..., description="Data type name, e.g. INT64")
    description: str = ""
    is_primary_key: bool = False
    auto_id: bool = False
    type_params: List[KeyValuePairModel] = Field(default_factory=list)


class InsertRequestModel(BaseModel):
    """Model for InsertRequest API representation"""
    msg_type: str = Field(..., description="Request kind marker")
    collection_name: str
    partition_name: str
    num_rows: int
    fields_data: List[FieldDataModel] = Field(default_factory=list)
    db_name: str = ""


class SearchRequestModel(BaseModel):
    """Model for SearchRequest API representation"""
    collection_name: str
    placeholder_group: str = Field(..., description="Base64 encoded placeholder group")
    dsl_type: str = "BOOL_EXPR_V1"
    dsl: str = ""
    partition_names: List[str] = Field(default_factory=list)
    output_fields: List[str] = Field(default_factory=list)
    search_params: List[KeyValuePairModel] = Field(default_factory=list)
    travel_timestamp: int = 0
    guarantee_timestamp: int = 0
    db_name: str = ""


class QueryRequestModel(BaseModel):
    """Model for QueryRequest API representation"""
    collection_name: str
    expr: str
    partition_names: List[str] = Field(default_factory=list)
    output_fields: List[str] = Field(default_factory=list)
    travel_timestamp: int = 0
    guarantee_timestamp: int = 0
    db_name: str = ""

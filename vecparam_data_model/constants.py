# Placeholder tag the server binds the search target vectors to
VECTOR_TAG: str = '$0'

# Search parameter keys
VECTOR_FIELD: str = 'anns_field'
TOP_K: str = 'topk'
METRIC_TYPE: str = 'metric_type'
ROUND_DECIMAL: str = 'round_decimal'
PARAMS: str = 'params'

# Field type parameter keys
VECTOR_DIM: str = 'dim'

DEFAULT_PARTITION: str = '_default'

# Guarantee timestamps: 0 waits for all writes, 1 reads whatever is visible
GUARANTEE_STRONG_TS: int = 0
GUARANTEE_EVENTUALLY_TS: int = 1

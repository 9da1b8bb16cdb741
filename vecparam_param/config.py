from pydantic_settings import BaseSettings, SettingsConfigDict

from vecparam_data_model.constants import DEFAULT_PARTITION, GUARANTEE_EVENTUALLY_TS


class ParamSettings(BaseSettings):
    """Defaults applied by the parameter builders, overridable through ``VECPARAM_*`` env vars."""
    default_partition_name: str = DEFAULT_PARTITION
    default_metric_type: str = "L2"
    default_round_decimal: int = -1
    default_search_params: str = "{}"
    default_guarantee_timestamp: int = GUARANTEE_EVENTUALLY_TS

    model_config = SettingsConfigDict(env_prefix="VECPARAM_")

settings = ParamSettings()

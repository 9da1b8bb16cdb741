from typing import Any

from vecparam_exception_model.exception import ParamException


def check_null_empty_string(target: Any, name: str) -> None:
    """
    Checks if a string is empty or null.

    Raises:
        ParamException: If the string is None, not a str, or blank.
    """
    if target is None or not isinstance(target, str) or not target.strip():
        raise ParamException(f"{name} cannot be null or empty", param_name=name)


def check_timestamp(value: Any, name: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ParamException(f"The {name} must be a non-negative integer", param_name=name)

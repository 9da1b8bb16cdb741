from typing import Any, Dict


class ParamBuilder:
    """
    Mutable collector for a frozen parameter class.

    Subclasses expose ``with_*`` methods that record values; ``build()`` hands
    them to the parameter class, whose ``__post_init__`` validates them.
    """
    param_cls: type = None

    def __init__(self):
        self._values: Dict[str, Any] = {}

    def _set(self, key: str, value: Any) -> 'ParamBuilder':
        self._values[key] = value
        return self

    def build(self):
        return self.param_cls(**self._values)

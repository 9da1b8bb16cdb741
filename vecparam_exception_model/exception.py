class ParamException(Exception):
    """
    Exception raised when request parameters fail validation.

    Raised synchronously by the parameter builders, the field data marshaller
    and the request converters. A single failure aborts the whole conversion,
    no partial request is ever returned.

    Attributes:
        param_name -- name of the offending parameter (e.g. "Collection name")
        field_name -- name of the collection field involved, if any
        message -- explanation of the error
    """

    def __init__(self, message, param_name=None, field_name=None):
        self.param_name = param_name
        self.field_name = field_name
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        details = []
        if self.param_name is not None:
            details.append(f"param={self.param_name}")
        if self.field_name is not None:
            details.append(f"field={self.field_name}")

        if details:
            return f"{self.message} ({', '.join(details)})"
        return self.message


class IllegalResponseException(Exception):
    """
    Exception raised when a wire record received from the server is malformed
    and cannot be read back into client-side values.
    """

    def __init__(self, message, field_name=None, cause: Exception = None):
        self.field_name = field_name
        self.message = message
        self.cause = cause
        super().__init__(self.message)

    def __str__(self):
        details = []
        if self.field_name is not None:
            details.append(f"field={self.field_name}")
        if self.cause is not None:
            details.append(f"cause={self.cause}")

        if details:
            return f"{self.message} ({', '.join(details)})"
        return self.message

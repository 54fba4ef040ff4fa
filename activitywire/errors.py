class ActivityWireError(Exception):
    pass


class MalformedPayloadError(ActivityWireError, ValueError):
    """Raised when a wire value cannot be coerced to its declared type."""

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class UnrepresentableValueError(ActivityWireError, ValueError):
    """Raised when a record holds an integer that does not fit its wire range."""

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)

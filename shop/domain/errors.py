"""Error types shared by the tax engine and its collaborators."""


class ShopError(Exception):
    """Base class for application errors."""


class UnknownJurisdiction(ShopError, LookupError):
    """Province key is not one of the supported jurisdictions."""

    def __init__(self, key):
        self.key = key
        super().__init__(f"Unknown jurisdiction: {key!r}")


class InvalidAmount(ShopError, ValueError):
    """Price or budget is negative or not a finite number."""

    def __init__(self, value, field: str = "amount"):
        self.value = value
        self.field = field
        super().__init__(f"Invalid {field}: {value!r} (must be a non-negative finite number)")


class StorageError(ShopError):
    """Reading or writing a data file failed."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Storage failure for {path}: {reason}")

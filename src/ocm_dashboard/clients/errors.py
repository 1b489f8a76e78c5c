"""Errors raised by the OCM client layer."""


class OCMClientError(Exception):
    """Raised when a request to the hub API server fails."""

    pass


class ResourceNotFoundError(OCMClientError):
    """Raised when a named resource does not exist."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"{kind} {name} not found")


class WatchOpenError(OCMClientError):
    """Raised when a watch subscription cannot be established."""

    pass

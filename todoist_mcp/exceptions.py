class ConfigurationError(Exception):
    """Raised when required settings (the Todoist API token) are missing."""


class RemoteAPIError(Exception):
    """Raised when a Todoist API call fails, whatever the cause."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class JsonRpcError(Exception):
    """Raised inside the protocol layer; rendered as a JSON-RPC error object."""

    def __init__(self, code: int, message: str, data=None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

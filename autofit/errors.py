"""Error types surfaced through the {success: false, error: {code, message}} envelope."""


class RequestError(ValueError):
    """Client input rejected before any model call."""

    status_code = 400

    def __init__(self, code: str, detail: str | None = None):
        super().__init__(detail or code)
        self.code = code
        self.detail = detail


class GatewayError(RuntimeError):
    """Model-side failure. Never retried; the user resubmits."""

    status_code = 500
    code = "INTERNAL_ERROR"


class ConfigurationError(GatewayError):
    code = "CONFIGURATION_ERROR"


class EmptyResponseError(GatewayError):
    code = "EMPTY_RESPONSE"


class ResponseParseError(GatewayError):
    code = "PARSE_ERROR"


class ApiError(RuntimeError):
    """Raised by AutoFitClient when the server answers with success=false."""

    def __init__(self, code: str, message: str, status_code: int | None = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code

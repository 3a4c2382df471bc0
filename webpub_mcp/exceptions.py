"""
Custom exceptions for the Webpublication MCP server.

Every exception carries a ``kind`` that is reported to the tool caller
in the failure envelope.
"""

from typing import Any, Dict, Optional


class WebPublicationError(Exception):
    """Base exception for all Webpublication MCP errors"""
    kind = "WebPublicationError"

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "message": self.message}


class ConfigurationError(WebPublicationError):
    """Raised when required credentials or URLs are missing at startup"""
    kind = "ConfigurationError"


class UnknownToolError(WebPublicationError):
    """Raised when an invocation names a tool that is not registered"""
    kind = "UnknownTool"

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class InvalidArgumentsError(WebPublicationError):
    """Raised when tool arguments fail schema validation"""
    kind = "InvalidArguments"

    def __init__(self, tool_name: str, field: Optional[str], message: str):
        self.tool_name = tool_name
        self.field = field
        if field:
            full_message = f"Invalid arguments for {tool_name}: '{field}' {message}"
        else:
            full_message = f"Invalid arguments for {tool_name}: {message}"
        super().__init__(full_message)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["field"] = self.field
        return data


class HttpError(WebPublicationError):
    """Raised when a call to the Webpublication API fails"""
    kind = "HttpError"
    retryable = False

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None
    ):
        self.url = url
        self.status_code = status_code
        self.original_error = original_error
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["status_code"] = self.status_code
        data["retryable"] = self.retryable
        return data


class HttpConnectionError(HttpError):
    """Network failure or timeout before a response was received"""
    retryable = True


class HttpStatusError(HttpError):
    """Remote API answered with a non-2xx status"""

    @property
    def retryable(self) -> bool:
        return self.status_code in (408, 429) or (self.status_code or 0) >= 500


class MalformedResponseError(HttpError):
    """Response body could not be parsed into the expected shape"""


class EncodingError(WebPublicationError):
    """Raised when cover image bytes cannot be base64-encoded"""
    kind = "EncodingError"

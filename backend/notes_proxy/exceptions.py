"""
Notes Proxy — Custom Exception Hierarchy
=========================================

What:  Defines application-specific exceptions for every failure the proxy reports.
Why:   Each failure kind maps to one HTTP status and one machine-readable code,
       and no provider exception object ever reaches the client.
How:   Each exception class carries a message, a `code`, and an optional context
       dict. Global exception handlers (see exception_handlers.py) translate them
       into structured JSON error responses.
Who:   Raised by validation, prompt construction, the provider and the adapters.

Exception Hierarchy:
    NotesProxyError (base)
    ├── RequestError                    → transport contract violations
    │   ├── MalformedRequestError       → 400 Bad Request
    │   └── MethodNotAllowedError       → 405 Method Not Allowed
    ├── ValidationError                 → 400 Bad Request (client can fix)
    │   ├── MissingFieldError
    │   ├── MissingInstructionError
    │   ├── InsufficientDocumentsError
    │   ├── InvalidModeError
    │   └── InvalidDocumentError
    ├── GenerationError                 → 500 Internal Server Error
    │   ├── GenerationBlockedError      (provider withheld output)
    │   └── GenerationFailedError       (transport/provider failure)
    ├── ConfigurationMissingError       → fatal at startup, never per-request
    └── ProxyClientError                → raised by NotesProxyClient, client side
"""

from typing import Any, Dict, Iterable, Optional


class NotesProxyError(Exception):
    """
    Base exception for all Notes Proxy errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        code:     Machine-readable error kind
        details:  Optional short string returned alongside the message
        context:  Additional debug info (logged but NOT returned to client)
    """

    code = "internal_error"
    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.details = details
        self.context = context or {}
        super().__init__(self.message)


# ══════════════════════════════════════════════════════════════════════════
# Transport Contract Violations
# ══════════════════════════════════════════════════════════════════════════


class RequestError(NotesProxyError):
    """The HTTP request itself is unusable. Recoverable by the client."""

    status_code = 400


class MalformedRequestError(RequestError):
    """Body is not a JSON object, or Content-Type is not application/json."""

    code = "malformed_request"

    def __init__(
        self,
        message: str = "Request body must be a JSON object sent as application/json.",
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, details=details, context=context)


class MethodNotAllowedError(RequestError):
    code = "method_not_allowed"
    status_code = 405

    def __init__(self, method: str = "", context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["method"] = method
        super().__init__(
            message=f"Method {method or 'unknown'} is not allowed. Use POST.",
            context=ctx,
        )
        self.method = method


# ══════════════════════════════════════════════════════════════════════════
# Request Validation Failures
# ══════════════════════════════════════════════════════════════════════════


class ValidationError(NotesProxyError):
    """
    Raised when a decoded request body fails validation.

    What:    The client sent data that can be corrected.
    When:    Always before any provider call is made.
    HTTP:    400 Bad Request
    """

    code = "validation_error"
    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, details=field, context=ctx)
        self.field = field


class MissingFieldError(ValidationError):
    code = "missing_field"

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(
            message=message or f"Missing '{field}' in request body.",
            field=field,
        )


class MissingInstructionError(ValidationError):
    """Custom mode was requested without a non-blank instruction (`prompt`)."""

    code = "missing_instruction"

    def __init__(self, message: str = "Missing 'prompt' for custom mode."):
        super().__init__(message=message, field="prompt")


class InsufficientDocumentsError(ValidationError):
    code = "insufficient_documents"

    def __init__(self, count: int, minimum: int = 2):
        super().__init__(
            message=f"At least {minimum} notes are required for synthesis, got {count}.",
            field="notes",
            context={"count": count, "minimum": minimum},
        )
        self.count = count
        self.minimum = minimum


class InvalidModeError(ValidationError):
    code = "invalid_mode"

    def __init__(self, mode: Any, valid_modes: Iterable[str] = ()):
        valid = list(valid_modes)
        message = f"Invalid mode '{mode}'."
        if valid:
            message += f" Valid modes are: {', '.join(valid)}"
        super().__init__(
            message=message,
            field="mode",
            context={"mode": str(mode), "valid_modes": valid},
        )
        self.mode = mode


class InvalidDocumentError(ValidationError):
    code = "invalid_document"

    def __init__(self, index: int, reason: str = "must have a 'content' property (string)"):
        super().__init__(
            message=f"Note at position {index + 1} {reason}.",
            field=f"notes[{index}]",
            context={"index": index},
        )
        self.index = index


# ══════════════════════════════════════════════════════════════════════════
# Generation Failures
# ══════════════════════════════════════════════════════════════════════════


class GenerationError(NotesProxyError):
    """
    Raised when the generation provider does not produce text.

    HTTP:    500 Internal Server Error
    Security: the message is composed by us; raw provider exceptions are only
              logged, never returned.
    """

    code = "generation_error"
    status_code = 500


class GenerationBlockedError(GenerationError):
    """
    The provider declined to produce output (safety filtering or provider block).

    The provider's stated reason (e.g. "SAFETY") is embedded in the message
    when available.
    """

    code = "generation_blocked"

    def __init__(self, reason: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        if reason:
            message = f"Response blocked due to: {reason}"
        else:
            message = "Response blocked due to safety settings or other reasons."
        ctx = context or {}
        if reason:
            ctx["block_reason"] = reason
        super().__init__(message=message, details=reason, context=ctx)
        self.reason = reason


class GenerationFailedError(GenerationError):
    code = "generation_failed"

    def __init__(
        self,
        message: str = "An error occurred while communicating with Gemini.",
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, details=details, context=context)


# ══════════════════════════════════════════════════════════════════════════
# Startup Failures
# ══════════════════════════════════════════════════════════════════════════


class ConfigurationMissingError(NotesProxyError):
    """
    Raised when required configuration (the provider credential) is absent.

    When:    Application startup. Never converted into an HTTP response.
    """

    code = "configuration_missing"

    def __init__(self, settings: Iterable[str] = ("GEMINI_API_KEY",)):
        names = list(settings)
        super().__init__(
            message="Configuration validation failed: "
            + ", ".join(f"{name} is not set" for name in names),
            context={"settings": names},
        )
        self.settings = names


# ══════════════════════════════════════════════════════════════════════════
# Client-Side Failures
# ══════════════════════════════════════════════════════════════════════════


class ProxyClientError(NotesProxyError):
    """
    Raised by NotesProxyClient when a call to the proxy does not yield text.

    Attributes:
        status_code: HTTP status of the proxy response, None when no response
        error_code:  The proxy's machine-readable `code`, when it sent one
    """

    code = "proxy_client_error"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[str] = None,
    ):
        super().__init__(message=message, details=details)
        self.status_code = status_code
        self.error_code = error_code

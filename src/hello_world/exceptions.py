# src/hello_world/exceptions.py

"""
Shared custom exceptions for the hello-world service.

Centralizing exception definitions in a separate module prevents circular
import errors between other modules that need to raise or catch them.

Exception Hierarchy:
- HelloWorldError (base)
  - ConfigurationError
  - CheckIpError (public IP lookup)
    - TransportError
    - UnexpectedStatusError
    - EmptyBodyError
  - RenderingError (log message rendering)
    - ConfigParseError
    - TemplateLoadError
    - TemplateRenderError
  - LogBackendError (CloudWatch Logs)
    - DescribeError
    - CreateError
    - PutEventError
"""

from typing import Any, Dict, Optional


class HelloWorldError(Exception):
    """Base exception for all hello-world service errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = dict(context) if context else {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "error_message": self.message,
            "context": self.context,
        }


class ConfigurationError(HelloWorldError):
    """Raised when there's an error in the application configuration."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, error_code="CONFIGURATION_ERROR", **kwargs)


# === Public IP lookup errors ===

class CheckIpError(HelloWorldError):
    """Base class for errors fetching the caller's public IP."""
    pass


class TransportError(CheckIpError):
    """Raised when the HTTP request could not be completed at all."""

    def __init__(self, url: str, reason: str, **kwargs):
        message = f"Request to {url} failed: {reason}"
        context = {"url": url, "reason": reason}
        super().__init__(message, error_code="TRANSPORT_ERROR", context=context, **kwargs)


class UnexpectedStatusError(CheckIpError):
    """Raised when the IP endpoint answers with anything but 200."""

    def __init__(self, url: str, status_code: int, **kwargs):
        message = f"Non 200 response from {url}: {status_code}"
        context = {"url": url, "status_code": status_code}
        super().__init__(message, error_code="UNEXPECTED_STATUS", context=context, **kwargs)
        self.status_code = status_code


class EmptyBodyError(CheckIpError):
    """Raised when the IP endpoint returns 200 with no body."""

    def __init__(self, url: str, **kwargs):
        message = f"No IP in HTTP response from {url}"
        super().__init__(message, error_code="EMPTY_BODY", context={"url": url}, **kwargs)


# === Rendering errors ===

class RenderingError(HelloWorldError):
    """Base class for errors producing the cold-start log message."""
    pass


class ConfigParseError(RenderingError):
    """Raised when the template parameter file is missing or malformed."""

    def __init__(self, path: str, reason: str, **kwargs):
        message = f"Failed to parse parameter file {path}: {reason}"
        context = {}
        if "context" in kwargs:
            context.update(kwargs.pop("context"))
        context.update({"path": path, "reason": reason})
        kwargs.setdefault("error_code", "CONFIG_PARSE_ERROR")
        super().__init__(message, context=context, **kwargs)


class TemplateLoadError(RenderingError):
    """Raised when a template cannot be found or compiled."""

    def __init__(self, template_name: str, reason: str, **kwargs):
        message = f"Failed to load template {template_name}: {reason}"
        context = {"template_name": template_name, "reason": reason}
        kwargs.setdefault("error_code", "TEMPLATE_LOAD_ERROR")
        super().__init__(message, context=context, **kwargs)


class TemplateRenderError(RenderingError):
    """Raised when substituting the context into a template fails."""

    def __init__(self, template_name: str, reason: str, **kwargs):
        message = f"Failed to render template {template_name}: {reason}"
        context = {"template_name": template_name, "reason": reason}
        super().__init__(message, error_code="TEMPLATE_RENDER_ERROR", context=context, **kwargs)


# === CloudWatch Logs errors ===

class LogBackendError(HelloWorldError):
    """Base class for CloudWatch Logs errors."""
    pass


class DescribeError(LogBackendError):
    """Raised when querying for an existing log group or stream fails."""

    def __init__(self, resource: str, name: str, **kwargs):
        message = f"Failed to describe log {resource}s with prefix: {name}"
        context = {}
        if "context" in kwargs:
            context.update(kwargs.pop("context"))
        context.update({"resource": resource, "name": name})
        super().__init__(message, error_code="DESCRIBE_FAILED", context=context, **kwargs)


class CreateError(LogBackendError):
    """Raised when creating a log group or stream fails."""

    def __init__(self, resource: str, name: str, **kwargs):
        message = f"Failed to create log {resource}: {name}"
        context = {}
        if "context" in kwargs:
            context.update(kwargs.pop("context"))
        context.update({"resource": resource, "name": name})
        super().__init__(message, error_code="CREATE_FAILED", context=context, **kwargs)


class PutEventError(LogBackendError):
    """Raised when PutLogEvents is rejected."""

    def __init__(self, log_group: str, log_stream: str, **kwargs):
        message = f"Failed to put log event to {log_group}/{log_stream}"
        context = {}
        if "context" in kwargs:
            context.update(kwargs.pop("context"))
        context.update({"log_group": log_group, "log_stream": log_stream})
        super().__init__(message, error_code="PUT_EVENT_FAILED", context=context, **kwargs)


# === Utility Functions ===

def get_error_context(error: Exception) -> Dict[str, Any]:
    """Extract error context for logging."""
    if isinstance(error, HelloWorldError):
        return error.to_dict()
    else:
        return {
            "error_type": error.__class__.__name__,
            "error_message": str(error),
        }

from typing import Any, Dict, List, Optional

from view_lookup.domain.core.exceptions import (
    ConfigurationError,
    ResourceNotFoundError,
    ValidationError,
)


class TemplateNotFoundError(ResourceNotFoundError):
    """Raised when no resolver location yields a template for a lookup."""
    def __init__(self,
                 name: str,
                 prefix: Optional[str] = None,
                 partial: bool = False,
                 searched: Optional[List[str]] = None,
                 details: Optional[Dict[str, Any]] = None):
        virtual_path = f"{prefix}/{name}" if prefix else name
        self.searched = searched or []
        kind = "partial" if partial else "template"
        message = f"Missing {kind} {virtual_path}"
        if details:
            message += " with " + ", ".join(f"{k}={v!r}" for k, v in details.items())
        message += " in view paths " + repr(self.searched)
        super().__init__("Template", virtual_path, message)
        self.name = name
        self.prefix = prefix
        self.partial = partial
        self.details = details or {}


class InvalidDetailValueError(ValidationError):
    """Raised when a detail value cannot be normalized into a value list."""
    def __init__(self, detail: str, value: Any, reason: str):
        super().__init__(f"Invalid value for detail '{detail}': {value!r} ({reason})", value)
        self.detail = detail
        self.value = value


class UnknownDetailError(ValidationError):
    """Raised when a detail dimension has not been registered."""
    def __init__(self, detail: str, registered: List[str]):
        super().__init__(
            f"Unknown detail '{detail}', registered details are: {', '.join(registered)}"
        )
        self.detail = detail
        self.registered = registered


class InvalidSearchPathError(ValidationError):
    """Raised when a search path entry cannot be turned into a resolver."""
    def __init__(self, location: Any, reason: str):
        super().__init__(f"Invalid view path {location!r}: {reason}", location)
        self.location = location


class DetailConfigurationError(ConfigurationError):
    """Raised when a detail dimension is misconfigured, e.g. its default is empty."""
    def __init__(self, detail: str, message: str):
        super().__init__(f"Detail '{detail}' is misconfigured: {message}", [detail])
        self.detail = detail

"""Template lookup configuration schemas."""
from typing import List
from pydantic import BaseModel, Field, field_validator


class LookupConfig(BaseModel):
    """Template lookup configuration."""

    default_formats: List[str] = Field(
        default_factory=lambda: ["html", "text", "js", "css", "xml", "json"],
        description="Formats accepted when a request states no preference, in order"
    )
    default_locale: str = Field("en", description="Locale used when none has been negotiated")
    available_locales: List[str] = Field(
        default_factory=list,
        description="Locales that may be selected (empty allows any locale)"
    )
    handler_extensions: List[str] = Field(
        default_factory=lambda: ["erb", "builder", "html"],
        description="Recognized template handler extensions"
    )
    fallback_paths: List[str] = Field(
        default_factory=lambda: ["", "/"],
        description="Directories searched when rendering an explicit file"
    )
    js_format_falls_back_to_html: bool = Field(
        True,
        description="Also accept html templates when only the js format is requested"
    )
    cache_templates: bool = Field(True, description="Memoize resolver lookups per details key")

    @field_validator('default_formats', 'handler_extensions')
    @classmethod
    def validate_not_empty(cls, v: List[str]) -> List[str]:
        """Validate that at least one value is configured."""
        if not v:
            raise ValueError("At least one value is required")
        if any(not item for item in v):
            raise ValueError("Values must not be empty")
        return v

    @field_validator('handler_extensions')
    @classmethod
    def validate_handler_extensions(cls, v: List[str]) -> List[str]:
        """Strip leading dots from handler extensions."""
        return [extension.lstrip(".") for extension in v]

    @field_validator('default_locale')
    @classmethod
    def validate_default_locale(cls, v: str) -> str:
        """Validate default locale."""
        if not v:
            raise ValueError("Default locale must not be empty")
        return v

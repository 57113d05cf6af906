# src/view_lookup/domain/template/value_objects.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from view_lookup.domain.core.exceptions import ValidationError


@dataclass(frozen=True)
class TemplateName:
    """Template name split into its bare name and directory prefix."""
    name: str
    prefix: str = ""

    def __post_init__(self):
        if not self.name:
            raise ValidationError("Template name must not be empty")

    @property
    def virtual_path(self) -> str:
        return f"{self.prefix}/{self.name}" if self.prefix else self.name

    def __str__(self) -> str:
        return self.virtual_path


@dataclass(frozen=True)
class Template:
    """A template candidate located by a resolver.

    Only describes where the template lives and which details it was
    matched for; loading and compiling the source is left to the renderer.
    """
    identifier: str
    virtual_path: str
    handler: Optional[str] = None
    format: Optional[str] = None
    locale: Optional[str] = None
    partial: bool = False

    def __post_init__(self):
        if not self.identifier:
            raise ValidationError("Template identifier is required")

    def __str__(self) -> str:
        return self.identifier

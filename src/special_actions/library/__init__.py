"""Template library of reusable creature action sets."""

from __future__ import annotations

from special_actions.library.templates import (
    CreatureTemplate,
    TemplateCategory,
    TemplateExport,
    TemplateLibrary,
)


__all__ = [
    "CreatureTemplate",
    "TemplateCategory",
    "TemplateExport",
    "TemplateLibrary",
]

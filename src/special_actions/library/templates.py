"""Template library for reusable creature action sets.

Templates group ready-made actions and resource pools by creature
archetype. Creating a creature from a template copies everything, so a
creature's later changes never leak back into the library.

Example:
    >>> library = TemplateLibrary()
    >>> dragon = library.create_creature_from_template("adult_red_dragon", name="Ignan")
    >>> [action.id for action in dragon.get_actions_by_type("legendary")]
    ['detect', 'tail_attack', 'wing_attack']
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

import pydantic
from pydantic import Field

from special_actions.core.config import get_settings
from special_actions.core.exceptions import (
    TemplateImportError,
    TemplateNotFoundError,
    ValidationError,
)
from special_actions.core.logging import get_logger
from special_actions.library.defaults import DEFAULT_CATEGORIES, DEFAULT_TEMPLATES
from special_actions.models.actions import Action, RechargeAbility
from special_actions.models.base import EngineModel
from special_actions.models.creature import Creature


logger = get_logger(__name__)


# =============================================================================
# Schemas
# =============================================================================


class TemplateCategory(EngineModel):
    """A named group of templates."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)


class CreatureTemplate(EngineModel):
    """A reusable action set and resource configuration.

    Attributes:
        id: Template identifier.
        name: Default creature name.
        category: Category id.
        description: Default creature description.
        max_legendary_actions: Legendary pool size, if legendary.
        max_mythic_actions: Mythic pool size, if mythic.
        paragon_phases: Paragon phase count, if a paragon.
        villain_actions_per_round: Villain actions per round, if a villain.
        recharge_abilities: Explicit recharge bindings.
        actions: The template's actions.
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    category: str = ""
    description: str = ""
    max_legendary_actions: int | None = Field(default=None, ge=0)
    max_mythic_actions: int | None = Field(default=None, ge=0)
    paragon_phases: int | None = Field(default=None, ge=0)
    villain_actions_per_round: int | None = Field(default=None, ge=0)
    recharge_abilities: list[RechargeAbility] | None = None
    actions: list[Action] = Field(default_factory=list)


class TemplateExport(EngineModel):
    """The document written by ``export_json``."""

    categories: list[TemplateCategory] = Field(default_factory=list)
    templates: list[CreatureTemplate] = Field(default_factory=list)
    version: str
    export_date: datetime


# =============================================================================
# Library
# =============================================================================


class TemplateLibrary:
    """Catalog of creature templates, grouped by category.

    Attributes:
        categories: Categories keyed by id.
        templates: Templates keyed by id, in insertion order.
    """

    def __init__(self, *, load_defaults: bool | None = None) -> None:
        """Initialize the library.

        Args:
            load_defaults: Preload the built-in templates. Defaults to
                ``library.load_default_templates``.
        """
        self.categories: dict[str, TemplateCategory] = {}
        self.templates: dict[str, CreatureTemplate] = {}

        if load_defaults is None:
            load_defaults = get_settings().library.load_default_templates
        if load_defaults:
            self._load_defaults()

    def _load_defaults(self) -> None:
        for category_id, name in DEFAULT_CATEGORIES:
            self.add_category(category_id, name)
        for template in DEFAULT_TEMPLATES:
            self.add_template(template)
        logger.debug("Default templates loaded", count=len(DEFAULT_TEMPLATES))

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def add_category(self, category_id: str, name: str) -> TemplateCategory:
        """Add or rename a category."""
        category = TemplateCategory(id=category_id, name=name)
        self.categories[category_id] = category
        return category

    def get_categories(self) -> list[TemplateCategory]:
        """Get every category."""
        return list(self.categories.values())

    # -------------------------------------------------------------------------
    # Templates
    # -------------------------------------------------------------------------

    def add_template(self, template: CreatureTemplate | dict[str, Any]) -> CreatureTemplate:
        """Add a template, replacing any template with the same id.

        Args:
            template: The template, or its JSON form.

        Returns:
            The stored template.

        Raises:
            ValidationError: If a dict does not describe a valid template.
        """
        if not isinstance(template, CreatureTemplate):
            try:
                template = CreatureTemplate.model_validate(template)
            except pydantic.ValidationError as exc:
                raise ValidationError(
                    f"Invalid template: {exc.error_count()} error(s)",
                    field_name="template",
                    details={"errors": exc.errors(include_url=False)},
                ) from exc

        self.templates[template.id] = template
        return template

    def get_template(self, template_id: str) -> CreatureTemplate | None:
        """Find a template by id."""
        return self.templates.get(template_id)

    def require_template(self, template_id: str) -> CreatureTemplate:
        """Find a template by id.

        Raises:
            TemplateNotFoundError: If no template has this id.
        """
        template = self.templates.get(template_id)
        if template is None:
            raise TemplateNotFoundError("Template not found", template_id=template_id)
        return template

    def get_all_templates(self) -> list[CreatureTemplate]:
        """Get every template."""
        return list(self.templates.values())

    def get_templates_by_category(self, category_id: str) -> list[CreatureTemplate]:
        """Get the templates in one category."""
        return [t for t in self.templates.values() if t.category == category_id]

    def remove_template(self, template_id: str) -> bool:
        """Remove a template.

        Returns:
            True if the template existed.
        """
        return self.templates.pop(template_id, None) is not None

    def search_templates(self, query: str) -> list[CreatureTemplate]:
        """Find templates whose name or description contains the query.

        Matching is case-insensitive; an empty query matches nothing.
        """
        if not query:
            return []
        needle = query.lower()
        return [
            template
            for template in self.templates.values()
            if needle in template.name.lower() or needle in template.description.lower()
        ]

    # -------------------------------------------------------------------------
    # Instantiation
    # -------------------------------------------------------------------------

    def create_creature_from_template(
        self, template_id: str, **overrides: Any
    ) -> Creature | None:
        """Create a creature with a copy of a template's actions.

        Args:
            template_id: The template to copy.
            **overrides: Creature fields to set instead of the template's,
                such as ``name`` or ``description``.

        Returns:
            The new creature, or None if the template does not exist.

        Raises:
            ValidationError: If the overrides produce an invalid creature.
        """
        try:
            template = self.require_template(template_id)
        except TemplateNotFoundError as exc:
            logger.warning(exc.message, template_id=template_id)
            return None

        # Dumping and revalidating builds every nested model afresh.
        data = template.model_dump(
            exclude={"id", "category"},
            exclude_none=True,
        )
        data.update(overrides)

        creature = Creature.from_dict(data)
        logger.info("Creature created from template", template=template_id, creature=creature.name)
        return creature

    # -------------------------------------------------------------------------
    # Import / export
    # -------------------------------------------------------------------------

    def export_json(self, template_ids: list[str] | None = None) -> str:
        """Export templates and every category as JSON.

        Args:
            template_ids: Templates to export; all when None. Unknown ids
                are skipped.

        Returns:
            The export document, indented for reading.
        """
        if template_ids is None:
            templates = list(self.templates.values())
        else:
            templates = [self.templates[tid] for tid in template_ids if tid in self.templates]

        document = TemplateExport(
            categories=self.get_categories(),
            templates=templates,
            version=get_settings().library.export_version,
            export_date=datetime.now(UTC),
        )
        return document.model_dump_json(by_alias=True, exclude_none=True, indent=2)

    def import_json(self, text: str) -> int:
        """Import templates from an export document.

        Categories are imported first. Templates that fail validation are
        skipped with a warning.

        Args:
            text: JSON produced by ``export_json`` or written by hand.

        Returns:
            Number of templates imported; 0 if the document is unreadable.
        """
        try:
            categories, templates = self._parse_export(text)
        except TemplateImportError as exc:
            logger.error("Error importing templates", error=exc.message)
            return 0

        for category in categories:
            if isinstance(category, dict) and category.get("id") and category.get("name"):
                self.add_category(category["id"], category["name"])

        imported = 0
        for raw in templates:
            try:
                self.add_template(raw)
            except ValidationError as exc:
                template_id = raw.get("id") if isinstance(raw, dict) else None
                logger.warning("Skipping invalid template", template_id=template_id, error=exc.message)
                continue
            imported += 1

        logger.info("Templates imported", count=imported)
        return imported

    @staticmethod
    def _parse_export(text: str) -> tuple[list[Any], list[Any]]:
        """Split an export document into raw categories and templates.

        Raises:
            TemplateImportError: If the text is not JSON or has no
                ``templates`` array.
        """
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as exc:
            raise TemplateImportError(f"Invalid JSON: {exc}") from exc

        if not isinstance(data, dict) or not isinstance(data.get("templates"), list):
            raise TemplateImportError("Invalid template data: templates array missing")

        categories = data.get("categories")
        return (categories if isinstance(categories, list) else []), data["templates"]


__all__ = [
    "TemplateCategory",
    "CreatureTemplate",
    "TemplateExport",
    "TemplateLibrary",
]

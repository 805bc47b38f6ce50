"""Client-side build session.

A ``BuildSession`` owns the part selection a user is assembling. Every
mutation re-runs the build calculator synchronously, so ``summary`` always
matches ``components``. Saving goes through a backend: ``OrmBuildBackend``
in-process, or ``builder.client.ApiClient`` over HTTP.
"""

import logging

from catalog.registry import resolve_category
from pcbuilder.errors import AuthRequired, ValidationFailure

from .services import persistence
from .services.build_calculator import PartSelection, evaluate_build, part_value

logger = logging.getLogger(__name__)


class OrmBuildBackend:
    """Save builds straight through the persistence service."""

    def create_build(self, user, name, total_price, components, description=""):
        return persistence.create_build(
            user, name, total_price, components, description=description
        )


class BuildSession:
    def __init__(self, backend, user=None):
        self.backend = backend
        self.user = user
        self._selection = PartSelection()
        self.summary = evaluate_build(self._selection)

    def _recompute(self):
        self.summary = evaluate_build(self._selection)

    @property
    def components(self):
        return self._selection.as_dict()

    @property
    def total_price(self):
        return self.summary.total_price

    @property
    def compatibility(self):
        return self.summary.compatibility

    @property
    def performance(self):
        return self.summary.performance

    def select(self, category, component):
        category = resolve_category(category)
        if component is None:
            raise ValidationFailure(f"No component given for {category}")
        setattr(self._selection, category, component)
        self._recompute()

    def remove(self, category):
        category = resolve_category(category)
        setattr(self._selection, category, None)
        self._recompute()

    def clear(self):
        self._selection = PartSelection()
        self._recompute()

    def references(self):
        """(category, component id) pairs for every selected part."""
        refs = []
        for category, part in self._selection.present():
            component_id = part_value(part, "id")
            if component_id is None:
                component_id = part_value(part, "pk")
            if component_id is None:
                raise ValidationFailure(f"Selected {category} has no id")
            refs.append((category, component_id))
        return refs

    def save(self, name, description=""):
        """Persist the current selection and return the new build id.

        The session is left untouched whether the save succeeds or fails.
        """
        if self.user is None:
            raise AuthRequired("Log in to save builds")
        if not (name or "").strip():
            raise ValidationFailure("Build name is required", fields={"name": ["Required"]})
        if self._selection.is_empty():
            raise ValidationFailure("Add at least one component before saving")
        build_id = self.backend.create_build(
            self.user,
            name.strip(),
            self.total_price,
            self.references(),
            description=description,
        )
        logger.info("Session saved build %s", build_id)
        return build_id

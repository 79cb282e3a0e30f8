"""Dependency / conflict validation over a selection of service ids.

Every function here is a pure function of ``(selection, catalog)``; unknown
ids never raise, they surface as warnings. Only a malformed selection shape
raises :class:`InvalidInputError`.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Literal

from pydantic import BaseModel

from screening_api.services.catalog import ServiceCatalog
from screening_api.services.money import format_cents
from screening_api.services.rules import DEFAULT_PRICING_RULES, PricingRules
from screening_api.services.selection import coerce_selection, distinct

logger = logging.getLogger(__name__)

IssueKind = Literal["missing_dependency", "conflict"]


class ValidationIssue(BaseModel):
    kind: IssueKind
    subject_service_id: str
    message: str
    related_service_id: str

    model_config = {"frozen": True}


class ValidationResult(BaseModel):
    valid: bool
    errors: tuple[ValidationIssue, ...] = ()
    warnings: tuple[str, ...] = ()

    model_config = {"frozen": True}


class CanAddResult(BaseModel):
    allowed: bool
    reason: str | None = None
    missing_dependencies: tuple[str, ...] | None = None
    conflicting_services: tuple[str, ...] | None = None

    model_config = {"frozen": True}


class CanRemoveResult(BaseModel):
    allowed: bool = True
    cascade_remove: tuple[str, ...] = ()
    warning: str | None = None

    model_config = {"frozen": True}


class DependencyConflictValidator:
    """Rule checks against one catalog snapshot.

    ``rules`` only feeds the non-blocking bundle recommendations.
    """

    def __init__(self, catalog: ServiceCatalog, rules: PricingRules = DEFAULT_PRICING_RULES):
        self._catalog = catalog
        self._rules = rules

    # ------------------------------------------------------------------
    # validate
    # ------------------------------------------------------------------

    def validate(self, selection) -> ValidationResult:
        ids = distinct(coerce_selection(selection))
        present = set(ids)

        errors = [*self._dependency_errors(ids, present), *self._conflict_errors(ids, present)]

        warnings: list[str] = []
        warnings.extend(self._unknown_id_warnings(ids))
        warnings.extend(self._reference_warnings(ids))
        warnings.extend(self._bundle_recommendations(present))

        return ValidationResult(valid=not errors, errors=tuple(errors), warnings=tuple(warnings))

    def _dependency_errors(self, ids: list[str], present: set[str]) -> list[ValidationIssue]:
        errors: list[ValidationIssue] = []
        for service in self._catalog.get_many(ids):
            for required_id in service.dependencies:
                if required_id in present:
                    continue
                errors.append(
                    ValidationIssue(
                        kind="missing_dependency",
                        subject_service_id=service.id,
                        message=f"{service.name} requires {self._catalog.display_name(required_id)}",
                        related_service_id=required_id,
                    )
                )
        return errors

    def _conflict_errors(self, ids: list[str], present: set[str]) -> list[ValidationIssue]:
        # A conflict may be declared on one side or both; report each pair once.
        pairs: set[tuple[str, str]] = set()
        for service in self._catalog.get_many(ids):
            for other_id in service.conflicts:
                if other_id in present:
                    pairs.add(tuple(sorted((service.id, other_id))))  # type: ignore[arg-type]

        errors: list[ValidationIssue] = []
        for first, second in sorted(pairs):
            errors.append(
                ValidationIssue(
                    kind="conflict",
                    subject_service_id=first,
                    message=(
                        f"{self._catalog.display_name(first)} conflicts with "
                        f"{self._catalog.display_name(second)}"
                    ),
                    related_service_id=second,
                )
            )
        return errors

    def _unknown_id_warnings(self, ids: list[str]) -> list[str]:
        unknown = [sid for sid in ids if sid not in self._catalog]
        if not unknown:
            return []
        return [f"Unknown service id(s) ignored: {', '.join(unknown)}"]

    def _reference_warnings(self, ids: list[str]) -> list[str]:
        warnings = []
        for service in self._catalog.get_many(ids):
            for ref in (*service.dependencies, *service.conflicts):
                if ref not in self._catalog:
                    warnings.append(f"{service.name} references unknown service '{ref}'")
        return warnings

    def _bundle_recommendations(self, present: set[str]) -> list[str]:
        warnings = []
        for bundle in self._rules.bundles:
            selected = sum(1 for sid in bundle.service_ids if sid in present)
            missing = len(bundle.service_ids) - selected
            if missing and selected >= bundle.recommend_from:
                warnings.append(
                    f"Add {missing} more {bundle.member_noun} to get the "
                    f"{bundle.name} discount ({format_cents(bundle.amount_cents)} off)"
                )
        return warnings

    # ------------------------------------------------------------------
    # can_add / can_remove
    # ------------------------------------------------------------------

    def can_add(self, selection, candidate_id: str) -> CanAddResult:
        ids = distinct(coerce_selection(selection))
        present = set(ids)

        candidate = self._catalog.get(candidate_id)
        if candidate is None:
            return CanAddResult(allowed=False, reason=f"Service not found: {candidate_id}")
        if candidate_id in present:
            return CanAddResult(allowed=False, reason=f"{candidate.name} is already in the package")

        missing = tuple(dep for dep in candidate.dependencies if dep not in present)
        if missing:
            names = ", ".join(self._catalog.display_name(dep) for dep in missing)
            return CanAddResult(
                allowed=False,
                reason=f"{candidate.name} requires {names} to be added first",
                missing_dependencies=missing,
            )

        conflicting = [sid for sid in candidate.conflicts if sid in present]
        for service in self._catalog.get_many(ids):
            if service.conflicts_with(candidate_id) and service.id not in conflicting:
                conflicting.append(service.id)
        if conflicting:
            names = ", ".join(self._catalog.display_name(sid) for sid in conflicting)
            return CanAddResult(
                allowed=False,
                reason=f"{candidate.name} conflicts with {names}",
                conflicting_services=tuple(conflicting),
            )

        return CanAddResult(allowed=True)

    def can_remove(self, selection, target_id: str) -> CanRemoveResult:
        """Removal is always allowed; report the selected services that would lose a dependency.

        Walks dependents breadth-first with a visited set, so a cyclic
        dependency graph still terminates once each node has been seen.
        """
        ids = distinct(coerce_selection(selection))
        selected = self._catalog.get_many(ids)

        visited = {target_id}
        frontier = deque([target_id])
        cascade: list[str] = []
        while frontier:
            removed_id = frontier.popleft()
            for service in selected:
                if service.id in visited or not service.depends_on(removed_id):
                    continue
                visited.add(service.id)
                cascade.append(service.id)
                frontier.append(service.id)

        if not cascade:
            return CanRemoveResult(cascade_remove=())

        names = ", ".join(self._catalog.display_name(sid) for sid in cascade)
        logger.debug("Removing %s cascades to %s", target_id, cascade)
        return CanRemoveResult(
            cascade_remove=tuple(cascade),
            warning=f"Removing this service will also remove: {names}",
        )

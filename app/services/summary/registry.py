"""
Module `registry` — import of package registry metadata and manifest contents.

The fields read for each package type are declared in the `ECOSYSTEMS`
table (`ecosystems.py`); this module only evaluates those rules against a
harvested-facts bundle. Each rule is independent: a missing or malformed
value leaves its target unset without affecting the others, and a license
that does not normalize is never written.
"""

import logging
from typing import Any, Mapping, Optional

from .accumulator import apply_update
from .ecosystems import COORDINATE, ECOSYSTEMS, Ecosystem, coordinate_type
from .summary_utils import get_value, set_if_value

logger = logging.getLogger(__name__)


def ecosystem_update(ecosystem: Ecosystem, facts: Any, coordinate: Optional[Mapping[str, Any]] = None) -> dict:
    """Evaluates the ecosystem's field rules into a partial update."""
    update: dict = {}
    for rule in ecosystem.registry_fields:
        if get_value(update, rule.target) is not None:
            continue
        value = rule.extract(facts, coordinate)
        if not set_if_value(update, rule.target, value) and rule.source != COORDINATE:
            raw = get_value(facts, rule.source)
            if raw is not None:
                logger.debug("%s: dropping %s=%r", ecosystem.type, rule.source, raw)
    return update


def registry_update(facts: Any, coordinate: Optional[Mapping[str, Any]] = None) -> dict:
    """Partial update from registry data, chosen by the coordinate's package type."""
    package_type = coordinate_type(coordinate)
    ecosystem = ECOSYSTEMS.get(package_type or "")
    if ecosystem is None:
        logger.debug("No registry importer for package type %r", package_type)
        return {}
    return ecosystem_update(ecosystem, facts, coordinate)


def add_registry_data(result: dict, facts: Any, coordinate: Optional[Mapping[str, Any]] = None) -> None:
    """Imports registry metadata for whatever package type the coordinate names."""
    apply_update(result, registry_update(facts, coordinate))


def _add(package_type: str, result: dict, facts: Any, coordinate: Optional[Mapping[str, Any]]) -> None:
    apply_update(result, ecosystem_update(ECOSYSTEMS[package_type], facts, coordinate))


def add_crate_data(result: dict, facts: Any, coordinate: Optional[Mapping[str, Any]] = None) -> None:
    """
    crates.io: `registryData.license` (dual licenses such as "MIT/Apache-2.0"
    become an OR), `manifest.homepage`, `registryData.created_at`, plus the
    crates.io urls when the coordinate gives name and revision.
    """
    _add("crate", result, facts, coordinate)


def add_npm_data(result: dict, facts: Any, coordinate: Optional[Mapping[str, Any]] = None) -> None:
    _add("npm", result, facts, coordinate)


def add_nuget_data(result: dict, facts: Any, coordinate: Optional[Mapping[str, Any]] = None) -> None:
    """nuget: licenseExpression first, a well-known licenseUrl otherwise."""
    _add("nuget", result, facts, coordinate)


def add_pypi_data(result: dict, facts: Any, coordinate: Optional[Mapping[str, Any]] = None) -> None:
    _add("pypi", result, facts, coordinate)


def add_gem_data(result: dict, facts: Any, coordinate: Optional[Mapping[str, Any]] = None) -> None:
    _add("gem", result, facts, coordinate)


def add_composer_data(result: dict, facts: Any, coordinate: Optional[Mapping[str, Any]] = None) -> None:
    _add("composer", result, facts, coordinate)


def add_maven_data(result: dict, facts: Any, coordinate: Optional[Mapping[str, Any]] = None) -> None:
    _add("maven", result, facts, coordinate)


def add_git_data(result: dict, facts: Any, coordinate: Optional[Mapping[str, Any]] = None) -> None:
    _add("git", result, facts, coordinate)

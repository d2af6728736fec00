"""
This module orchestrates a summarization pass: it runs an ordered list of
contributors against one harvested-facts bundle and folds their partial
updates into a single canonical result.

Which contributors run, in which order, and what happens when two of them
write the same field (last writer wins or first writer wins) are explicit
parameters; the defaults come from `app.core.config`.
"""

import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Union

from app.core.config import SUMMARY_CONTRIBUTORS, SUMMARY_PRECEDENCE

from .accumulator import apply_update, check_policy
from .interesting_files import interesting_files_update
from .license_files import license_from_files_update
from .registry import registry_update

logger = logging.getLogger(__name__)

Contributor = Callable[[Any, Optional[Mapping[str, Any]]], dict]

CONTRIBUTORS: Dict[str, Contributor] = {
    "files": interesting_files_update,
    "license_files": license_from_files_update,
    "registry": registry_update,
}


def _resolve(contributor: Union[str, Contributor]) -> Contributor:
    if callable(contributor):
        return contributor
    try:
        return CONTRIBUTORS[contributor]
    except KeyError:
        raise ValueError(
            f"Unknown contributor '{contributor}', expected one of {', '.join(CONTRIBUTORS)}"
        ) from None


def summarize(
    coordinate: Optional[Mapping[str, Any]],
    facts: Any,
    contributors: Optional[Iterable[Union[str, Contributor]]] = None,
    policy: Optional[str] = None,
    result: Optional[dict] = None,
) -> dict:
    """
    Builds the canonical result for one component.

    Args:
        coordinate: package coordinate ({"type": "npm", "name": ..., ...}).
        facts: harvested-facts bundle (interestingFiles, registryData, manifest, ...).
        contributors: ordered contributor names (see CONTRIBUTORS) or callables
            `(facts, coordinate) -> partial update`.
        policy: "last-writer-wins" or "first-writer-wins".
        result: an existing result to fold into; a new one is created otherwise.

    Returns:
        dict: the canonical result ({"described", "licensed", "files"}, each optional).

    Raises:
        ValueError: unknown contributor name or precedence policy.
    """
    names = list(SUMMARY_CONTRIBUTORS if contributors is None else contributors)
    steps = [_resolve(contributor) for contributor in names]
    policy = check_policy(policy or SUMMARY_PRECEDENCE)
    if result is None:
        result = {}

    for step in steps:
        apply_update(result, step(facts, coordinate), policy)

    logger.info(
        "Summarized %s: declared=%s, %d file(s)",
        (coordinate or {}).get("type", "?") if isinstance(coordinate, Mapping) else "?",
        result.get("licensed", {}).get("declared"),
        len(result.get("files", [])),
    )
    return result

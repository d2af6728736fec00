"""
Module `interesting_files` — path keyed merge of harvested file descriptors.
"""

import logging
from typing import Any, Mapping, Optional

from app.services.spdx import normalize

from .accumulator import apply_update
from .summary_utils import get_value

logger = logging.getLogger(__name__)


def sanitize_file(descriptor: Any) -> Optional[dict]:
    """
    Returns a cleaned copy of a file descriptor, or None when it has no usable path.

    The `license` field is kept only when it normalizes, and then in its
    canonical form ("mit" -> "MIT"). Slash separated dual licenses are not
    split at file level: such a value is dropped like any unrecognized one.
    """
    if not isinstance(descriptor, Mapping):
        return None
    path = descriptor.get("path")
    if not isinstance(path, str) or not path:
        logger.debug("Skipping interesting file without path: %r", descriptor)
        return None

    sanitized = {key: value for key, value in descriptor.items() if key != "license"}
    license_expression = normalize(descriptor.get("license"), split_dual=False)
    if license_expression:
        sanitized["license"] = license_expression
    return sanitized


def interesting_files_update(facts: Any, coordinate: Optional[Mapping[str, Any]] = None) -> dict:
    """Partial update {"files": [...]} with the sanitized descriptors, {} when there are none."""
    files = get_value(facts, "interestingFiles")
    if not isinstance(files, list):
        return {}
    sanitized = [clean for clean in (sanitize_file(file) for file in files) if clean]
    return {"files": sanitized} if sanitized else {}


def add_interesting_files(result: dict, facts: Any) -> None:
    """Upserts the harvested interesting files into `result["files"]` by path."""
    apply_update(result, interesting_files_update(facts))

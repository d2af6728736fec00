"""
Module `license_files` — declared license from the package's license files.

Among the harvested interesting files, only those named like a license file
(LICENSE, COPYING, ...) and sitting where the package type keeps its own
license file are considered. Their detected licenses are normalized and
combined into a single SPDX conjunction.
"""

import logging
import posixpath
from typing import Any, Mapping, Optional

from app.services.spdx import join_expressions, normalize

from .accumulator import apply_update
from .ecosystems import license_locations
from .summary_utils import get_value

logger = logging.getLogger(__name__)

LICENSE_FILE_NAMES = frozenset({
    "license",
    "license.txt",
    "license.md",
    "license.html",
    "licence",
    "licence.txt",
    "licence.md",
    "copying",
    "copying.txt",
    "copying.md",
    "copying.html",
})


def is_license_file(path: Any, coordinate: Optional[Mapping[str, Any]] = None) -> bool:
    """
    Tells whether `path` is the package's own license file.

    The file must sit directly under one of the ecosystem's license
    locations; without a coordinate (or for an unknown type) only the tree
    root qualifies, so vendored license files never count.
    """
    if not isinstance(path, str) or not path:
        return False
    lowered = path.lower()
    basename = posixpath.basename(lowered)
    if basename not in LICENSE_FILE_NAMES:
        return False
    return any(prefix.lower() + basename == lowered for prefix in license_locations(coordinate))


def license_from_files_update(facts: Any, coordinate: Optional[Mapping[str, Any]] = None) -> dict:
    """
    Partial update {"licensed": {"declared": ...}} built from the license
    files, or {} when no license file contributes.
    """
    files = get_value(facts, "interestingFiles")
    if not isinstance(files, list):
        return {}

    licenses = []
    for file in files:
        if not isinstance(file, Mapping) or not is_license_file(file.get("path"), coordinate):
            continue
        expression = normalize(file.get("license"))
        if expression:
            licenses.append(expression)
        elif file.get("license"):
            logger.debug("License file %s: unrecognized license %r", file.get("path"), file.get("license"))

    declared = join_expressions(licenses, "AND")
    if not declared:
        return {}
    return {"licensed": {"declared": declared}}


def add_license_from_files(result: dict, facts: Any, coordinate: Optional[Mapping[str, Any]] = None) -> None:
    """Sets `licensed.declared` from the license files; untouched when none contributes."""
    apply_update(result, license_from_files_update(facts, coordinate))

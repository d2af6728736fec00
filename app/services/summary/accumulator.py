"""
Module `accumulator` — folding of partial updates into the canonical result.

The canonical result is a plain nested dict:

    {
        "described": {"projectWebsite": ..., "releaseDate": ..., ...},
        "licensed": {"declared": <SPDX expression>},
        "files": [{"path": ..., "token": ..., "license": ...}, ...],
    }

Contributors never write into it directly: they return a partial update of
the same shape and `apply_update` folds it in. Two rules are enforced here:
  - `files` is keyed by path: an incoming descriptor replaces the entry with
    the same path in place, otherwise it is appended (last seen wins);
  - any other leaf already present is overwritten or kept depending on the
    precedence policy.
Empty values are never written, so an absent key always means "no signal".
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .summary_utils import is_empty

logger = logging.getLogger(__name__)

LAST_WRITER_WINS = "last-writer-wins"
FIRST_WRITER_WINS = "first-writer-wins"
PRECEDENCE_POLICIES = (LAST_WRITER_WINS, FIRST_WRITER_WINS)

FILES_KEY = "files"


def check_policy(policy: str) -> str:
    """Validates a precedence policy name."""
    if policy not in PRECEDENCE_POLICIES:
        raise ValueError(
            f"Unknown precedence policy '{policy}', expected one of {', '.join(PRECEDENCE_POLICIES)}"
        )
    return policy


def merge_files(files: Optional[List[dict]], incoming: Iterable[dict]) -> List[dict]:
    """
    Upserts `incoming` descriptors into `files` by path and returns the list.

    `files` is updated in place when it is a list; None gives a new list.
    """
    if files is None:
        files = []

    positions: Dict[str, int] = {}
    for position, existing in enumerate(files):
        if isinstance(existing, dict) and "path" in existing:
            positions[existing["path"]] = position

    for descriptor in incoming:
        path = descriptor["path"]
        position = positions.get(path)
        if position is None:
            positions[path] = len(files)
            files.append(dict(descriptor))
        else:
            files[position] = dict(descriptor)

    return files


def _fold(target: dict, update: dict, policy: str, trail: str = "") -> None:
    for key, value in update.items():
        if is_empty(value):
            continue
        where = f"{trail}{key}"

        if isinstance(value, dict):
            child = target.get(key)
            if not isinstance(child, dict):
                child = {}
            _fold(child, value, policy, f"{where}.")
            if child:
                target[key] = child
            continue

        if policy == FIRST_WRITER_WINS and not is_empty(target.get(key)):
            if target[key] != value:
                logger.debug("Keeping %s=%r, ignoring later %r", where, target[key], value)
            continue

        target[key] = value


def apply_update(result: dict, update: Optional[Dict[str, Any]], policy: str = LAST_WRITER_WINS) -> dict:
    """
    Folds a contributor's partial update into `result` (mutated and returned).
    """
    check_policy(policy)
    if not update:
        return result

    for key, value in update.items():
        if key == FILES_KEY:
            if value:
                existing = result.get(FILES_KEY)
                result[FILES_KEY] = merge_files(existing if isinstance(existing, list) else None, value)
            continue
        _fold(result, {key: value}, policy)

    return result

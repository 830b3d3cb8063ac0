"""
Entitlement resolution.

Entitlement ids are flat strings. Two shapes exist:
    "<course>-block-<n>"  one block of a course
    "<course>-full"       every block of a course
"""

import re
from typing import FrozenSet, Iterable, Optional

BLOCK_ID_PATTERN = re.compile(r"^(?P<course>[a-z0-9][a-z0-9-]*?)-block-(?P<number>[1-9][0-9]*)$")
FULL_ID_PATTERN = re.compile(r"^(?P<course>[a-z0-9][a-z0-9-]*?)-full$")


def make_block_id(course_id: str, number: int) -> str:
    return f"{course_id}-block-{number}"


def make_full_id(course_id: str) -> str:
    return f"{course_id}-full"


def course_of(entitlement_id: str) -> Optional[str]:
    """Course id of a block or full-course entitlement, None for anything else."""
    match = BLOCK_ID_PATTERN.match(entitlement_id) or FULL_ID_PATTERN.match(entitlement_id)
    return match.group("course") if match else None


def satisfying_entitlements(target_id: str) -> FrozenSet[str]:
    """
    Every entitlement id that grants access to target_id.

    A block is satisfied by itself or by its course bundle. Anything else is
    satisfied only by itself.
    """
    match = BLOCK_ID_PATTERN.match(target_id)
    if match is None:
        return frozenset({target_id})
    return frozenset({target_id, make_full_id(match.group("course"))})


def has_access(entitlements: Iterable[str], target_id: str) -> bool:
    owned = entitlements if isinstance(entitlements, (set, frozenset)) else set(entitlements)
    return not owned.isdisjoint(satisfying_entitlements(target_id))

"""Rhyme scheme validation over per-line rhyme keys."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from .models import RhymeGroups, freeze_groups


@dataclass(frozen=True)
class RhymeValidation:
    valid: bool
    issues: Tuple[str, ...]
    groups: RhymeGroups = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "groups", freeze_groups(self.groups))


def group_lines(rhyme_keys: Sequence[str], scheme: Sequence[str]) -> Dict[str, List[int]]:
    """Map each scheme label to the 0-based indices of its lines."""

    groups: Dict[str, List[int]] = {}
    for index in range(min(len(rhyme_keys), len(scheme))):
        groups.setdefault(scheme[index], []).append(index)
    return groups


def validate_rhyme_scheme(rhyme_keys: Sequence[str], scheme: Sequence[str]) -> RhymeValidation:
    """Check that every line sharing a scheme label shares a rhyme key.

    Groups with a single line are never checked. A group may report both an
    inconsistency and an unresolved member.
    """

    groups = group_lines(rhyme_keys, scheme)
    issues: List[str] = []

    for label, indices in groups.items():
        if len(indices) <= 1:
            continue

        keys = [rhyme_keys[index] for index in indices]
        resolved = [key for key in keys if key]
        distinct = list(dict.fromkeys(resolved))

        if len(distinct) > 1:
            issues.append(f"Rhyme group {label} has inconsistent rhymes: {', '.join(distinct)}")
        if len(resolved) < len(keys):
            issues.append(f"Rhyme group {label} contains words not found in dictionary")

    return RhymeValidation(
        valid=not issues,
        issues=tuple(issues),
        groups=groups,
    )


__all__ = ["RhymeValidation", "group_lines", "validate_rhyme_scheme"]

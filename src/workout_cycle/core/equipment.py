"""
Equipment resolution.

Questionnaire answers arrive in three categories (household items, home
equipment, gym equipment) or, for older profiles, as one flat list.  Every
selection is mapped to the equipment tokens the catalog understands:

  free_weights   -> dumbbells, barbells
  bench_press    -> barbells, machines
  mat_available  -> yoga_mat, bodyweight
  chair / wall / stairs / water bottles -> bodyweight

The result always includes ``bodyweight`` so that bodyweight work is
available to everybody.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .config import BODYWEIGHT_TOKENS, EQUIPMENT_MAPPING, EQUIPMENT_TOKENS

logger = logging.getLogger(__name__)

CATEGORY_KEYS: tuple[str, ...] = ("bodyweight_items", "home_equipment", "gym_equipment")
LEGACY_KEYS: tuple[str, ...] = ("equipment", "equipment_available")


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Iterable):
        return [str(v) for v in value]
    return []


def map_selection(item: str) -> tuple[str, ...]:
    """
    Map one questionnaire selection to catalog tokens.

    Args:
        item: Selection id (e.g. "free_weights") or an already-canonical token

    Returns:
        Tuple of tokens; empty for unknown items.
    """
    key = item.strip().lower()
    if key in EQUIPMENT_MAPPING:
        return EQUIPMENT_MAPPING[key]
    if key in BODYWEIGHT_TOKENS:
        return ("bodyweight",)
    if key in EQUIPMENT_TOKENS:
        return (key,)
    return ()


def _collect_items(raw: Any) -> list[str]:
    if raw is None:
        return []
    if not isinstance(raw, Mapping):
        return _as_list(raw)

    categorized: list[str] = []
    for key in CATEGORY_KEYS:
        categorized.extend(_as_list(raw.get(key)))
    if categorized:
        return categorized

    legacy: list[str] = []
    for key in LEGACY_KEYS:
        legacy.extend(_as_list(raw.get(key)))
    return legacy


def resolve_equipment(raw: Any) -> frozenset[str]:
    """
    Resolve questionnaire answers to the set of owned equipment tokens.

    Args:
        raw: Mapping with any of bodyweight_items / home_equipment /
            gym_equipment (or the legacy equipment / equipment_available key),
            or a flat iterable of selections.  None is treated as empty.

    Returns:
        Frozen set of catalog tokens, always containing "bodyweight".

    The legacy keys are consulted only when all three categories are empty.
    Unknown selections are ignored.  Resolving an already-resolved set
    returns the same set.
    """
    tokens: set[str] = {"bodyweight"}
    for item in _collect_items(raw):
        mapped = map_selection(item)
        if not mapped:
            logger.debug("Ignoring unknown equipment selection %r", item)
            continue
        tokens.update(mapped)
    return frozenset(tokens)


def has_equipment(exercise_equipment: str, owned: Iterable[str]) -> bool:
    """True if an exercise needing *exercise_equipment* can be done with *owned*."""
    return exercise_equipment in BODYWEIGHT_TOKENS or exercise_equipment in set(owned)

"""Turn loosely shaped model output into ``CategoryScore`` lists.

The scoring model is asked for ``{"<category>": <score>, ...}`` but in
practice also answers with lists of ``{"name": ..., "value": ...}`` records,
nested ``{"score": ...}`` objects and numbers encoded as strings. Both
shapes are accepted here; anything else normalizes to an empty list.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping

from .numeric import coerce_to_finite_number, first_present, is_number, js_text
from .schemas import CategoryScore

OVERALL_CATEGORY = "overall"

_CATEGORY_KEYS = ("category", "name", "key", "id")


def category_text(value: Any) -> str:
    return js_text(value)


def _entry_score(entry: Mapping[str, Any]) -> float:
    score = entry.get("score")
    value = entry.get("value")
    if is_number(score):
        raw = score
    elif is_number(value):
        raw = value
    else:
        raw = first_present((score, value), 0)
    # NaN, infinities and unparseable text all end up as 0
    return coerce_to_finite_number(raw)


def _normalize_entries(entries: List[Any]) -> List[CategoryScore]:
    out: List[CategoryScore] = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            # scalars and nulls carry no fields
            entry = {}
        category = first_present((entry.get(k) for k in _CATEGORY_KEYS), OVERALL_CATEGORY)
        out.append(CategoryScore(category=category_text(category), score=_entry_score(entry)))
    return out


def _normalize_mapping(mapping: Dict[str, Any]) -> List[CategoryScore]:
    out: List[CategoryScore] = []
    for category, value in mapping.items():
        if isinstance(value, Mapping) and "score" in value:
            value = value["score"]
        out.append(CategoryScore(category=str(category), score=coerce_to_finite_number(value)))
    return out


def normalize_scores(raw: Any) -> List[CategoryScore]:
    if isinstance(raw, list):
        return _normalize_entries(raw)
    if isinstance(raw, dict):
        return _normalize_mapping(raw)
    return []

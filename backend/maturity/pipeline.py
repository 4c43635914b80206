from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from .growth import simulate
from .normalize import normalize_scores
from .schemas import CategoryScore, GrowthSimulation


@dataclass
class AssessmentResult:
    scores: List[CategoryScore]
    analysis: Any
    options: Any
    benchmarks: Any
    growth_simulation: GrowthSimulation

    def scores_payload(self) -> List[Dict[str, Any]]:
        return [s.model_dump() for s in self.scores]

    def growth_simulation_payload(self) -> Dict[str, Any]:
        return self.growth_simulation.model_dump(by_alias=True)


def _section(parsed: Dict[str, Any], key: str) -> Any:
    value = parsed.get(key)
    return {} if value is None else value


def build_assessment_result(parsed: Any) -> AssessmentResult:
    """Normalize a parsed model reply and derive the Crawl/Walk/Run projection.

    ``analysis``, ``options`` and ``benchmarks`` are passed through as the
    model sent them; only ``scores`` is reshaped. Any ``growthSimulation``
    the model produced is ignored in favour of the computed one.
    """
    if not isinstance(parsed, dict):
        parsed = {}
    scores = normalize_scores(_section(parsed, "scores"))
    benchmarks = _section(parsed, "benchmarks")
    return AssessmentResult(
        scores=scores,
        analysis=_section(parsed, "analysis"),
        options=_section(parsed, "options"),
        benchmarks=benchmarks,
        growth_simulation=simulate(scores, benchmarks),
    )

from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping, Sequence

from .normalize import OVERALL_CATEGORY
from .numeric import clamp, is_number, round_score
from .schemas import CategoryScore, GrowthSimulation, GrowthSimulationCategory

# Crawl/Walk/Run close this share of the gap to the benchmark
STAGE_MULTIPLIERS: Dict[str, float] = {"crawl": 0.3, "walk": 0.6, "run": 0.9}

# Midpoint of the 1-5 maturity scale, used when a category has no usable benchmark
DEFAULT_BENCHMARK = 3.0


def _finite(value: Any) -> bool:
    try:
        return is_number(value) and math.isfinite(value)
    except OverflowError:
        return False


def benchmark_for(category: str, benchmarks: Any) -> float:
    if not isinstance(benchmarks, Mapping):
        return DEFAULT_BENCHMARK
    entry = benchmarks.get(category)
    if entry is None:
        return DEFAULT_BENCHMARK
    if _finite(entry):
        return float(entry)
    if isinstance(entry, Mapping) and _finite(entry.get("score")):
        return float(entry["score"])
    return DEFAULT_BENCHMARK


def simulate_stage(
    scores: Sequence[CategoryScore],
    benchmarks: Any,
    multiplier: float,
) -> List[GrowthSimulationCategory]:
    stage: List[GrowthSimulationCategory] = []
    for item in scores:
        if item.category == OVERALL_CATEGORY:
            continue
        # out-of-scale benchmarks are pulled onto the scale before interpolating
        benchmark = clamp(benchmark_for(item.category, benchmarks))
        gap = benchmark - item.score
        after = clamp(item.score + gap * multiplier)
        stage.append(
            GrowthSimulationCategory(
                category=item.category,
                current_score=round_score(item.score),
                after_score=round_score(after),
                benchmark_score=round_score(benchmark),
            )
        )
    return stage


def simulate(scores: Sequence[CategoryScore], benchmarks: Any) -> GrowthSimulation:
    """Project each category toward its benchmark at the three stage intensities.

    The aggregate ``overall`` score is never projected. Output order follows
    ``scores``; every stage carries the same categories.
    """
    return GrowthSimulation(
        **{stage: simulate_stage(scores, benchmarks, m) for stage, m in STAGE_MULTIPLIERS.items()}
    )

from __future__ import annotations

import json
from typing import Any, List, Optional

DEFAULT_CATEGORIES: List[str] = ["data", "channels", "technology", "content", "strategy"]


def resolve_categories(selected: Any) -> List[str]:
    if isinstance(selected, list):
        return [str(c) for c in selected]
    return list(DEFAULT_CATEGORIES)


def build_system_prompt(business_type: Optional[str], categories: List[str]) -> str:
    audience = business_type or "B2B/B2C"
    return (
        "You are a senior B2B/B2C marketing consultant helping small and mid-sized businesses "
        "understand their marketing maturity.\n\n"
        "Your job:\n"
        "1. Read the raw answers from the assessment.\n"
        "2. Score the company's current marketing maturity for each selected category on a 1-5 scale.\n"
        f"3. Compare those scores to realistic industry benchmarks for a company of similar size and type (SME, {audience}).\n"
        "4. Explain in clear, jargon-free language what they are doing well, where they are behind the "
        "benchmark, and what they should focus on next at Crawl, Walk and Run stages.\n\n"
        "Return ONLY a valid JSON object in this exact shape:\n"
        "{\n"
        '  "scores": {"overall": <number 1-5>, "<category>": <number 1-5>},\n'
        '  "analysis": {\n'
        '    "overallSummary": "<2-3 sentence plain-English summary>",\n'
        '    "perCategory": [{"category": "<name>", "headline": "<one line>", '
        '"doingWell": ["<bullet>"], "behind": ["<bullet>"]}]\n'
        "  },\n"
        '  "benchmarks": {"<category>": {"label": "<short label>", "score": <number 1-5>}},\n'
        '  "options": {\n'
        '    "crawl": {"label": "Crawl (Foundations)", "summary": "<text>", "actions": ["<action>"]},\n'
        '    "walk": {"label": "Walk (Accelerate)", "summary": "<text>", "actions": ["<action>"]},\n'
        '    "run": {"label": "Run (Scale & Optimize)", "summary": "<text>", "actions": ["<action>"]}\n'
        "  },\n"
        '  "growthSimulation": {"crawl": {"<category>": <score>}, "walk": {"<category>": <score>}, '
        '"run": {"<category>": <score>}}\n'
        "}\n\n"
        "Rules:\n"
        f"- Only include categories that are in this list: {json.dumps(categories)}.\n"
        '- Always include "overall" in scores and growthSimulation.\n'
        "- Every number must be between 1 and 5.\n"
        "- Bullets must be specific and actionable, max 1-2 sentences each.\n"
        "- Keep all language simple enough for a non-technical marketing leader to understand."
    )


def build_user_content(business_type: Optional[str], categories: List[str], answers: Any) -> str:
    return json.dumps(
        {"businessType": business_type, "selectedCategories": categories, "answers": answers},
        indent=2,
    )

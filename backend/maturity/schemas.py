from __future__ import annotations
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CategoryScore(CamelModel):
	category: str
	score: float


class BenchmarkEntry(CamelModel):
	label: Optional[str] = None
	score: Optional[float] = None


class GrowthSimulationCategory(CamelModel):
	category: str
	current_score: float
	after_score: float
	benchmark_score: float


class GrowthSimulation(CamelModel):
	crawl: List[GrowthSimulationCategory] = Field(default_factory=list)
	walk: List[GrowthSimulationCategory] = Field(default_factory=list)
	run: List[GrowthSimulationCategory] = Field(default_factory=list)


class UserInfo(CamelModel):
	first_name: Optional[str] = None
	email: Optional[str] = None
	business_name: Optional[str] = None
	country: Optional[str] = None
	industry: Optional[str] = None


class StartAssessmentRequest(CamelModel):
	business_type: Optional[str] = None
	user_info: Optional[UserInfo] = None
	# Lists are stringified item by item; anything else is ignored
	selected_categories: Optional[Any] = None


class StartAssessmentResponse(CamelModel):
	assessment_id: str


class SubmitAssessmentRequest(CamelModel):
	business_type: Optional[str] = None
	selected_categories: Optional[Any] = None
	answers: Optional[Any] = None


class AssessmentResultResponse(CamelModel):
	assessment_id: str
	scores: List[CategoryScore]
	analysis: Any = None
	options: Any = None
	benchmarks: Any = None
	growth_simulation: GrowthSimulation


class AssessmentResponse(CamelModel):
	assessment_id: str
	scores: List[CategoryScore]
	analysis: Any = None
	options: Any = None
	# Stored verbatim; older rows may not match the simulator's shape
	growth_simulation: Any = None
	benchmarks: Any = None
	status: str

from __future__ import annotations
import logging
from typing import Callable

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..db import get_db
from ..normalize import normalize_scores
from ..pipeline import build_assessment_result
from ..prompts import build_system_prompt, build_user_content, resolve_categories
from ..schemas import (
	AssessmentResponse,
	AssessmentResultResponse,
	StartAssessmentRequest,
	StartAssessmentResponse,
	SubmitAssessmentRequest,
)
from ..scoring_client import (
	ModelOutputError,
	ScoringClient,
	get_scoring_client_factory,
	parse_model_json,
)
from .. import store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/assessments", tags=["assessments"])

BUSINESS_TYPES = ("B2B", "B2C")


def _require_text(value: str | None, field: str) -> str:
	if not value or not value.strip():
		raise HTTPException(status_code=400, detail=f"userInfo.{field} is required.")
	return value


@router.post("/start", response_model=StartAssessmentResponse)
def start_assessment(req: StartAssessmentRequest, db: Session = Depends(get_db)):
	if req.business_type not in BUSINESS_TYPES:
		raise HTTPException(status_code=400, detail="businessType must be 'B2B' or 'B2C'")
	info = req.user_info
	if info is None:
		raise HTTPException(status_code=400, detail="userInfo is required")
	first_name = _require_text(info.first_name, "firstName")
	email = _require_text(info.email, "email")
	business_name = _require_text(info.business_name, "businessName")
	categories = resolve_categories(req.selected_categories) if isinstance(req.selected_categories, list) else []
	try:
		user = store.find_or_create_user(
			db,
			email=email,
			first_name=first_name,
			business_name=business_name,
			country=info.country,
			industry=info.industry,
		)
		row = store.create_assessment(db, user, req.business_type, categories)
	except store.StorageError:
		logger.exception("Error starting assessment")
		raise HTTPException(status_code=500, detail="Failed to start assessment.")
	return StartAssessmentResponse(assessment_id=row.id)


@router.post("/{assessment_id}/submit", response_model=AssessmentResultResponse)
async def submit_assessment(
	assessment_id: str,
	req: SubmitAssessmentRequest,
	db: Session = Depends(get_db),
	make_client: Callable[[], ScoringClient] = Depends(get_scoring_client_factory),
):
	answers = req.answers
	# any JSON object or array is accepted, including an empty one
	if not isinstance(answers, (dict, list)):
		raise HTTPException(status_code=400, detail="answers object is required for scoring.")
	row = store.get_assessment(db, assessment_id)
	if row is None:
		raise HTTPException(status_code=404, detail="Assessment not found.")
	business_type = req.business_type or row.business_type
	categories = resolve_categories(req.selected_categories)
	try:
		client = make_client()
		try:
			model_out = await client.complete_json(
				build_system_prompt(business_type, categories),
				build_user_content(business_type, categories, answers),
			)
		finally:
			await client.aclose()
		try:
			parsed = parse_model_json(model_out)
		except ModelOutputError:
			logger.error("Error parsing model response for assessment %s: %r", assessment_id, model_out[:500])
			raise HTTPException(status_code=500, detail="Failed to parse AI assessment results.")
		result = build_assessment_result(parsed)
		try:
			store.complete_assessment(db, row, answers, result)
		except store.StorageError:
			raise HTTPException(status_code=500, detail="Failed to store assessment results.")
	except HTTPException:
		raise
	except Exception:
		logger.exception("Error in /api/assessments/%s/submit", assessment_id)
		raise HTTPException(status_code=500, detail="Failed to generate assessment results.")
	return AssessmentResultResponse(
		assessment_id=assessment_id,
		scores=result.scores,
		analysis=result.analysis,
		options=result.options,
		benchmarks=result.benchmarks,
		growth_simulation=result.growth_simulation,
	)


@router.get("/{assessment_id}", response_model=AssessmentResponse)
def get_assessment(assessment_id: str, db: Session = Depends(get_db)):
	row = store.get_assessment(db, assessment_id)
	if row is None:
		raise HTTPException(status_code=404, detail="Assessment not found.")
	return AssessmentResponse(
		assessment_id=row.id,
		scores=normalize_scores(row.scores),
		analysis=row.analysis,
		options=row.options,
		growth_simulation=row.growth_simulation,
		benchmarks=row.benchmarks,
		status=row.status,
	)


@router.post("/{assessment_id}/pdf")
def export_pdf(assessment_id: str):
	# TODO: render the stored result once a PDF renderer is chosen
	return JSONResponse(status_code=501, content={"error": "PDF export is not implemented yet. Coming soon!"})

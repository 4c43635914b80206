from __future__ import annotations
import json
import logging
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import Assessment, User
from .pipeline import AssessmentResult

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
	pass


def find_or_create_user(
	db: Session,
	*,
	email: str,
	first_name: str,
	business_name: str,
	country: Optional[str] = None,
	industry: Optional[str] = None,
) -> User:
	email = email.strip()
	try:
		user = db.query(User).filter(User.email == email).first()
		if user is not None:
			return user
		user = User(
			email=email,
			first_name=first_name.strip(),
			last_name="",
			phone=None,
			business_name=business_name.strip(),
			country=country or None,
			industry=industry or None,
			company_size=None,
		)
		db.add(user)
		db.commit()
		db.refresh(user)
		return user
	except SQLAlchemyError as exc:
		db.rollback()
		raise StorageError("failed to look up or create user") from exc


def create_assessment(db: Session, user: User, business_type: str, categories: List[str]) -> Assessment:
	try:
		row = Assessment(
			user_id=user.id,
			business_type=business_type,
			selected_categories_json=json.dumps(categories),
			status="started",
		)
		db.add(row)
		db.commit()
		db.refresh(row)
		return row
	except SQLAlchemyError as exc:
		db.rollback()
		raise StorageError("failed to create assessment") from exc


def get_assessment(db: Session, assessment_id: str) -> Optional[Assessment]:
	return db.get(Assessment, assessment_id)


def complete_assessment(db: Session, row: Assessment, raw_answers: Any, result: AssessmentResult) -> Assessment:
	try:
		row.raw_answers_json = json.dumps(raw_answers)
		row.scores_json = json.dumps(result.scores_payload())
		row.analysis_json = json.dumps(result.analysis)
		row.options_json = json.dumps(result.options)
		row.benchmarks_json = json.dumps(result.benchmarks)
		row.growth_simulation_json = json.dumps(result.growth_simulation_payload())
		row.status = "completed"
		row.completed_at = datetime.utcnow()
		db.add(row)
		db.commit()
		return row
	except SQLAlchemyError as exc:
		db.rollback()
		logger.error("Error updating assessment %s: %s", row.id, exc)
		raise StorageError("failed to store assessment results") from exc

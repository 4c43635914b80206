from __future__ import annotations
import json
import uuid
from datetime import datetime
from typing import Any
from sqlalchemy import Column, String, DateTime, Text, ForeignKey
from .db import Base


def _new_id() -> str:
	return uuid.uuid4().hex


def _loads(value: str | None) -> Any:
	if value is None:
		return None
	return json.loads(value)


def _dumps(value: Any) -> str | None:
	if value is None:
		return None
	return json.dumps(value)


class User(Base):
	__tablename__ = "users"
	id = Column(String(32), primary_key=True, default=_new_id)
	email = Column(String(256), unique=True, index=True, nullable=False)
	first_name = Column(String(128), nullable=False)
	last_name = Column(String(128), default="", nullable=False)
	phone = Column(String(32), nullable=True)
	business_name = Column(String(256), nullable=False)
	country = Column(String(128), nullable=True)
	industry = Column(String(128), nullable=True)
	company_size = Column(String(64), nullable=True)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Assessment(Base):
	__tablename__ = "assessments"
	id = Column(String(32), primary_key=True, default=_new_id)
	user_id = Column(String(32), ForeignKey("users.id"), index=True, nullable=False)
	business_type = Column(String(8), nullable=False)
	status = Column(String(16), default="started", nullable=False)
	# JSON snapshots
	selected_categories_json = Column(Text, nullable=True)
	raw_answers_json = Column(Text, nullable=True)
	scores_json = Column(Text, nullable=True)
	analysis_json = Column(Text, nullable=True)
	options_json = Column(Text, nullable=True)
	benchmarks_json = Column(Text, nullable=True)
	growth_simulation_json = Column(Text, nullable=True)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	completed_at = Column(DateTime, nullable=True)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=True)

	@property
	def selected_categories(self) -> Any:
		return _loads(self.selected_categories_json)

	@property
	def raw_answers(self) -> Any:
		return _loads(self.raw_answers_json)

	@property
	def scores(self) -> Any:
		return _loads(self.scores_json)

	@property
	def analysis(self) -> Any:
		return _loads(self.analysis_json)

	@property
	def options(self) -> Any:
		return _loads(self.options_json)

	@property
	def benchmarks(self) -> Any:
		return _loads(self.benchmarks_json)

	@property
	def growth_simulation(self) -> Any:
		return _loads(self.growth_simulation_json)

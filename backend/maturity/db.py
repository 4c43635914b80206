from __future__ import annotations
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import sessionmaker, declarative_base
from .settings import settings, DEFAULT_DATABASE_URL


DATABASE_URL = settings.database_url or DEFAULT_DATABASE_URL

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=_connect_args, future=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
Base = declarative_base()


def get_db():
	db = SessionLocal()
	try:
		yield db
	finally:
		db.close()


# Columns added after the first release of the assessments table
_ASSESSMENT_COLUMNS = {
	"benchmarks_json": "TEXT",
	"completed_at": "DATETIME",
	"updated_at": "DATETIME",
}


# Best-effort lightweight migrations for development (SQLite-friendly)
def ensure_schema(bind=None) -> None:
	bind = bind or engine
	try:
		inspector = inspect(bind)
		tables = set(inspector.get_table_names())
	except Exception:
		return
	if "assessments" in tables:
		cols = {c["name"] for c in inspector.get_columns("assessments")}
		with bind.begin() as conn:
			for name, ddl_type in _ASSESSMENT_COLUMNS.items():
				if name not in cols:
					conn.exec_driver_sql(f"ALTER TABLE assessments ADD COLUMN {name} {ddl_type}")

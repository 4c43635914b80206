from dataclasses import asdict
from datetime import datetime, timezone

from fastapi import APIRouter

from ..settings import settings, validate_configuration

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
	return {
		"status": "ok",
		"service": settings.service_name,
		"timestamp": datetime.now(timezone.utc).isoformat(),
		"configuration": [asdict(d) for d in validate_configuration(settings)],
	}

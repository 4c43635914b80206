import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .db import Base, engine, ensure_schema
from .settings import settings, validate_configuration
from .routers import health, assessments

logger = logging.getLogger(__name__)

ENDPOINTS = (
	"GET    /health",
	"POST   /api/assessments/start",
	"POST   /api/assessments/:id/submit",
	"GET    /api/assessments/:id",
	"POST   /api/assessments/:id/pdf",
)

app = FastAPI(title="Marketing Maturity Assessment API")
app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.cors_origin_list,
	allow_methods=["GET", "POST", "OPTIONS"],
	allow_headers=["Content-Type", "Authorization"],
)
app.include_router(health.router)
app.include_router(assessments.router)


# The frontend reads failures from an "error" key
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
	return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
	return JSONResponse(status_code=400, content={"error": "Invalid request body.", "details": jsonable_errors(exc)})


def jsonable_errors(exc: RequestValidationError):
	return [{"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()]


@app.on_event("startup")
async def startup_event():
	logging.basicConfig(level=settings.log_level.upper())
	for diagnostic in validate_configuration(settings):
		log = logger.warning if diagnostic.severity == "warning" else logger.info
		log("%s: %s", diagnostic.setting, diagnostic.message)
	# Initialize DB schema
	Base.metadata.create_all(bind=engine)
	# Apply lightweight dev migrations
	try:
		ensure_schema()
	except Exception:
		logger.exception("Schema migration failed")
	logger.info("%s ready. Endpoints:\n%s", settings.service_name, "\n".join(ENDPOINTS))

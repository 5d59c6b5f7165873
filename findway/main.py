import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from findway.config import get_settings
from findway.core.exceptions import AssessmentException
from findway.core.logging import configure_logging
from findway.routers.assessment import assessment_exception_handler
from findway.routers.assessment import router as assessment_router
from findway.routers.health import router as health_router

settings = get_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)

# SWAGGER UI - tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Assessments"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(AssessmentException, assessment_exception_handler)

# REGISTER ROUTERS
app.include_router(health_router)       # Health
app.include_router(assessment_router)   # Assessments


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# STARTUP EVENT
@app.on_event("startup")
async def startup_event():
    logger.info("Starting %s (%s)", settings.APP_NAME, settings.APP_ENV)
    logger.info("Swagger UI available at: http://localhost:8000/docs")


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "findway.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )

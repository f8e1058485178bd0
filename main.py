import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.logging_config import setup_logging
from config.settings import assessment_settings
from src.routers import assessment as assessment_router
from src.services.storage import close_result_store

setup_logging(assessment_settings.log_level)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Career Readiness Assessment Engine starting up...")
    yield # Service runs here
    # Shutdown logic
    logger.info("Career Readiness Assessment Engine shutting down...")
    close_result_store()

app = FastAPI(title="Career Readiness Assessment Engine - Main API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Include Routers ---
app.include_router(assessment_router.router, prefix="/api/v1", tags=["assessment"])

@app.get("/health", tags=["Health Check"])
async def health():
    """
    Basic health check.
    """
    return {"status": "ok", "message": "Career Readiness Assessment Engine is running."}


if __name__ == "__main__":
    import uvicorn
    # Better to run with `uvicorn main:app --reload` from the project root directory
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)

import os
import logging
from typing import Dict, Any

from dotenv import load_dotenv

# Load environment variables before the routers read their settings
load_dotenv()

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from models.responses import HealthResponse
from routers.auth import router as auth_router
from routers.flights import router as flights_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

# Configuration
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]


app = FastAPI(
    title="Paragliding Dashboard API",
    description=(
        "## Paragliding Dashboard API\n\n"
        "Personal flight statistics from the DHV-XC flight database:\n\n"
        "- **Authentication** — Log in with DHV-XC credentials, check and end the session\n"
        "- **Flights** — Total and average distance, best score, flights per month and recent flights\n"
    ),
    version=API_VERSION,
    debug=DEBUG,
    openapi_version="3.0.2",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(flights_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 instead of FastAPI's 422."""
    logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request body"},
    )


# ── Root-level endpoints ──────────────────────────────────────────────────────

@app.get("/")
async def root() -> Dict[str, Any]:
    """API information"""
    return {
        "name": "Paragliding Dashboard API",
        "version": API_VERSION,
        "status": "operational",
        "documentation": "/docs",
    }


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Simple health check endpoint"""
    return HealthResponse(status="healthy", version=API_VERSION)


# Application entry point
if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=port,
        reload=DEBUG,
        access_log=DEBUG
    )

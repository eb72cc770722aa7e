"""
backend/main.py
═══════════════
FastAPI application for PartnerMatch — practice-partner recommendations
for players who have finished onboarding.

Endpoints
─────────
  GET    /health                              — Liveness / readiness probe
  GET    /api/partners/find                   — Ranked partners for the signed-in
                                                player, with per-term score breakdown
  POST   /api/partners/request                — Send a practice request
  GET    /api/partners/requests               — Sent / received requests
  PATCH  /api/partners/requests/{request_id}  — Accept, decline or counter
  GET    /api/partners/connections            — Accepted partners
  GET    /api/admin/partners                  — Admin request overview

  Run with:
      uvicorn backend.main:app --reload --host 0.0.0.0 --port 8000
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.dependencies import get_repository
from backend.routers import admin, partners
from backend.schemas import HealthResponse
from config.settings import get_settings
from models.repository import RepositoryError
from utils.logger import logger

# ─────────────────────────────────────────────────────────────────────────────
#  App initialisation
# ─────────────────────────────────────────────────────────────────────────────

app = FastAPI(
    title="PartnerMatch — Practice Partner API",
    description=(
        "Scores onboarded players against the signed-in player on skill, "
        "goals, coaching style, availability and location, and manages "
        "practice-partner requests."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(partners.router)
app.include_router(admin.router)


@app.exception_handler(RepositoryError)
async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    logger.opt(exception=exc).error(f"Repository failure on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ─────────────────────────────────────────────────────────────────────────────
#  Health check
# ─────────────────────────────────────────────────────────────────────────────

@app.get("/health", response_model=HealthResponse, tags=["Meta"])
def health_check() -> HealthResponse:
    """
    Liveness & readiness probe.
    Returns how many users are loaded and how many could be recommended.
    """
    try:
        repo = get_repository()
        return HealthResponse(
            status="ok",
            users_loaded=len(repo),
            candidates_available=repo.count_onboarded(),
        )
    except RepositoryError as exc:
        logger.warning(f"Health check degraded: {exc}")
        return HealthResponse(
            status=f"degraded: {exc}",
            users_loaded=0,
            candidates_available=0,
        )


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "backend.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "development",
    )

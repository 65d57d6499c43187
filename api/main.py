"""FastAPI application for the Evidence Coverage API."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routers import coverage

API_VERSION = "0.1.0"

# Create FastAPI app
app = FastAPI(
    title="Evidence Coverage API",
    description="""
    REST API for computing how much of an impact claim's date span is backed by evidence.

    Provides access to:
    - Claim coverage percentage and uncovered date gaps
    - Per-evidence "covers X of Y days" counts
    - Metric-level rollups grouped by claim dates
    """,
    version=API_VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

# Configure CORS for the reporting frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",  # Vite dev server
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(coverage.router, prefix="/api")


@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": API_VERSION}


@app.get("/")
def root():
    """Root endpoint - redirect to docs."""
    return {
        "message": "Evidence Coverage API",
        "docs": "/api/docs",
        "health": "/api/health",
    }


if __name__ == "__main__":
    import uvicorn

    from evidence_coverage.logging_config import configure_logging

    configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=8000)

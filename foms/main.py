"""Main FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from foms.config import get_settings
from foms.database import engine, Base
from foms.logging_config import configure_logging
from foms.api.routes import router
# Import models to register them with SQLAlchemy Base
from foms.models.domain import FomsRequest, FomsStatus, AuthSetting

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)

# Create FastAPI app
app = FastAPI(
    title="FOMS - Facility Access Requests",
    description="Submit, search, approve and deny facility-access requests.",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(router, prefix="/api", tags=["FOMS"])


# Health check
@app.get("/health")
def health_check():
    return {"status": "healthy", "service": "FOMS"}


logger.info("FOMS API ready")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

"""
Main FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from autocare.config import get_settings
from autocare.database import get_db, init_db
from autocare.exceptions import WorkshopError
from autocare.routers import auth, bookings, customers, dashboard, receipts, services, staff

settings = get_settings()

logger = logging.getLogger(__name__)


def configure_logging(level: str = settings.log_level) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan events for the application.
    Handles startup and shutdown events.
    """
    # Startup
    configure_logging()
    print("🚀 Starting AutoCare Workshop...")
    print("📊 Initializing database...")
    await init_db()
    print("✅ Database initialized successfully")
    print(f"🌐 API available at: {settings.api_v1_prefix}")
    print("📖 Interactive docs: http://localhost:8000/docs")

    yield

    # Shutdown
    print("👋 Shutting down AutoCare Workshop...")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    ## 🔧 AutoCare Workshop API

    Day-to-day operations for a car-service workshop.

    ### Entities:
    * **Staff**: PIN login and staff management
    * **Services**: The priced service catalogue
    * **Bookings**: Jobs for a customer's car, from pending to paid to completed
    * **Customers**: Customer history, looked up by phone number
    * **Receipts**: Printable and downloadable HTML receipts
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(WorkshopError)
async def workshop_error_handler(request: Request, exc: WorkshopError):
    logger.info("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# Include routers
app.include_router(auth.router, prefix=settings.api_v1_prefix)
app.include_router(staff.router, prefix=settings.api_v1_prefix)
app.include_router(services.router, prefix=settings.api_v1_prefix)
app.include_router(bookings.router, prefix=settings.api_v1_prefix)
app.include_router(customers.router, prefix=settings.api_v1_prefix)
app.include_router(receipts.router, prefix=settings.api_v1_prefix)
app.include_router(dashboard.router, prefix=settings.api_v1_prefix)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": f"Welcome to {settings.app_name} API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


@app.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Health check endpoint that pings the database."""
    try:
        await db.execute(text("SELECT 1"))
    except Exception as exc:
        logger.exception("Health check database ping failed")
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "timestamp": datetime.now().isoformat(),
                "database": "disconnected",
                "error": str(exc),
            },
        )
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "database": "connected",
        "version": settings.app_version,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "autocare.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )

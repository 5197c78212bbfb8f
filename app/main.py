"""FastAPI application entry point."""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.database import database
from app.logging_config import configure_logging
from app.repositories.factory import create_goal_repository, create_user_repository
from app.routers import users, weight_goals
from app.services.profile_lookup import create_profile_lookup
from app.utils.locks import KeyedLocks


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    # Startup
    configure_logging(settings.log_level)
    if settings.storage_backend == "mongodb":
        await database.connect()
    app.state.user_repository = create_user_repository(database)
    app.state.goal_repository = create_goal_repository(database)
    app.state.profile_lookup = create_profile_lookup(app.state.user_repository)
    app.state.goal_locks = KeyedLocks()
    yield
    # Shutdown
    await database.disconnect()


app = FastAPI(
    title="Weight Goal Service API",
    description="Backend API for weight-loss goal tracking",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed requests as 400 VALIDATION_ERROR."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": {
                "code": "VALIDATION_ERROR",
                "message": "Validation failed",
                "details": jsonable_encoder(exc.errors()),
            }
        },
    )


# Include routers
app.include_router(users.router)
app.include_router(weight_goals.router)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {"status": "ok", "message": "Weight Goal Service API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}

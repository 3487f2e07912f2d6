import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from friend_api.api.v1.router import api_router
from friend_api.config import settings
from friend_api.core.database import client, db, FRIEND_REQUESTS_COLLECTION, USERS_COLLECTION
from friend_api.core.errors import AppError, app_exception_handler, validation_exception_handler
from friend_api.stores.friend_request_store import FriendRequestStore
from friend_api.stores.user_store import UserStore
from friend_api.utils.logging import get_logger

# Get logger for this module
logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description=settings.PROJECT_DESCRIPTION,
    version=settings.PROJECT_VERSION,
    debug=settings.DEBUG,
)

# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)
app.add_exception_handler(AppError, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# Ensure CORS origins are clean (no duplicates, no wildcards mixed with specific origins)
clean_origins = []
for origin in settings.CORS_ORIGINS:
    if origin and origin != "*":
        if origin not in clean_origins:
            clean_origins.append(origin)

logger.info(f"CORS Origins configured: {clean_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=clean_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming HTTP requests with their status and duration"""
    start_time = time.time()
    client_host = request.client.host if request.client else "unknown"
    logger.info(f"{request.method} {request.url.path} - Client: {client_host}")

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} - Status: {response.status_code} - Time: {process_time:.3f}s"
    )
    return response


@app.on_event("startup")
async def startup_event():
    try:
        await client.admin.command("ping")
        logger.info("MongoDB connection successful")
    except Exception as e:
        logger.error(f"MongoDB connection failed: {str(e)}")
        logger.error(f"Please check MONGO_URI ({settings.MONGO_URI}) and that the server is reachable")
        return

    try:
        await FriendRequestStore(db[FRIEND_REQUESTS_COLLECTION]).ensure_indexes()
        await UserStore(db[USERS_COLLECTION]).ensure_indexes()
        logger.info("MongoDB indexes ensured")
    except AppError as e:
        logger.error(f"Index creation failed: {e.message}")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down application...")
    client.close()


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": settings.PROJECT_NAME,
        "version": settings.PROJECT_VERSION,
        "docs": "/docs",
        "friend_requests": f"{settings.API_V1_STR}/friend-requests",
        "users": f"{settings.API_V1_STR}/users",
    }

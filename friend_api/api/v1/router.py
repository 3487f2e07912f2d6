from fastapi import APIRouter

from .endpoints import friend_requests, users

# Create the main API v1 router
api_router = APIRouter()

# Include all endpoint routers with their prefixes
api_router.include_router(
    friend_requests.router,
    prefix="/friend-requests",
    tags=["Friend Request"]
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["User"]
)

# Health check endpoint
@api_router.get("/", tags=["health"])
async def health_check():
    return {"message": "Friend Request API v1"}

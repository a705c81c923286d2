from fastapi import APIRouter
from webseries.api.v1 import auth, series, episodes, feedback

# Create main API router
api_router = APIRouter()

# Include sub-routers
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(series.router, prefix="/series", tags=["Series"])
api_router.include_router(episodes.router, prefix="/episodes", tags=["Episodes"])
api_router.include_router(feedback.router, prefix="/feedback", tags=["Feedback"])

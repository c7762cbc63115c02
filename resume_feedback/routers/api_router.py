from fastapi import APIRouter
from resume_feedback.routers import analysis, insights, resumes

# Routers are aggregated here; main.py only imports this hub.
api_router = APIRouter()

api_router.include_router(insights.router, tags=["Insights"])
api_router.include_router(analysis.router, tags=["Analysis"])
api_router.include_router(resumes.router, prefix="/resumes", tags=["Resumes"])

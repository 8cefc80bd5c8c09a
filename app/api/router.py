from fastapi import APIRouter
from app.api.endpoints import seed, sql

api_router = APIRouter()

# Combine all sub-routers into one
api_router.include_router(seed.router)
api_router.include_router(sql.router)

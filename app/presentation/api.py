from fastapi import APIRouter

from app.presentation.routers.v1.one_time_token import router as one_time_token_router
from app.presentation.routes.health import router as health_router

api = APIRouter()

# Add all v1 routers here
routers = (one_time_token_router,)
for router in routers:
    api.include_router(router, prefix="/v1")

api.include_router(health_router)

from fastapi import APIRouter

from app.domains.ecommerce.api.routes import router as ecommerce_router

api_router = APIRouter()

# All routes get the API_V1_STR prefix from the app factory
api_router.include_router(ecommerce_router)

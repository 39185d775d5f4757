from fastapi import APIRouter
from dbinspect.api.endpoints import introspection, query, prompts

api_router = APIRouter()

# Combine all sub-routers into one
api_router.include_router(introspection.router)
api_router.include_router(query.router)
api_router.include_router(prompts.router)

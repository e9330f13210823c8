from fastapi import APIRouter

from api.v1.routes.translations import router as translations_router

router = APIRouter()
router.include_router(translations_router)

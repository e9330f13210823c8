from typing import Optional

from fastapi import APIRouter, Cookie, HTTPException, Query, Response

from api.v1 import schemas
from infrastructure.i18n import LanguageConfigurationError
from infrastructure.logging import get_module_logger
from infrastructure.services import TranslationServiceDep

logger = get_module_logger()

router = APIRouter(prefix="/translations", tags=["Translations"])


def _preferred_code(lang: Optional[str], lang_cookie: Optional[str]) -> Optional[str]:
    # Explicit query parameter wins over the remembered cookie.
    return lang or lang_cookie


@router.get("/bundle", response_model=schemas.TranslationBundleResponse)
async def get_translation_bundle(
    response: Response,
    translations: TranslationServiceDep,
    lang: Optional[str] = Query(default=None, max_length=32),
    lang_cookie: Optional[str] = Cookie(default=None, alias="lang", max_length=32),
):
    """Return the translation bundle for the requested language.

    Never fails because of the database: when it is slow or down the bundle
    is served from cache or from the static dictionary.
    """
    bundle = await translations.get_translation_bundle(_preferred_code(lang, lang_cookie))
    response.headers["Content-Language"] = bundle.active_language.code
    return schemas.TranslationBundleResponse.model_validate(bundle.to_dict())


@router.get("/languages", response_model=schemas.LanguagesResponse)
async def get_languages(
    translations: TranslationServiceDep,
    lang: Optional[str] = Query(default=None, max_length=32),
    lang_cookie: Optional[str] = Cookie(default=None, alias="lang", max_length=32),
):
    """List active languages and the one resolved for this request."""
    try:
        resolved = await translations.resolve_language(_preferred_code(lang, lang_cookie))
    except LanguageConfigurationError as e:
        logger.error("languages_endpoint_unavailable", error=str(e))
        raise HTTPException(status_code=503, detail=str(e)) from e

    return schemas.LanguagesResponse(
        languages=[
            schemas.LanguageResponse.model_validate(language.to_dict())
            for language in resolved.languages
        ],
        active_language=schemas.LanguageResponse.model_validate(
            resolved.active_language.to_dict()
        ),
    )


# Admin endpoint for cache and circuit breaker inspection
@router.get("/admin/status", response_model=schemas.CacheStatusResponse, tags=["admin"])
def get_cache_status(translations: TranslationServiceDep):
    """Get the in-memory bundle cache and circuit breaker state.

    **Admin only**: This endpoint should be protected by admin authentication.
    """
    return schemas.CacheStatusResponse(**translations.get_cache_status())

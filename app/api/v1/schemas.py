"""API response schemas for translation endpoints.

Internal structures are dataclasses (see ``infrastructure.i18n.models``);
these Pydantic models are their API serialization views. Field names are
serialized in camelCase to match the persisted bundle format.
"""

from typing import Annotated, Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LanguageResponse(CamelModel):
    """A selectable language."""

    id: str
    code: str
    name: str
    is_default: bool = False
    is_active: bool = True
    sync_ui_language: bool = False


class TranslationBundleResponse(CamelModel):
    """Resolved dictionary for the active language."""

    languages: Annotated[List[LanguageResponse], Field(default_factory=list)]
    active_language: LanguageResponse
    dictionary: Annotated[
        Dict[str, str],
        Field(
            default_factory=dict,
            json_schema_extra={"example": {"greeting.title": "Hi, {name}"}},
        ),
    ]


class LanguagesResponse(CamelModel):
    """Active languages and the one resolved for the request."""

    languages: List[LanguageResponse]
    active_language: LanguageResponse


class CacheStatusResponse(CamelModel):
    """Bundle cache and circuit breaker state of this process."""

    cached_keys: List[str]
    circuit_breaker: Dict[str, Any]
    skip_cache: bool = False

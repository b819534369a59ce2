"""Language list endpoints. Languages are shared by all users."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.language import LanguageCreate, LanguageResponse
from services import language_service
from services.exceptions import AlreadyExistsError

router = APIRouter(prefix="/languages", tags=["languages"])


@router.get("/", response_model=list[LanguageResponse])
async def list_languages(
    _current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[LanguageResponse]:
    """Get all languages sorted by name."""
    languages = await language_service.list_languages(db)
    return [LanguageResponse.model_validate(lang) for lang in languages]


@router.post("/", response_model=LanguageResponse, status_code=status.HTTP_201_CREATED)
async def create_language(
    data: LanguageCreate,
    _current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> LanguageResponse:
    """
    Add a language.

    Returns 409 if the name or short name is already used.
    """
    try:
        language = await language_service.create_language(db, data.name, data.short_name)
    except AlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return LanguageResponse.model_validate(language)

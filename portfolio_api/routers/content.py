"""
Content generator endpoints.

Route summary
-------------
POST   /api/content           — generate content and prepend it to the library
GET    /api/content           — list generated content, newest first
DELETE /api/content           — clear the library
DELETE /api/content/{index}   — remove one item by position
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from portfolio_api.dependencies.services import get_content_generator, get_content_library
from portfolio_api.models.schemas import ContentGenerateRequest, GeneratedContentResponse
from portfolio_api.services.content_generator import (
    ContentGenerator,
    ContentLibrary,
    ContentType,
    GeneratedContent,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(items: List[GeneratedContent]) -> List[GeneratedContentResponse]:
    return [
        GeneratedContentResponse.model_validate(item.model_dump(mode="json")) for item in items
    ]


@router.post("", response_model=GeneratedContentResponse, status_code=status.HTTP_201_CREATED)
async def generate_content(
    body: ContentGenerateRequest,
    generator: ContentGenerator = Depends(get_content_generator),
    library: ContentLibrary = Depends(get_content_library),
) -> GeneratedContentResponse:
    item = await generator.generate(ContentType(body.type.value), body.input.strip())
    await library.add(item)
    return GeneratedContentResponse.model_validate(item.model_dump(mode="json"))


@router.get("", response_model=List[GeneratedContentResponse])
async def list_content(
    library: ContentLibrary = Depends(get_content_library),
) -> List[GeneratedContentResponse]:
    return _to_response(await library.load())


@router.delete("", status_code=status.HTTP_204_NO_CONTENT, response_model=None)
async def clear_content(library: ContentLibrary = Depends(get_content_library)) -> None:
    await library.clear()
    logger.info("Generated content library cleared")


@router.delete("/{index}", response_model=List[GeneratedContentResponse])
async def delete_content(
    index: int,
    library: ContentLibrary = Depends(get_content_library),
) -> List[GeneratedContentResponse]:
    """Remove the item at *index* (0 = newest) and return what is left."""
    try:
        items = await library.remove(index)
    except IndexError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No generated content at index {index}.",
        )
    return _to_response(items)

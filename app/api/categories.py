"""Category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_catalog_service
from app.api.schemas import CategoryCreateRequest, CategoryResponse, ErrorResponse
from app.catalog.service import CatalogService
from app.domain.views import CategoryView

router = APIRouter(prefix="/categories", tags=["Categories"])


def category_to_response(category: CategoryView) -> CategoryResponse:
    """Convert CategoryView to response schema."""
    return CategoryResponse(id=category.id, name=category.name, slug=category.slug)


@router.get("", response_model=list[CategoryResponse], summary="List categories")
async def list_categories(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> list[CategoryResponse]:
    """List all categories by name."""
    return [category_to_response(c) for c in await service.list_categories()]


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Create category",
)
async def create_category(
    request: CategoryCreateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CategoryResponse:
    """Create a category. The slug is stored trimmed and lower-cased."""
    category = await service.create_category(name=request.name, slug=request.slug)
    return category_to_response(category)

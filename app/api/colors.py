"""Color API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_catalog_service
from app.api.schemas import ColorCreateRequest, ColorResponse, ErrorResponse
from app.catalog.service import CatalogService
from app.domain.views import ColorView

router = APIRouter(prefix="/colors", tags=["Colors"])


def color_to_response(color: ColorView) -> ColorResponse:
    """Convert ColorView to response schema."""
    return ColorResponse(id=color.id, name=color.name, slug=color.slug, hex=color.hex)


@router.get("", response_model=list[ColorResponse], summary="List colors")
async def list_colors(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> list[ColorResponse]:
    """List all colors by name."""
    return [color_to_response(c) for c in await service.list_colors()]


@router.post(
    "",
    response_model=ColorResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Create color",
)
async def create_color(
    request: ColorCreateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ColorResponse:
    """Create a color.

    The slug is stored trimmed and lower-cased; the hex code must be
    ``#RGB`` or ``#RRGGBB``.
    """
    color = await service.create_color(name=request.name, slug=request.slug, hex=request.hex)
    return color_to_response(color)

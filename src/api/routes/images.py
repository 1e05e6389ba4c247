"""Image upload and download routes."""

import logging

from fastapi import APIRouter, File, Response, UploadFile

from src.api.deps import ProfileStoreDep
from src.api.middleware.error_handler import BadRequestError, NotFoundError
from src.schemas.image import UploadImageResponse
from src.services.profile_store import InvalidImageError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/images", tags=["images"])


@router.post(
    "",
    response_model=UploadImageResponse,
    summary="Upload an image",
    responses={
        200: {"description": "Image stored"},
        400: {"description": "Empty file, unsupported type or file too large"},
    },
)
async def upload_image(
    store: ProfileStoreDep,
    file: UploadFile = File(..., description="Image file (PNG, JPG, GIF or WEBP)"),
) -> UploadImageResponse:
    """Store an uploaded image and return its generated id."""
    content = await file.read()

    try:
        image_id = await store.upload_image(content, file.content_type)
    except InvalidImageError as e:
        logger.warning("Image upload rejected: %s", e)
        raise BadRequestError(str(e)) from e

    return UploadImageResponse(image_id=image_id)


@router.get(
    "/{image_id}",
    response_class=Response,
    summary="Download an image",
    responses={
        200: {"description": "Image bytes", "content": {"image/*": {}}},
        400: {"description": "Blank image id"},
        404: {"description": "Image not found"},
    },
)
async def download_image(image_id: str, store: ProfileStoreDep) -> Response:
    """Return the raw bytes of a stored image."""
    try:
        image = await store.download_image(image_id)
    except InvalidImageError as e:
        raise BadRequestError(str(e)) from e

    if image is None:
        raise NotFoundError(f"An image with imageId {image_id} was not found")

    return Response(content=image.content, media_type=image.content_type)

"""Image Pydantic schemas for API responses."""

from pydantic import BaseModel, ConfigDict, Field


class UploadImageResponse(BaseModel):
    """Response after uploading an image."""

    model_config = ConfigDict(populate_by_name=True)

    image_id: str = Field(alias="imageId", description="Generated identifier of the stored image")

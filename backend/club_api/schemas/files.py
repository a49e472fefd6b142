"""File upload Pydantic schemas."""

from pydantic import BaseModel


class UploadData(BaseModel):
    photo_url: str

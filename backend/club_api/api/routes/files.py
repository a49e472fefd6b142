"""File upload routes: images for events and merch."""

from fastapi import APIRouter, Depends, File, UploadFile

from club_api.api.deps import get_storage
from club_api.core.exceptions import StorageError
from club_api.schemas.common import ApiResponse, fail, ok
from club_api.schemas.files import UploadData
from club_api.services.object_storage import ObjectStorage

router = APIRouter()


@router.post("/uploadFile", response_model=ApiResponse[UploadData])
async def upload_file(
    file: UploadFile = File(...),
    storage: ObjectStorage = Depends(get_storage),
):
    """Store the uploaded file and return its public URL."""
    data = await file.read()
    try:
        url = await storage.upload(data, file.filename or "upload", file.content_type)
    except StorageError as exc:
        return fail(str(exc))

    return ok("File uploaded successfully", UploadData(photo_url=url))

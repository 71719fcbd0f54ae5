"""
FastAPI dependencies: the app-owned store and file storage, the acting
identity, and the cover upload check.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import File, Header, Request, UploadFile

from db import JsonFileStore
from domain.errors import UploadError
from services.cover_images import NO_FILE_MESSAGE, check_cover_upload
from services.identity import ActingIdentity
from storage.file_storage import FileStorage


def get_store(request: Request) -> JsonFileStore:
    return request.app.state.store


def get_storage(request: Request) -> FileStorage:
    return request.app.state.storage


def get_acting_identity(x_user_id: Optional[str] = Header(None)) -> ActingIdentity:
    """Identity asserted by the caller through ``x-user-id``. Not verified."""
    return ActingIdentity(user_id=x_user_id or None)


@dataclass
class CoverUpload:
    filename: str
    content_type: Optional[str]
    data: bytes
    default_ext: str = ""


async def read_cover_upload(
    cover_image: Optional[UploadFile] = File(None, alias="coverImage"),
) -> CoverUpload:
    """Read the ``coverImage`` part and reject anything that is not an image."""
    if cover_image is None:
        raise UploadError(NO_FILE_MESSAGE)
    try:
        data = await cover_image.read()
    finally:
        await cover_image.close()
    default_ext = check_cover_upload(cover_image.content_type, data)
    return CoverUpload(
        filename=cover_image.filename or "",
        content_type=cover_image.content_type,
        data=data,
        default_ext=default_ext,
    )

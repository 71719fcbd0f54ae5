"""
Cover image checks run on an upload before any handler sees it.
"""
from io import BytesIO
from typing import Optional

from PIL import Image, UnidentifiedImageError

from domain.errors import UploadError

NOT_AN_IMAGE_MESSAGE = "Not an image! Please upload only images."
NO_FILE_MESSAGE = "No image file uploaded or invalid file type."

# Pillow format name -> extension used when the upload has no usable filename
_FORMAT_EXTENSIONS = {
    "JPEG": ".jpg",
    "PNG": ".png",
    "GIF": ".gif",
    "WEBP": ".webp",
    "BMP": ".bmp",
    "TIFF": ".tiff",
}


def is_image_content_type(content_type: Optional[str]) -> bool:
    return bool(content_type) and content_type.lower().startswith("image/")


def detect_image_format(file_bytes: bytes) -> str:
    """
    Return Pillow's format name for the bytes.

    Raises:
        UploadError: the bytes do not decode as an image
    """
    try:
        with Image.open(BytesIO(file_bytes)) as img:
            img.verify()
            return img.format or ""
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        raise UploadError(NOT_AN_IMAGE_MESSAGE)


def check_cover_upload(content_type: Optional[str], file_bytes: bytes) -> str:
    """
    Validate an uploaded cover and return the extension to store it under
    when its filename has none.
    """
    if not file_bytes:
        raise UploadError(NO_FILE_MESSAGE)
    if not is_image_content_type(content_type):
        raise UploadError(NOT_AN_IMAGE_MESSAGE)
    image_format = detect_image_format(file_bytes)
    return _FORMAT_EXTENSIONS.get(image_format.upper(), "")

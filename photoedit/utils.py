import base64
import logging
import mimetypes
from io import BytesIO
from os import PathLike
from pathlib import Path
from typing import Tuple, Union

from PIL import Image, UnidentifiedImageError

from .errors import ImageTooLargeError, UnsupportedImageError
from .models import DATA_URI_PATTERN

MAX_IMAGE_SIZE = 50 * 1024 * 1024


def to_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('utf-8')}"


def parse_data_uri(data_uri: str) -> Tuple[str, bytes]:
    """Split a base64 data URI into its MIME type and decoded bytes."""
    match = DATA_URI_PATTERN.match(data_uri or "")
    if match is None:
        raise UnsupportedImageError("Not a base64 data URI")
    try:
        payload = base64.b64decode("".join(match.group("payload").split()), validate=True)
    except ValueError as e:
        raise UnsupportedImageError(f"Invalid base64 payload: {e}") from e
    return match.group("mime"), payload


def _sniff_mime_type(data: bytes) -> str:
    try:
        with Image.open(BytesIO(data)) as img:
            mime_type = Image.MIME.get(img.format or "")
    except UnidentifiedImageError:
        mime_type = None
    if not mime_type:
        raise UnsupportedImageError("File is not a recognised image")
    return mime_type


def read_image_file(
        image: Union[str, PathLike, bytes, Image.Image],
        max_size: int = MAX_IMAGE_SIZE
) -> str:
    """Turn a user-selected image into a data URI.

    Paths are typed by extension, raw bytes are sniffed with Pillow and
    Pillow images are encoded as PNG. Anything that is not ``image/*``
    raises :class:`UnsupportedImageError`.
    """
    if isinstance(image, bytes):
        if len(image) > max_size:
            raise ImageTooLargeError(f"Image size exceeds {max_size} bytes")
        return to_data_uri(image, _sniff_mime_type(image))

    elif isinstance(image, (str, PathLike)):
        path = Path(image)
        if not path.exists():
            raise FileNotFoundError(f"Image file not found: {path}")

        mime_type, _ = mimetypes.guess_type(path.name)
        if not mime_type or not mime_type.startswith("image/"):
            raise UnsupportedImageError(
                f"Unsupported file type: {mime_type or 'unknown'}",
                details={"path": str(path)}
            )
        if path.stat().st_size > max_size:
            raise ImageTooLargeError(f"Image file too large: {path.stat().st_size} bytes")

        with open(path, "rb") as f:
            return to_data_uri(f.read(), mime_type)

    elif isinstance(image, Image.Image):
        buffer = BytesIO()
        image.save(buffer, format="PNG")
        return to_data_uri(buffer.getvalue(), "image/png")

    else:
        raise TypeError(f"Unsupported image type: {type(image)}")


def log_and_raise_for_status(response):
    try:
        response.raise_for_status()
    except Exception as e:
        logging.error(f"Request failed: {e}")
        logging.error(f"Response content: {response.content.decode('utf-8', errors='replace')}")
        raise e

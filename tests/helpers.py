"""Shared builders for test images and HTTP responses."""
import json

import requests
from PIL import Image

from photoedit.utils import read_image_file


def make_image(color) -> str:
    """Return a tiny PNG data URI filled with ``color``."""
    return read_image_file(Image.new("RGB", (2, 2), color))


def make_response(status_code: int, body=None, content: bytes = None) -> requests.Response:
    """Build a real requests.Response with a JSON (or raw) body."""
    response = requests.Response()
    response.status_code = status_code
    response._content = content if content is not None else json.dumps(body).encode("utf-8")
    response.url = "http://edit.test/api/image"
    return response

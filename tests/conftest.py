"""Pytest configuration and fixtures."""
import logging
from unittest.mock import MagicMock

import pytest
import requests

from photoedit.edit_service import ImageEditClient

from .helpers import make_image

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)


@pytest.fixture
def image_x() -> str:
    return make_image("red")


@pytest.fixture
def image_y() -> str:
    return make_image("blue")


@pytest.fixture
def image_a() -> str:
    return make_image("green")


@pytest.fixture
def image_b() -> str:
    return make_image("yellow")


@pytest.fixture
def mock_service() -> MagicMock:
    """Edit service double; tests set ``edit.return_value`` or ``edit.side_effect``."""
    return MagicMock(spec=ImageEditClient)


@pytest.fixture
def mock_http_session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def http_client(mock_http_session) -> ImageEditClient:
    """ImageEditClient talking to a mocked requests.Session."""
    return ImageEditClient("http://edit.test", session=mock_http_session)

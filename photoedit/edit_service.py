import logging
from typing import Optional

import requests
from pydantic import ValidationError as PydanticValidationError

from .config import DEFAULT_BACKEND, DEFAULT_EDIT_PATH, DEFAULT_TIMEOUT, EditorSettings
from .errors import MalformedResponseError, ServiceError, TransportError
from .models import EditRequest, EditResponse
from .utils import log_and_raise_for_status


class ImageEditClient:
    """HTTP client for the image edit service.

    ``edit`` either returns an :class:`EditResponse` holding a valid image
    data URI or raises one of :class:`ServiceError`,
    :class:`MalformedResponseError` or :class:`TransportError`.
    """

    def __init__(
            self,
            base_url: str = DEFAULT_BACKEND,
            edit_path: str = DEFAULT_EDIT_PATH,
            timeout: float = DEFAULT_TIMEOUT,
            session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.edit_url = f"{self.base_url}/{edit_path.lstrip('/')}"
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Optional[EditorSettings] = None) -> "ImageEditClient":
        settings = settings or EditorSettings()
        return cls(
            base_url=settings.backend,
            edit_path=settings.edit_path,
            timeout=settings.request_timeout
        )

    def edit(self, request: EditRequest) -> EditResponse:
        history_len = len(request.history) if request.history else 0
        logging.info(f"Sending edit request to {self.edit_url} (history turns: {history_len})")

        try:
            response = self.session.post(self.edit_url, json=request.to_payload(), timeout=self.timeout)
        except requests.RequestException as e:
            logging.error(f"Edit service unreachable: {e}")
            raise TransportError(str(e), details={"url": self.edit_url}) from e

        try:
            log_and_raise_for_status(response)
        except requests.HTTPError as e:
            service_message = self._error_message(response)
            raise ServiceError(
                service_message or f"Edit request failed with status {response.status_code}",
                status_code=response.status_code,
                service_message=service_message
            ) from e

        try:
            body = response.json()
        except ValueError as e:
            logging.error(f"Edit service returned an unparsable body: {e}")
            raise TransportError(f"Invalid JSON in edit response: {e}") from e

        if not isinstance(body, dict) or not body.get("image"):
            logging.warning("Edit service responded without an image")
            raise MalformedResponseError(status_code=response.status_code)

        try:
            result = EditResponse(image=body["image"], description=body.get("description") or None)
        except PydanticValidationError as e:
            logging.warning(f"Edit service returned an invalid image: {e}")
            raise MalformedResponseError(
                "Invalid image returned from API", status_code=response.status_code
            ) from e

        logging.info(f"Edit succeeded (description: {'yes' if result.description else 'no'})")
        return result

    @staticmethod
    def _error_message(response: requests.Response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return None

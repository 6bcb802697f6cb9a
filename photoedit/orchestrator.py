"""
Per-workflow session state machines.

A session owns its images, loading/error flags and (for the edit
workflow) the conversation history. It is either idle or has exactly one
request in flight; a ``submit`` while a request is in flight is ignored.

Each submission is tagged with a sequence number. ``reset`` and new
submissions advance the sequence, and a response whose tag is no longer
the latest is dropped without touching state.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from os import PathLike
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image

from .builder import build_cleanup_request, build_combine_request, build_edit_request
from .errors import (
    BaseEditorError,
    MalformedResponseError,
    ServiceError,
    UnsupportedImageError,
    ValidationError,
)
from .history import HistoryLog
from .models import EditRequest, EditResponse, HistoryTurn, Part, validate_data_uri
from .sink import CLEANUP_PREFIX, COMBINED_PREFIX, EDITED_PREFIX, save_image
from .utils import read_image_file

GENERIC_ERROR = "An error occurred"


class ImageSlot(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


@dataclass
class SessionState:
    input_image: Optional[str] = None
    secondary_image: Optional[str] = None
    output_image: Optional[str] = None
    description: Optional[str] = None
    prompt: str = ""
    loading: bool = False
    error: Optional[str] = None

    @property
    def current_image(self) -> Optional[str]:
        """The image the next edit operates on."""
        return self.output_image or self.input_image


class WorkflowSession:
    """Shared submit/reset/select/download behaviour for one workflow.

    ``service`` is anything with an ``edit(EditRequest) -> EditResponse``
    method, normally an :class:`~photoedit.edit_service.ImageEditClient`.
    """

    name = "workflow"
    download_prefix = EDITED_PREFIX
    failure_message = "Failed to generate image"
    slots: Tuple[ImageSlot, ...] = (ImageSlot.PRIMARY,)
    accepts_prompt = True

    def __init__(self, service):
        self.service = service
        self.state = SessionState()
        self._sequence = 0

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def sequence(self) -> int:
        return self._sequence

    def build_request(self, prompt: str) -> EditRequest:
        raise NotImplementedError

    async def submit(self, prompt: Optional[str] = None) -> bool:
        """Send one request to the edit service and apply its outcome.

        Returns ``False`` when the submission was ignored (request already
        in flight, blank prompt, missing image) and ``True`` once a request
        has been sent and settled. Service and transport failures end up in
        ``state.error``; they are never raised.
        """
        if self.state.loading:
            logging.info(f"{self.name}: submit ignored, a request is already in flight")
            return False

        prompt = self.state.prompt if prompt is None else prompt
        try:
            request = self.build_request(prompt)
        except ValidationError as e:
            logging.info(f"{self.name}: submit ignored, {e.message}")
            return False

        self._sequence += 1
        sequence = self._sequence
        if self.accepts_prompt:
            self.state.prompt = prompt
        self.state.error = None
        self.state.loading = True
        logging.info(f"{self.name}: submission {sequence} started")

        response = None
        error = None
        loop = asyncio.get_running_loop()
        try:
            try:
                response = await loop.run_in_executor(None, self.service.edit, request)
            except BaseEditorError as e:
                error = self._error_message(e)
                logging.warning(f"{self.name}: submission {sequence} failed: {e.to_dict()}")
            except Exception as e:
                error = str(e) or GENERIC_ERROR
                logging.exception(f"{self.name}: submission {sequence} failed unexpectedly")

            if sequence != self._sequence:
                logging.info(f"{self.name}: discarding stale response for submission {sequence}")
                return True

            if error is None:
                self._apply(request, response)
            else:
                self.state.error = error
        finally:
            # Cancellation or a failing _apply must not leave the session stuck in flight
            if sequence == self._sequence:
                self.state.loading = False
        return True

    def _error_message(self, error: BaseEditorError) -> str:
        if isinstance(error, MalformedResponseError):
            return error.message
        if isinstance(error, ServiceError):
            return error.service_message or self.failure_message
        return error.message or GENERIC_ERROR

    def _apply(self, request: EditRequest, response: EditResponse) -> None:
        self.state.output_image = response.image
        self.state.description = response.description or None

    def reset(self) -> None:
        # Advancing the sequence orphans any in-flight response
        self._sequence += 1
        self.state.loading = False
        self.state.output_image = None
        self.state.description = None
        self.state.error = None

    def select_image(self, slot: Union[ImageSlot, str], image: Optional[str]) -> None:
        """Replace an input image; the current output no longer matches and is dropped."""
        slot = ImageSlot(slot)
        if slot not in self.slots:
            raise ValueError(f"{self.name} workflow has no {slot.value} image slot")
        if image is not None:
            try:
                validate_data_uri(image)
            except ValueError as e:
                raise UnsupportedImageError(f"Rejected image: {e}") from e

        if slot is ImageSlot.PRIMARY:
            self.state.input_image = image
        else:
            self.state.secondary_image = image
        self.state.output_image = None

    async def load_image(
            self,
            slot: Union[ImageSlot, str],
            image: Union[str, PathLike, bytes, Image.Image]
    ) -> str:
        """Read a file (or bytes / Pillow image) and select it into ``slot``."""
        loop = asyncio.get_running_loop()
        data_uri = await loop.run_in_executor(None, read_image_file, image)
        self.select_image(slot, data_uri)
        return data_uri

    def download(
            self,
            directory: Union[str, PathLike] = ".",
            timestamp_ms: Optional[int] = None
    ) -> Optional[Path]:
        if self.state.output_image is None or self.state.loading:
            return None
        return save_image(self.state.output_image, directory, self.download_prefix, timestamp_ms)


class EditSession(WorkflowSession):
    """Single-image conversational editing.

    Every edit runs on the previous result and carries the full history,
    which grows by one user turn and one model turn per successful edit.
    """

    name = "edit"

    def __init__(self, service):
        super().__init__(service)
        self.history = HistoryLog()

    def build_request(self, prompt: str) -> EditRequest:
        return build_edit_request(
            prompt,
            self.state.input_image,
            output_image=self.state.output_image,
            history=self.history
        )

    def _apply(self, request: EditRequest, response: EditResponse) -> None:
        super()._apply(request, response)

        model_parts = []
        if response.description:
            model_parts.append(Part(text=response.description))
        model_parts.append(Part(image=response.image))

        self.history.append(HistoryTurn(role="user", parts=[Part(text=request.prompt), Part(image=request.image)]))
        self.history.append(HistoryTurn(role="model", parts=model_parts))
        self.state.prompt = ""

    def reset(self) -> None:
        super().reset()
        self.history.clear()


class CombineSession(WorkflowSession):
    name = "combine"
    download_prefix = COMBINED_PREFIX
    failure_message = "Failed to combine images"
    slots = (ImageSlot.PRIMARY, ImageSlot.SECONDARY)

    def build_request(self, prompt: str) -> EditRequest:
        return build_combine_request(prompt, self.state.input_image, self.state.secondary_image)

    def _apply(self, request: EditRequest, response: EditResponse) -> None:
        super()._apply(request, response)
        self.state.prompt = ""

    def reset(self) -> None:
        super().reset()
        self.state.input_image = None
        self.state.secondary_image = None


class CleanupSession(WorkflowSession):
    """Watermark/logo removal with a fixed instruction; user prompts are ignored."""

    name = "cleanup"
    download_prefix = CLEANUP_PREFIX
    failure_message = "Failed to remove watermark"
    accepts_prompt = False

    def build_request(self, prompt: str) -> EditRequest:
        return build_cleanup_request(self.state.input_image)

    def reset(self) -> None:
        super().reset()
        self.state.input_image = None

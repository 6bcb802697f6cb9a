"""
Request construction for the three edit workflows.

Builders are pure: they never touch the network and only fail when the
caller hands them a blank prompt or a missing image.
"""

from typing import Optional

from .errors import EmptyPromptError, MissingImageError
from .history import HistoryLog
from .models import EditRequest, HistoryTurn, Part

CLEANUP_PROMPT = (
    "Remove any watermarks, logos, text overlays from this image. "
    "Make the removal seamless and natural looking, ensuring the background "
    "is properly reconstructed."
)


def _require_prompt(prompt: Optional[str]) -> str:
    if prompt is None or not prompt.strip():
        raise EmptyPromptError()
    return prompt.strip()


def _require_image(image: Optional[str], name: str) -> str:
    if not image:
        raise MissingImageError(f"Missing required image: {name}", details={"slot": name})
    return image


def build_edit_request(
        prompt: str,
        input_image: Optional[str],
        output_image: Optional[str] = None,
        history: Optional[HistoryLog] = None
) -> EditRequest:
    # Chained editing: each edit works on the previous result when there is one
    _require_image(input_image, "input_image")
    image = output_image or input_image
    return EditRequest(
        prompt=_require_prompt(prompt),
        image=image,
        history=list(history.turns) if history else None
    )


def build_combine_request(
        prompt: str,
        image_a: Optional[str],
        image_b: Optional[str]
) -> EditRequest:
    """Build a two-image request.

    The contract carries a single primary image, so the second image
    travels as a one-turn history: a user turn with an empty text part
    followed by the image. The service depends on this exact shape.
    """
    prompt = _require_prompt(prompt)
    image_a = _require_image(image_a, "image_a")
    image_b = _require_image(image_b, "image_b")

    seed_turn = HistoryTurn(role="user", parts=[Part(text=""), Part(image=image_b)])
    return EditRequest(prompt=prompt, image=image_a, history=[seed_turn])


def build_cleanup_request(image: Optional[str]) -> EditRequest:
    return EditRequest(prompt=CLEANUP_PROMPT, image=_require_image(image, "image"))

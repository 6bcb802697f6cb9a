import re
from typing import Annotated, List, Literal, Optional, Tuple

from pydantic import AfterValidator, BaseModel, ConfigDict

DATA_URI_PATTERN = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)"
    r"(?P<params>(?:;[\w.+-]+=[^;,]*)*)"
    r";base64,(?P<payload>[A-Za-z0-9+/=\s]+)$"
)


def validate_data_uri(value: str) -> str:
    """Check that ``value`` is a base64 data URI with an ``image/*`` MIME type."""
    match = DATA_URI_PATTERN.match(value)
    if match is None:
        raise ValueError("not a base64 data URI")
    if not match.group("mime").lower().startswith("image/"):
        raise ValueError(f"unsupported MIME type: {match.group('mime')}")
    return value


ImageReference = Annotated[str, AfterValidator(validate_data_uri)]


class Part(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: Optional[str] = None
    image: Optional[ImageReference] = None


class HistoryTurn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "model"]
    parts: Tuple[Part, ...]


class EditRequest(BaseModel):
    prompt: str
    image: ImageReference
    history: Optional[List[HistoryTurn]] = None

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class EditResponse(BaseModel):
    image: ImageReference
    description: Optional[str] = None

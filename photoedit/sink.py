import logging
import time
from os import PathLike
from pathlib import Path
from typing import Optional, Union

from .utils import parse_data_uri

EDITED_PREFIX = "edited-image"
COMBINED_PREFIX = "combined-image"
CLEANUP_PREFIX = "watermark-removed"


def download_filename(prefix: str, timestamp_ms: Optional[int] = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{prefix}-{timestamp_ms}.png"


def save_image(
        image: str,
        directory: Union[str, PathLike] = ".",
        prefix: str = EDITED_PREFIX,
        timestamp_ms: Optional[int] = None
) -> Path:
    """Write the decoded data-URI payload to ``directory`` and return its path.

    The bytes are written as received; no re-encoding happens here.
    """
    _, payload = parse_data_uri(image)
    path = Path(directory) / download_filename(prefix, timestamp_ms)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "wb") as f:
        f.write(payload)

    logging.info(f"Saved image to {path}")
    return path

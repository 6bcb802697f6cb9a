from .builder import CLEANUP_PROMPT, build_cleanup_request, build_combine_request, build_edit_request
from .config import EditorSettings
from .edit_service import ImageEditClient
from .history import HistoryLog
from .models import EditRequest, EditResponse, HistoryTurn, Part
from .orchestrator import CleanupSession, CombineSession, EditSession, ImageSlot, SessionState
from .utils import read_image_file

__all__ = [
    "CLEANUP_PROMPT",
    "build_cleanup_request",
    "build_combine_request",
    "build_edit_request",
    "EditorSettings",
    "ImageEditClient",
    "HistoryLog",
    "EditRequest",
    "EditResponse",
    "HistoryTurn",
    "Part",
    "CleanupSession",
    "CombineSession",
    "EditSession",
    "ImageSlot",
    "SessionState",
    "read_image_file",
]

from .conversion_service import ConversionService
from .intake_service import IntakeService
from .session_watcher import SessionWatcher
from .upload_service import UploadService
from .workspace import Workspace

__all__ = [
    "ConversionService",
    "IntakeService",
    "SessionWatcher",
    "UploadService",
    "Workspace",
]

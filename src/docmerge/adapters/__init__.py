from .http_conversion_backend import HttpConversionBackend
from .local_download_sink import LocalFolderDownloadSink
from .supabase_auth_adapter import SupabaseAuthAdapter
from .supabase_storage_adapter import SupabaseStorageAdapter

__all__ = [
    "HttpConversionBackend",
    "LocalFolderDownloadSink",
    "SupabaseAuthAdapter",
    "SupabaseStorageAdapter",
]

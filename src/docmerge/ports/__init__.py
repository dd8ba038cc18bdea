from .conversion_port import ConversionBackendPort
from .download_port import DownloadSinkPort
from .identity_port import IdentityPort, Subscription
from .object_storage_port import ObjectStoragePort

__all__ = [
    "ConversionBackendPort",
    "DownloadSinkPort",
    "IdentityPort",
    "ObjectStoragePort",
    "Subscription",
]

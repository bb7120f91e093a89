"""Dropbox API Client Package.

This package provides an async Python client for the Dropbox v2 HTTP API
(files namespace). It includes both a low-level client (DbxClient) that knows
the three endpoint styles, and a high-level interface (DropboxFile) with one
method per route.

Every call returns a Success (HTTP 200) or a Failure (anything else); Dropbox
errors are never raised. Only bad arguments (ArgumentError) and transport
failures (DbxTransportError) raise.

Example Usage:
    # High-level files API (recommended)
    from dbx_api import Dropbox, DropboxFile

    app = Dropbox.initialize_app("sl.xxxxx")

    async with DropboxFile.from_app(app) as files:
        result = await files.list_folder("", limit=100)
        if result.success:
            for entry in result.payload["entries"]:
                print(entry["path_display"])
        else:
            print(f"Listing failed: {result.error_summary}")

        # Upload in one request, then read it back
        await files.upload(b"hello", "/hello.txt", mode="overwrite")
        download = await files.download("/hello.txt")
        print(download.payload.metadata["size"], download.payload.content)

    # Low-level client (for routes without a helper)
    from dbx_api import DbxClient

    async with DbxClient(app) as client:
        result = await client.rpc("files/get_metadata", {"path": "/hello.txt"})
"""

from ._version import __version__, __version_info__
from .app import Dropbox, DropboxApp
from .exceptions import (
    DbxApiException,
    ArgumentError,
    DbxTransportError,
    DbxTimeoutError,
    DbxApiError,
)
from .models import (
    DbxResult,
    Success,
    Failure,
    DownloadResult,
    JobStatus,
    WriteMode,
    ThumbnailFormat,
    ThumbnailSize,
    ThumbnailMode,
    ThumbnailQuality,
    PathOrLink,
    ImportFormat,
    PaperDocUpdatePolicy,
    FileStatus,
    ListRevisionsMode,
    UploadSessionType,
    wire_value,
)
from .args import (
    CommitInfo,
    RelocationPath,
    UploadSessionCursor,
    UploadSessionFinishArg,
)
from .client import DbxClient
from .files import DropboxFile

__all__ = [
    # Version
    '__version__',
    '__version_info__',

    # Main classes
    'Dropbox',
    'DropboxApp',
    'DropboxFile',
    'DbxClient',

    # Exceptions
    'DbxApiException',
    'ArgumentError',
    'DbxTransportError',
    'DbxTimeoutError',
    'DbxApiError',

    # Results
    'DbxResult',
    'Success',
    'Failure',
    'DownloadResult',
    'JobStatus',

    # Enumerations
    'WriteMode',
    'ThumbnailFormat',
    'ThumbnailSize',
    'ThumbnailMode',
    'ThumbnailQuality',
    'PathOrLink',
    'ImportFormat',
    'PaperDocUpdatePolicy',
    'FileStatus',
    'ListRevisionsMode',
    'UploadSessionType',
    'wire_value',

    # Batch entry records
    'CommitInfo',
    'RelocationPath',
    'UploadSessionCursor',
    'UploadSessionFinishArg',
]

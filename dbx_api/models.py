"""Enumerations and result types for the dbx_api package.

Enum members carry the exact string Dropbox expects on the wire as their
value; ``wire_value`` is the single place that turns a member (or a caller
supplied string) into that string, and rejects anything else.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar, Union

from .exceptions import ArgumentError, DbxApiError

E = TypeVar("E", bound=Enum)


class WriteMode(Enum):
    """Your intent when writing a file to some path.

    ``ADD`` never overwrites (autorename appends a number), ``OVERWRITE``
    always overwrites, ``UPDATE`` overwrites only if the given rev matches
    the file's current rev.
    """
    ADD = "add"
    OVERWRITE = "overwrite"
    UPDATE = "update"


class ThumbnailFormat(Enum):
    """Image format of a thumbnail. jpeg for photos, png for screenshots."""
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"
    JPG = "jpg"
    TIFF = "tiff"
    TIF = "tif"
    GIF = "gif"
    PPM = "ppm"
    BMP = "bmp"


class ThumbnailSize(Enum):
    W32H32 = "w32h32"
    W64H64 = "w64h64"
    W128H128 = "w128h128"
    W256H256 = "w256h256"
    W480H320 = "w480h320"
    W640H480 = "w640h480"
    W960H640 = "w960h640"
    W1024H768 = "w1024h768"
    W2048H1536 = "w2048h1536"
    W3200H2400 = "w3200h2400"


class ThumbnailMode(Enum):
    """How to resize and crop the image to achieve the desired size."""
    STRICT = "strict"
    BESTFIT = "bestfit"
    FITONE_BESTFIT = "fitone_bestfit"


class ThumbnailQuality(Enum):
    QUALITY_80 = "quality_80"
    QUALITY_90 = "quality_90"


class PathOrLink(Enum):
    """Which kind of resource a thumbnail request points at."""
    PATH = "path"
    LINK = "link"


class ImportFormat(Enum):
    """Format of the content sent to the Paper create/update routes."""
    HTML = "html"
    MARKDOWN = "markdown"
    PLAIN_TEXT = "plain_text"


class PaperDocUpdatePolicy(Enum):
    UPDATE = "update"
    OVERWRITE = "overwrite"
    PREPEND = "prepend"
    APPEND = "append"


class FileStatus(Enum):
    ACTIVE = "active"
    DELETED = "deleted"


class ListRevisionsMode(Enum):
    PATH = "path"
    ID = "id"


class UploadSessionType(Enum):
    SEQUENTIAL = "sequential"
    CONCURRENT = "concurrent"


class JobStatus(Enum):
    """Classification of the ``.tag`` returned by batch and check routes."""
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
    FAILED = "failed"
    ASYNC_JOB_ID = "async_job_id"
    OTHER = "other"


_JOB_STATUS_BY_TAG: Dict[str, JobStatus] = {
    "in_progress": JobStatus.IN_PROGRESS,
    "complete": JobStatus.COMPLETE,
    "failed": JobStatus.FAILED,
    "async_job_id": JobStatus.ASYNC_JOB_ID,
}


def coerce_enum(value: Union[E, str], enum_cls: Type[E], name: str = "value") -> E:
    """Return the enum member for a member or its exact wire string.

    Raises:
        ArgumentError: If value is not a member of enum_cls nor one of its wire strings
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        for member in enum_cls:
            if member.value == value:
                return member
    allowed = ", ".join(repr(m.value) for m in enum_cls)
    raise ArgumentError(f"Invalid {name} {value!r}. Must be one of {allowed}")


def wire_value(value: Union[E, str], enum_cls: Type[E], name: str = "value") -> str:
    """Return the literal string Dropbox expects for an enum parameter.

    Example:
        >>> wire_value(ThumbnailSize.W64H64, ThumbnailSize)
        'w64h64'
    """
    return coerce_enum(value, enum_cls, name).value


class DbxResult:
    """Common interface of ``Success`` and ``Failure``."""

    success: bool

    def unwrap(self) -> Any:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True)
class Success(DbxResult):
    """HTTP 200 from Dropbox.

    Attributes:
        payload: Parsed response body (or a ``DownloadResult`` for download routes)
        status: HTTP status code, always 200
        route: Dropbox route that produced the result, e.g. ``files/copy_v2``
        result_key: Key used for the payload by ``to_dict``
    """
    payload: Any
    status: int = 200
    route: Optional[str] = None
    result_key: str = field(default="result", compare=False)

    success = True

    @property
    def tag(self) -> Optional[str]:
        """The ``.tag`` discriminator of the payload, if it has one."""
        if isinstance(self.payload, dict):
            return self.payload.get(".tag")
        return None

    @property
    def job_status(self) -> JobStatus:
        """Classify a batch/check response. Unknown tags fall into ``OTHER``."""
        return _JOB_STATUS_BY_TAG.get(self.tag or "", JobStatus.OTHER)

    @property
    def async_job_id(self) -> Optional[str]:
        if isinstance(self.payload, dict):
            return self.payload.get("async_job_id")
        return None

    def unwrap(self) -> Any:
        return self.payload

    def to_dict(self) -> Dict[str, Any]:
        return {"success": True, self.result_key: self.payload}


@dataclass(frozen=True)
class Failure(DbxResult):
    """Any non-200 response from Dropbox.

    Attributes:
        error: Decoded error body. JSON errors (409) are dicts with
            ``error_summary`` and ``error``; plain-text errors (400) are strings.
        status: HTTP status code
        route: Dropbox route that produced the result
    """
    error: Any
    status: int
    route: Optional[str] = None

    success = False

    @property
    def error_summary(self) -> Optional[str]:
        if isinstance(self.error, dict):
            return self.error.get("error_summary")
        return None

    @property
    def error_tag(self) -> Optional[str]:
        """The ``.tag`` of the structured error, e.g. ``path_lookup``."""
        if isinstance(self.error, dict) and isinstance(self.error.get("error"), dict):
            return self.error["error"].get(".tag")
        return None

    def unwrap(self) -> Any:
        raise DbxApiError(self.status, self.error, self.route)

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": self.error}


@dataclass
class DownloadResult:
    """Payload of a content-download route.

    Attributes:
        metadata: Decoded ``Dropbox-API-Result`` header
        content: Response body, or None when it was streamed to ``saved_to``
        saved_to: Local path the body was written to, if any
    """
    metadata: Any
    content: Optional[bytes] = None
    saved_to: Optional[str] = None

    def text(self, encoding: str = "utf-8") -> str:
        if self.content is None:
            raise ValueError(f"Content was saved to {self.saved_to}, not kept in memory")
        return self.content.decode(encoding, errors="replace")

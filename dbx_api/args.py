"""Typed request parameter records.

One dataclass per Dropbox argument struct. Field names are the Dropbox wire
names, so ``to_wire()`` is a straight walk over the fields:

- required fields (no default) passed as None raise ``ArgumentError`` when the
  record is constructed, before any request exists
- enum fields accept the member or its wire string and are validated up front
- optional fields left at None are omitted from the wire dict
- nested records and lists of records are serialised recursively
"""
from __future__ import annotations

from dataclasses import MISSING, dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional, Type, Union

from .exceptions import ArgumentError
from .models import (
    FileStatus,
    ImportFormat,
    ListRevisionsMode,
    PaperDocUpdatePolicy,
    PathOrLink,
    ThumbnailFormat,
    ThumbnailMode,
    ThumbnailQuality,
    ThumbnailSize,
    UploadSessionType,
    WriteMode,
    coerce_enum,
)


def enum_field(enum_cls: Type[Enum], default: Any = None) -> Any:
    return field(default=default, metadata={"enum": enum_cls})


def _to_wire(value: Any) -> Any:
    if isinstance(value, WireRecord):
        return value.to_wire()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_to_wire(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_wire(v) for k, v in value.items()}
    return value


def _coerce(record_cls: Type["WireRecord"], item: Any, name: str) -> "WireRecord":
    """Accept a record instance or a plain dict with the same wire keys."""
    if isinstance(item, record_cls):
        return item
    if isinstance(item, dict):
        try:
            return record_cls(**item)
        except TypeError as e:
            raise ArgumentError(f"Invalid {name} entry {item!r}: {e}") from e
    raise ArgumentError(f"Invalid {name} entry {item!r}: expected {record_cls.__name__} or dict")


class WireRecord:
    """Base for all parameter records (see module docstring)."""

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            required = f.default is MISSING and f.default_factory is MISSING
            if value is None:
                if required:
                    raise ArgumentError(f"{type(self).__name__}: '{f.name}' is required")
                continue
            enum_cls = f.metadata.get("enum")
            if enum_cls is not None:
                setattr(self, f.name, coerce_enum(value, enum_cls, f.name))
        self._normalize()

    def _normalize(self) -> None:
        pass

    def to_wire(self) -> Dict[str, Any]:
        wire: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            wire[f.name] = _to_wire(value)
        return wire


# -------------------------
# Generic
# -------------------------
@dataclass
class PathArg(WireRecord):
    path: str


@dataclass
class PollArg(WireRecord):
    async_job_id: str


@dataclass
class CursorArg(WireRecord):
    cursor: str


# -------------------------
# Copy / move
# -------------------------
@dataclass
class RelocationArg(WireRecord):
    from_path: str
    to_path: str
    allow_shared_folder: bool = False
    autorename: bool = False
    allow_ownership_transfer: bool = False


@dataclass
class RelocationPath(WireRecord):
    from_path: str
    to_path: str


@dataclass
class RelocationBatchArg(WireRecord):
    """Arguments of copy_batch_v2 and move_batch_v2.

    ``allow_ownership_transfer`` only exists on move_batch_v2; leave it None
    for copies.
    """
    entries: List[Union[RelocationPath, Dict[str, str]]]
    autorename: bool = False
    allow_ownership_transfer: Optional[bool] = None

    def _normalize(self) -> None:
        self.entries = [_coerce(RelocationPath, e, "relocation") for e in self.entries]


@dataclass
class SaveCopyReferenceArg(WireRecord):
    copy_reference: str
    path: str


# -------------------------
# Folders / delete
# -------------------------
@dataclass
class CreateFolderArg(WireRecord):
    path: str
    autorename: bool = False


@dataclass
class CreateFolderBatchArg(WireRecord):
    paths: List[str]
    autorename: bool = False
    force_async: bool = False


@dataclass
class DeleteArg(WireRecord):
    path: str
    parent_rev: Optional[str] = None


@dataclass
class DeleteBatchArg(WireRecord):
    entries: List[Union[DeleteArg, Dict[str, str]]]

    def _normalize(self) -> None:
        self.entries = [_coerce(DeleteArg, e, "delete") for e in self.entries]


@dataclass
class RestoreArg(WireRecord):
    path: str
    rev: str


# -------------------------
# Metadata / content download
# -------------------------
@dataclass
class GetMetadataArg(WireRecord):
    path: str
    include_media_info: bool = False
    include_deleted: bool = False
    include_has_explicit_shared_members: bool = False


@dataclass
class DownloadArg(WireRecord):
    path: str
    rev: Optional[str] = None


@dataclass
class ExportArg(WireRecord):
    path: str
    export_format: Optional[str] = None


@dataclass
class LockFileArg(WireRecord):
    path: str


@dataclass
class LockFileBatchArg(WireRecord):
    """Arguments of get_file_lock_batch, lock_file_batch and unlock_file_batch."""
    entries: List[Union[LockFileArg, Dict[str, str]]]

    def _normalize(self) -> None:
        self.entries = [_coerce(LockFileArg, e, "lock") for e in self.entries]


@dataclass
class ThumbnailV2Arg(WireRecord):
    """Arguments of get_thumbnail_v2.

    ``path`` is a Dropbox path for ``resource=PathOrLink.PATH`` and a shared
    link URL for ``PathOrLink.LINK``.
    """
    path: str
    format: ThumbnailFormat = enum_field(ThumbnailFormat, ThumbnailFormat.JPEG)
    size: ThumbnailSize = enum_field(ThumbnailSize, ThumbnailSize.W64H64)
    mode: ThumbnailMode = enum_field(ThumbnailMode, ThumbnailMode.STRICT)
    quality: ThumbnailQuality = enum_field(ThumbnailQuality, ThumbnailQuality.QUALITY_80)
    resource: PathOrLink = enum_field(PathOrLink, PathOrLink.PATH)

    def to_wire(self) -> Dict[str, Any]:
        if self.resource is PathOrLink.LINK:
            resource = {".tag": "link", "url": self.path}
        else:
            resource = {".tag": "path", "path": self.path}
        return {
            "resource": resource,
            "format": self.format.value,
            "size": self.size.value,
            "mode": self.mode.value,
            "quality": self.quality.value,
        }


@dataclass
class ThumbnailArg(WireRecord):
    path: str
    format: ThumbnailFormat = enum_field(ThumbnailFormat, ThumbnailFormat.JPEG)
    size: ThumbnailSize = enum_field(ThumbnailSize, ThumbnailSize.W64H64)
    mode: ThumbnailMode = enum_field(ThumbnailMode, ThumbnailMode.STRICT)
    quality: ThumbnailQuality = enum_field(ThumbnailQuality, ThumbnailQuality.QUALITY_80)


@dataclass
class GetThumbnailBatchArg(WireRecord):
    entries: List[ThumbnailArg]


# -------------------------
# Listing / revisions / search
# -------------------------
@dataclass
class ListFolderArg(WireRecord):
    path: str
    recursive: bool = False
    include_media_info: bool = False
    include_deleted: bool = False
    include_has_explicit_shared_members: bool = False
    include_mounted_folders: bool = True
    include_non_downloadable_files: bool = True
    limit: Optional[int] = None


@dataclass
class ListFolderLongpollArg(WireRecord):
    cursor: str
    timeout: int = 30


@dataclass
class ListRevisionsArg(WireRecord):
    path: str
    mode: ListRevisionsMode = enum_field(ListRevisionsMode, ListRevisionsMode.PATH)
    limit: int = 10


@dataclass
class SearchOptions(WireRecord):
    path: Optional[str] = None
    max_results: Optional[int] = None
    file_status: Optional[FileStatus] = enum_field(FileStatus)
    filename_only: Optional[bool] = None


@dataclass
class SearchMatchFieldOptions(WireRecord):
    include_highlights: bool = False


@dataclass
class SearchV2Arg(WireRecord):
    query: str
    options: Optional[SearchOptions] = None
    match_field_options: Optional[SearchMatchFieldOptions] = None


@dataclass
class SaveUrlArg(WireRecord):
    path: str
    url: str


# -------------------------
# Tags
# -------------------------
@dataclass
class TagArg(WireRecord):
    """Arguments of tags/add and tags/remove."""
    path: str
    tag_text: str


@dataclass
class GetTagsArg(WireRecord):
    paths: List[str]


# -------------------------
# Paper
# -------------------------
@dataclass
class PaperCreateArg(WireRecord):
    path: str
    import_format: ImportFormat = enum_field(ImportFormat, ImportFormat.MARKDOWN)


@dataclass
class PaperUpdateArg(WireRecord):
    path: str
    import_format: ImportFormat = enum_field(ImportFormat, ImportFormat.MARKDOWN)
    doc_update_policy: PaperDocUpdatePolicy = enum_field(PaperDocUpdatePolicy, PaperDocUpdatePolicy.UPDATE)
    paper_revision: Optional[int] = None


# -------------------------
# Upload
# -------------------------
@dataclass
class CommitInfo(WireRecord):
    """Where and how an uploaded file is committed.

    ``update_rev`` is only used with ``mode=WriteMode.UPDATE``: the mode then
    goes on the wire as ``{".tag": "update", "update": rev}``.
    """
    path: str
    mode: WriteMode = enum_field(WriteMode, WriteMode.ADD)
    autorename: bool = False
    client_modified: Optional[str] = None
    mute: bool = False
    strict_conflict: bool = False
    update_rev: Optional[str] = None

    def __post_init__(self) -> None:
        # ready-made dicts may carry the wire form {".tag": "update", "update": rev}
        if isinstance(self.mode, dict):
            self.update_rev = self.mode.get("update", self.update_rev)
            self.mode = self.mode.get(".tag")
        super().__post_init__()

    def _normalize(self) -> None:
        if self.mode is WriteMode.UPDATE and not self.update_rev:
            raise ArgumentError("CommitInfo: 'update_rev' is required when mode is 'update'")

    def to_wire(self) -> Dict[str, Any]:
        wire = super().to_wire()
        wire.pop("update_rev", None)
        if self.mode is WriteMode.UPDATE:
            wire["mode"] = {".tag": "update", "update": self.update_rev}
        return wire


@dataclass
class GetTemporaryUploadLinkArg(WireRecord):
    commit_info: CommitInfo
    duration: float = 3600.0

    def _normalize(self) -> None:
        self.commit_info = _coerce(CommitInfo, self.commit_info, "commit_info")


@dataclass
class UploadSessionCursor(WireRecord):
    session_id: str
    offset: int


@dataclass
class UploadSessionStartArg(WireRecord):
    close: bool = False
    session_type: Optional[UploadSessionType] = enum_field(UploadSessionType)


@dataclass
class UploadSessionAppendArg(WireRecord):
    cursor: UploadSessionCursor
    close: bool = False

    def _normalize(self) -> None:
        self.cursor = _coerce(UploadSessionCursor, self.cursor, "cursor")


@dataclass
class UploadSessionFinishArg(WireRecord):
    cursor: UploadSessionCursor
    commit: CommitInfo

    def _normalize(self) -> None:
        self.cursor = _coerce(UploadSessionCursor, self.cursor, "cursor")
        self.commit = _coerce(CommitInfo, self.commit, "commit")


@dataclass
class UploadSessionFinishBatchArg(WireRecord):
    entries: List[Union[UploadSessionFinishArg, Dict[str, Any]]]

    def _normalize(self) -> None:
        self.entries = [_coerce(UploadSessionFinishArg, e, "finish") for e in self.entries]


@dataclass
class UploadSessionStartBatchArg(WireRecord):
    num_sessions: int
    session_type: Optional[UploadSessionType] = enum_field(UploadSessionType)

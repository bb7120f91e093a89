"""Shared typing helpers used across the dbx_api package.

This module centralizes JSON-like typings and the typed dictionaries callers
may pass instead of the records from ``dbx_api.args`` (batch entries are
often built straight from another response).
"""
from __future__ import annotations

import os
from typing import IO, Dict, List, TypedDict, Union


# Recursive JSON-ish type used for payloads / returned JSON values
JSONType = Union[Dict[str, "JSONType"], List["JSONType"], str, int, float, bool, None]

# Anything an upload-style endpoint accepts as its request body
PayloadSource = Union[bytes, bytearray, memoryview, IO[bytes], str, "os.PathLike[str]"]


class RelocationPathDict(TypedDict):
    from_path: str
    to_path: str


class UploadSessionCursorDict(TypedDict):
    session_id: str
    offset: int


class CommitInfoDict(TypedDict, total=False):
    path: str
    mode: Union[str, Dict[str, str]]
    autorename: bool
    client_modified: str
    mute: bool
    strict_conflict: bool


class UploadSessionFinishArgDict(TypedDict):
    cursor: UploadSessionCursorDict
    commit: CommitInfoDict


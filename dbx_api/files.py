"""Dropbox ``files/*`` endpoints.

This module provides the DropboxFile class, which wraps DbxClient with one
async method per Dropbox route. Each method builds the route's parameter
record, issues exactly one request and returns ``Success`` or ``Failure``.

Batch routes may answer with an ``async_job_id`` instead of a result; the
paired ``*_check`` method polls it once. Looping is up to the caller.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Union

from .app import DropboxApp
from .args import (
    CommitInfo,
    CreateFolderArg,
    CreateFolderBatchArg,
    CursorArg,
    DeleteArg,
    DeleteBatchArg,
    DownloadArg,
    ExportArg,
    GetMetadataArg,
    GetTagsArg,
    GetTemporaryUploadLinkArg,
    GetThumbnailBatchArg,
    ListFolderArg,
    ListFolderLongpollArg,
    ListRevisionsArg,
    LockFileArg,
    LockFileBatchArg,
    PaperCreateArg,
    PaperUpdateArg,
    PathArg,
    PollArg,
    RelocationArg,
    RelocationBatchArg,
    RelocationPath,
    RestoreArg,
    SaveCopyReferenceArg,
    SaveUrlArg,
    SearchMatchFieldOptions,
    SearchOptions,
    SearchV2Arg,
    TagArg,
    ThumbnailArg,
    ThumbnailV2Arg,
    UploadSessionAppendArg,
    UploadSessionCursor,
    UploadSessionFinishArg,
    UploadSessionFinishBatchArg,
    UploadSessionStartArg,
    UploadSessionStartBatchArg,
)
from .client import DbxClient
from .exceptions import ArgumentError
from .helpers import read_payload
from .models import (
    DbxResult,
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
)
from .types import PayloadSource, RelocationPathDict, UploadSessionFinishArgDict

log = logging.getLogger(__name__)

RelocationEntries = Sequence[Union[RelocationPath, RelocationPathDict]]


def _listed(items: Sequence[Any], name: str) -> List[Any]:
    if items is None:
        raise ArgumentError(f"'{name}' is required")
    if isinstance(items, (str, bytes, dict)):
        raise ArgumentError(f"'{name}' must be a list, not a single {type(items).__name__}")
    return list(items)


class DropboxFile:
    """Typed access to the Dropbox files namespace.

    Example:
        app = Dropbox.initialize_app(token)
        async with DropboxFile.from_app(app) as files:
            result = await files.copy_v2("/a.txt", "/b.txt")
            if result.success:
                print(result.payload["metadata"]["path_display"])
            else:
                print(result.error_summary)

            # Batch route + one-shot check; polling is the caller's loop
            started = await files.delete_batch(["/old1", "/old2"])
            if started.success and started.async_job_id:
                status = await files.delete_batch_check(started.async_job_id)
                print(status.job_status)
    """

    def __init__(self, client: DbxClient):
        """Initialize DropboxFile with a DbxClient.

        Args:
            client: DbxClient holding the credential and HTTP session
        """
        self.client = client

    @classmethod
    def from_app(cls, app: Union[DropboxApp, str], **client_options: Any) -> "DropboxFile":
        """Create a DropboxFile with its own DbxClient.

        Args:
            app: DropboxApp or raw access token
            **client_options: Passed to DbxClient (timeout, ssl, ...)
        """
        return cls(DbxClient(app, **client_options))

    async def __aenter__(self) -> "DropboxFile":
        await self.client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.client.close()

    # -------------------------
    # Copy / move
    # -------------------------
    async def copy_v2(self, from_path: str, to_path: str, *,
                      allow_ownership_transfer: bool = False,
                      allow_shared_folder: bool = False,
                      autorename: bool = False) -> DbxResult:
        """Copy a file or folder to a different location in the user's Dropbox.

        Args:
            from_path: Path of the file or folder to copy
            to_path: Destination path
            allow_ownership_transfer: Allow moves by owner even if it results in ownership transfer
            allow_shared_folder: Deprecated by Dropbox; has no effect
            autorename: Let the server autorename the copy on conflict

        Returns:
            Success (``to_dict()`` -> ``{"success": True, "metadata": body}``) or Failure
        """
        arg = RelocationArg(from_path, to_path, allow_shared_folder=allow_shared_folder,
                            autorename=autorename, allow_ownership_transfer=allow_ownership_transfer)
        log.info(f"Copying {from_path} -> {to_path}")
        return await self.client.rpc("files/copy_v2", arg, result_key="metadata")

    async def copy_batch_v2(self, entries: RelocationEntries, *, autorename: bool = False) -> DbxResult:
        """Copy multiple files or folders at once.

        Finishes synchronously (``.tag == "complete"``) or returns an
        ``async_job_id`` to pass to ``copy_batch_check_v2``.

        Args:
            entries: RelocationPath records or ``{"from_path", "to_path"}`` dicts
            autorename: Let the server autorename entries on conflict
        """
        arg = RelocationBatchArg(_listed(entries, "entries"), autorename=autorename)
        log.info(f"Copying {len(arg.entries)} entries in batch")
        return await self.client.rpc("files/copy_batch_v2", arg)

    async def copy_batch_check_v2(self, async_job_id: str) -> DbxResult:
        """Return the status of a copy_batch_v2 job."""
        return await self.client.rpc("files/copy_batch/check_v2", PollArg(async_job_id))

    async def copy_reference_get(self, path: str) -> DbxResult:
        """Get a copy reference to a file or folder."""
        return await self.client.rpc("files/copy_reference/get", PathArg(path))

    async def copy_reference_save(self, copy_reference: str, path: str) -> DbxResult:
        """Save a copy reference returned by copy_reference_get to the user's Dropbox."""
        log.info(f"Saving copy reference to {path}")
        return await self.client.rpc("files/copy_reference/save", SaveCopyReferenceArg(copy_reference, path))

    async def move_v2(self, from_path: str, to_path: str, *,
                      allow_ownership_transfer: bool = False,
                      allow_shared_folder: bool = False,
                      autorename: bool = False) -> DbxResult:
        """Move a file or folder. Case-only renaming is not supported by Dropbox."""
        arg = RelocationArg(from_path, to_path, allow_shared_folder=allow_shared_folder,
                            autorename=autorename, allow_ownership_transfer=allow_ownership_transfer)
        log.info(f"Moving {from_path} -> {to_path}")
        return await self.client.rpc("files/move_v2", arg)

    async def move_batch_v2(self, entries: RelocationEntries, *,
                            allow_ownership_transfer: bool = False,
                            autorename: bool = False) -> DbxResult:
        """Move multiple files or folders at once; per-entry status in the result."""
        arg = RelocationBatchArg(_listed(entries, "entries"), autorename=autorename,
                                 allow_ownership_transfer=allow_ownership_transfer)
        log.info(f"Moving {len(arg.entries)} entries in batch")
        return await self.client.rpc("files/move_batch_v2", arg)

    async def move_batch_check_v2(self, async_job_id: str) -> DbxResult:
        """Return the status of a move_batch_v2 job."""
        return await self.client.rpc("files/move_batch/check_v2", PollArg(async_job_id))

    # -------------------------
    # Folders / delete / restore
    # -------------------------
    async def create_folder_v2(self, path: str, *, autorename: bool = False) -> DbxResult:
        """Create a folder at a given path."""
        log.info(f"Creating folder {path}")
        return await self.client.rpc("files/create_folder_v2", CreateFolderArg(path, autorename=autorename))

    async def create_folder_batch(self, paths: Sequence[str], *, autorename: bool = False,
                                  force_async: bool = False) -> DbxResult:
        """Create multiple folders at once.

        Large batches (or ``force_async=True``) return an ``async_job_id`` for
        ``create_folder_batch_check``.
        """
        arg = CreateFolderBatchArg(_listed(paths, "paths"), autorename=autorename, force_async=force_async)
        log.info(f"Creating {len(arg.paths)} folders in batch")
        return await self.client.rpc("files/create_folder_batch", arg)

    async def create_folder_batch_check(self, async_job_id: str) -> DbxResult:
        """Return the status of a create_folder_batch job."""
        return await self.client.rpc("files/create_folder_batch/check", PollArg(async_job_id))

    async def delete_v2(self, path: str, *, parent_rev: Optional[str] = None) -> DbxResult:
        """Delete the file or folder at a given path.

        Args:
            path: Path to delete
            parent_rev: Only delete if this matches the file's latest rev
        """
        log.info(f"Deleting {path}")
        return await self.client.rpc("files/delete_v2", DeleteArg(path, parent_rev=parent_rev))

    async def delete_batch(self, paths: Sequence[str]) -> DbxResult:
        """Delete multiple files/folders at once. Use delete_batch_check on the job id."""
        arg = DeleteBatchArg([DeleteArg(p) for p in _listed(paths, "paths")])
        log.info(f"Deleting {len(arg.entries)} entries in batch")
        return await self.client.rpc("files/delete_batch", arg)

    async def delete_batch_check(self, async_job_id: str) -> DbxResult:
        """Return the status of a delete_batch job."""
        return await self.client.rpc("files/delete_batch/check", PollArg(async_job_id))

    async def permanently_delete(self, path: str, *, parent_rev: Optional[str] = None) -> DbxResult:
        """Permanently delete the file or folder at a given path (team accounts only)."""
        log.warning(f"Permanently deleting {path}")
        return await self.client.rpc("files/permanently_delete", DeleteArg(path, parent_rev=parent_rev))

    async def restore(self, path: str, rev: str) -> DbxResult:
        """Restore a specific revision of a file to the given path."""
        log.info(f"Restoring {path} to rev {rev}")
        return await self.client.rpc("files/restore", RestoreArg(path, rev))

    # -------------------------
    # Metadata / links
    # -------------------------
    async def get_metadata(self, path: str, *, include_media_info: bool = False,
                           include_deleted: bool = False,
                           include_has_explicit_shared_members: bool = False) -> DbxResult:
        """Return the metadata for a file or folder (``.tag`` file/folder/deleted)."""
        arg = GetMetadataArg(path, include_media_info=include_media_info, include_deleted=include_deleted,
                             include_has_explicit_shared_members=include_has_explicit_shared_members)
        return await self.client.rpc("files/get_metadata", arg)

    async def get_temporary_link(self, path: str) -> DbxResult:
        """Get a 4-hour link to stream the content of a file."""
        return await self.client.rpc("files/get_temporary_link", PathArg(path))

    async def get_temporary_upload_link(self, path: str, *,
                                        mode: Union[WriteMode, str] = WriteMode.ADD,
                                        autorename: bool = True,
                                        mute: bool = False,
                                        strict_conflict: bool = False,
                                        update_rev: Optional[str] = None,
                                        duration: float = 3600) -> DbxResult:
        """Get a one-time link that uploads its request body to ``path``.

        Args:
            path: Destination path of the future upload
            mode: Write mode of the commit
            autorename: Autorename on conflict
            mute: Don't notify the user's desktop clients
            strict_conflict: Treat identical-content writes as conflicts too
            update_rev: Required rev when mode is update
            duration: Link lifetime in seconds (Dropbox allows 60 to 14400)
        """
        commit = CommitInfo(path, mode=mode, autorename=autorename, mute=mute,
                            strict_conflict=strict_conflict, update_rev=update_rev)
        arg = GetTemporaryUploadLinkArg(commit, duration=float(duration))
        return await self.client.rpc("files/get_temporary_upload_link", arg)

    async def get_file_lock_batch(self, paths: Sequence[str]) -> DbxResult:
        """Return the lock metadata for the given paths."""
        arg = LockFileBatchArg([LockFileArg(p) for p in _listed(paths, "paths")])
        return await self.client.rpc("files/get_file_lock_batch", arg)

    async def lock_file_batch(self, paths: Sequence[str]) -> DbxResult:
        """Lock the files at the given paths; only the lock holder can write them."""
        arg = LockFileBatchArg([LockFileArg(p) for p in _listed(paths, "paths")])
        log.info(f"Locking {len(arg.entries)} files")
        return await self.client.rpc("files/lock_file_batch", arg)

    async def unlock_file_batch(self, paths: Sequence[str]) -> DbxResult:
        """Unlock the files at the given paths."""
        arg = LockFileBatchArg([LockFileArg(p) for p in _listed(paths, "paths")])
        log.info(f"Unlocking {len(arg.entries)} files")
        return await self.client.rpc("files/unlock_file_batch", arg)

    # -------------------------
    # Listing / revisions / search
    # -------------------------
    async def list_folder(self, path: str, *, recursive: bool = False,
                          include_media_info: bool = False,
                          include_deleted: bool = False,
                          include_has_explicit_shared_members: bool = False,
                          include_mounted_folders: bool = True,
                          include_non_downloadable_files: bool = True,
                          limit: Optional[int] = None) -> DbxResult:
        """Start listing the contents of a folder.

        If the payload's ``has_more`` is true, pass its ``cursor`` to
        ``list_folder_continue``. The root folder is ``""``.

        Args:
            path: Folder path ("" for root)
            recursive: Include all subfolders
            include_media_info: Deprecated by Dropbox
            include_deleted: Include deleted entries
            include_has_explicit_shared_members: Flag entries with explicit members
            include_mounted_folders: Include app/shared/team folders
            include_non_downloadable_files: Include e.g. Google Docs
            limit: Approximate maximum number of entries per page
        """
        arg = ListFolderArg(path, recursive=recursive, include_media_info=include_media_info,
                            include_deleted=include_deleted,
                            include_has_explicit_shared_members=include_has_explicit_shared_members,
                            include_mounted_folders=include_mounted_folders,
                            include_non_downloadable_files=include_non_downloadable_files,
                            limit=limit)
        log.info(f"Listing folder {path or '/'} (recursive={recursive}, limit={limit})")
        return await self.client.rpc("files/list_folder", arg)

    async def list_folder_continue(self, cursor: str) -> DbxResult:
        """Fetch the next page of a list_folder listing."""
        return await self.client.rpc("files/list_folder/continue", CursorArg(cursor))

    async def list_folder_get_latest_cursor(self, path: str, *, recursive: bool = False,
                                            include_media_info: bool = False,
                                            include_deleted: bool = False,
                                            include_has_explicit_shared_members: bool = False,
                                            include_mounted_folders: bool = True,
                                            include_non_downloadable_files: bool = True) -> DbxResult:
        """Get a cursor for the folder's current state without listing entries."""
        arg = ListFolderArg(path, recursive=recursive, include_media_info=include_media_info,
                            include_deleted=include_deleted,
                            include_has_explicit_shared_members=include_has_explicit_shared_members,
                            include_mounted_folders=include_mounted_folders,
                            include_non_downloadable_files=include_non_downloadable_files)
        return await self.client.rpc("files/list_folder/get_latest_cursor", arg)

    async def list_folder_longpoll(self, cursor: str, *, timeout: int = 30) -> DbxResult:
        """Block until the folder behind ``cursor`` changes or ``timeout`` expires.

        The server may add up to 90 seconds of jitter on top of ``timeout``;
        make sure the client's own timeout allows for it.
        """
        log.debug(f"Long-polling for changes (timeout={timeout}s)")
        return await self.client.notify("files/list_folder/longpoll", ListFolderLongpollArg(cursor, timeout=timeout))

    async def list_revisions(self, path: str, *,
                             mode: Union[ListRevisionsMode, str] = ListRevisionsMode.PATH,
                             limit: int = 10) -> DbxResult:
        """Return revisions of a file, by path or by file id."""
        return await self.client.rpc("files/list_revisions", ListRevisionsArg(path, mode=mode, limit=limit))

    async def search_v2(self, query: str, *, path: Optional[str] = None,
                        max_results: Optional[int] = None,
                        file_status: Optional[Union[FileStatus, str]] = None,
                        filename_only: Optional[bool] = None,
                        include_highlights: Optional[bool] = None) -> DbxResult:
        """Search for files and folders.

        Options left at None are not sent, so the server defaults apply.
        """
        options = None
        if any(v is not None for v in (path, max_results, file_status, filename_only)):
            options = SearchOptions(path=path, max_results=max_results,
                                    file_status=file_status, filename_only=filename_only)
        match_options = None
        if include_highlights is not None:
            match_options = SearchMatchFieldOptions(include_highlights=include_highlights)
        log.info(f"Searching for {query!r}")
        return await self.client.rpc("files/search_v2", SearchV2Arg(query, options, match_options))

    async def search_continue_v2(self, cursor: str) -> DbxResult:
        """Fetch the next page of search_v2 results."""
        return await self.client.rpc("files/search/continue_v2", CursorArg(cursor))

    async def save_url(self, path: str, url: str) -> DbxResult:
        """Save the data at ``url`` into a file in the user's Dropbox (async job)."""
        log.info(f"Saving {url} to {path}")
        return await self.client.rpc("files/save_url", SaveUrlArg(path, url))

    async def save_url_check_job_status(self, async_job_id: str) -> DbxResult:
        """Return the status of a save_url job."""
        return await self.client.rpc("files/save_url/check_job_status", PollArg(async_job_id))

    # -------------------------
    # Tags
    # -------------------------
    async def tags_add(self, path: str, tag_text: str) -> DbxResult:
        """Add a tag to an item."""
        log.info(f"Tagging {path} with {tag_text!r}")
        return await self.client.rpc("files/tags/add", TagArg(path, tag_text))

    async def tags_get(self, paths: Sequence[str]) -> DbxResult:
        """Get the tags assigned to the given items."""
        return await self.client.rpc("files/tags/get", GetTagsArg(_listed(paths, "paths")))

    async def tags_remove(self, path: str, tag_text: str) -> DbxResult:
        """Remove a tag from an item."""
        log.info(f"Removing tag {tag_text!r} from {path}")
        return await self.client.rpc("files/tags/remove", TagArg(path, tag_text))

    # -------------------------
    # Content download
    # -------------------------
    async def download(self, path: str, *, rev: Optional[str] = None,
                       save_to: Optional[str] = None) -> DbxResult:
        """Download a file.

        Returns:
            Success with a DownloadResult payload: file metadata from the
            Dropbox-API-Result header plus the bytes (or ``saved_to`` when
            ``save_to`` is given), or Failure
        """
        log.info(f"Downloading {path}")
        return await self.client.download("files/download", DownloadArg(path, rev=rev), save_to=save_to)

    async def download_zip(self, path: str, *, save_to: Optional[str] = None) -> DbxResult:
        """Download a folder as a zip file."""
        log.info(f"Downloading folder {path} as zip")
        return await self.client.download("files/download_zip", PathArg(path), save_to=save_to)

    async def export(self, path: str, *, export_format: Optional[str] = None,
                     save_to: Optional[str] = None) -> DbxResult:
        """Export a non-downloadable file (e.g. a Paper doc) in one of its export formats."""
        log.info(f"Exporting {path}" + (f" as {export_format}" if export_format else ""))
        return await self.client.download("files/export", ExportArg(path, export_format=export_format),
                                          save_to=save_to)

    async def get_preview(self, path: str, *, rev: Optional[str] = None,
                          save_to: Optional[str] = None) -> DbxResult:
        """Get a PDF or HTML preview of a file."""
        return await self.client.download("files/get_preview", DownloadArg(path, rev=rev), save_to=save_to)

    async def get_thumbnail_v2(self, path: str, *,
                               format: Union[ThumbnailFormat, str] = ThumbnailFormat.JPEG,
                               size: Union[ThumbnailSize, str] = ThumbnailSize.W64H64,
                               mode: Union[ThumbnailMode, str] = ThumbnailMode.STRICT,
                               quality: Union[ThumbnailQuality, str] = ThumbnailQuality.QUALITY_80,
                               resource: Union[PathOrLink, str] = PathOrLink.PATH,
                               save_to: Optional[str] = None) -> DbxResult:
        """Get a thumbnail for an image. Photos larger than 20MB are not converted.

        Args:
            path: Dropbox path, or the shared link URL when ``resource`` is link
            format: Thumbnail image format
            size: Thumbnail size
            mode: How to resize and crop
            quality: Thumbnail quality
            resource: Whether ``path`` is a path or a shared link
            save_to: Stream the image to this local path instead of memory
        """
        arg = ThumbnailV2Arg(path, format=format, size=size, mode=mode, quality=quality, resource=resource)
        return await self.client.download("files/get_thumbnail_v2", arg, save_to=save_to)

    async def get_thumbnail_batch(self, paths: Sequence[str], *,
                                  format: Union[ThumbnailFormat, str] = ThumbnailFormat.JPEG,
                                  size: Union[ThumbnailSize, str] = ThumbnailSize.W64H64,
                                  mode: Union[ThumbnailMode, str] = ThumbnailMode.STRICT,
                                  quality: Union[ThumbnailQuality, str] = ThumbnailQuality.QUALITY_80) -> DbxResult:
        """Get thumbnails for up to 25 images; thumbnails come back base64-encoded in JSON."""
        entries = [ThumbnailArg(p, format=format, size=size, mode=mode, quality=quality)
                   for p in _listed(paths, "paths")]
        return await self.client.content_rpc("files/get_thumbnail_batch", GetThumbnailBatchArg(entries))

    # -------------------------
    # Paper
    # -------------------------
    async def paper_create(self, path: str, content: PayloadSource, *,
                           import_format: Union[ImportFormat, str] = ImportFormat.MARKDOWN) -> DbxResult:
        """Create a new Paper doc with the provided content.

        Args:
            path: Full path of the new doc, ending in ``.paper``
            content: Document body (bytes, binary file object or local path)
            import_format: How ``content`` is interpreted
        """
        arg = PaperCreateArg(path, import_format=import_format)
        data = read_payload(content)
        log.info(f"Creating Paper doc {path} ({len(data)} bytes)")
        return await self.client.upload("files/paper/create", arg, data)

    async def paper_update(self, path: str, content: PayloadSource, *,
                           doc_update_policy: Union[PaperDocUpdatePolicy, str] = PaperDocUpdatePolicy.UPDATE,
                           import_format: Union[ImportFormat, str] = ImportFormat.MARKDOWN,
                           paper_revision: Optional[int] = None) -> DbxResult:
        """Update an existing Paper doc.

        ``paper_revision`` must be the doc's latest revision when
        ``doc_update_policy`` is update.
        """
        arg = PaperUpdateArg(path, import_format=import_format, doc_update_policy=doc_update_policy,
                             paper_revision=paper_revision)
        data = read_payload(content)
        log.info(f"Updating Paper doc {path} ({arg.doc_update_policy.value})")
        return await self.client.upload("files/paper/update", arg, data)

    # -------------------------
    # Upload
    # -------------------------
    async def upload(self, data: PayloadSource, path: str, *,
                     mode: Union[WriteMode, str] = WriteMode.ADD,
                     autorename: bool = False,
                     mute: bool = False,
                     strict_conflict: bool = False,
                     client_modified: Optional[str] = None,
                     update_rev: Optional[str] = None) -> DbxResult:
        """Create a file with the given contents. Use an upload session above 150 MB.

        Args:
            data: File contents (bytes, binary file object or local path)
            path: Destination path in the user's Dropbox
            mode: Write mode
            autorename: Autorename on conflict
            mute: Don't notify the user's desktop clients
            strict_conflict: Treat identical-content writes as conflicts too
            client_modified: ISO 8601 modification time to record, e.g. "2024-01-01T00:00:00Z"
            update_rev: Required rev when mode is update
        """
        commit = CommitInfo(path, mode=mode, autorename=autorename, client_modified=client_modified,
                            mute=mute, strict_conflict=strict_conflict, update_rev=update_rev)
        body = read_payload(data)
        log.info(f"Uploading {len(body)} bytes to {path} (mode={commit.mode.value})")
        return await self.client.upload("files/upload", commit, body)

    async def upload_session_start(self, data: PayloadSource = b"", *, close: bool = False,
                                   session_type: Optional[Union[UploadSessionType, str]] = None) -> DbxResult:
        """Start an upload session, optionally with the first chunk.

        The payload's ``session_id`` identifies the session for append/finish.
        Concurrent sessions must not send data here.
        """
        arg = UploadSessionStartArg(close=close, session_type=session_type)
        body = read_payload(data)
        log.info(f"Starting upload session with {len(body)} bytes (close={close})")
        return await self.client.upload("files/upload_session/start", arg, body)

    async def upload_session_start_batch(self, num_sessions: int, *,
                                         session_type: Optional[Union[UploadSessionType, str]] = None) -> DbxResult:
        """Start ``num_sessions`` upload sessions in one call."""
        arg = UploadSessionStartBatchArg(num_sessions, session_type=session_type)
        return await self.client.rpc("files/upload_session/start_batch", arg)

    async def upload_session_append_v2(self, data: PayloadSource, session_id: str, offset: int, *,
                                       close: bool = False) -> DbxResult:
        """Append a chunk to an upload session.

        ``session_id`` and ``offset`` are sent exactly as given; tracking the
        offset (bytes uploaded so far) is the caller's job.
        """
        arg = UploadSessionAppendArg(UploadSessionCursor(session_id, offset), close=close)
        body = read_payload(data)
        log.info(f"Appending {len(body)} bytes to session {session_id} at offset {offset}")
        return await self.client.upload("files/upload_session/append_v2", arg, body)

    async def upload_session_finish(self, session_id: str, offset: int, path: str, *,
                                    data: PayloadSource = b"",
                                    mode: Union[WriteMode, str] = WriteMode.ADD,
                                    autorename: bool = False,
                                    mute: bool = False,
                                    strict_conflict: bool = False,
                                    client_modified: Optional[str] = None,
                                    update_rev: Optional[str] = None) -> DbxResult:
        """Finish an upload session and commit it to ``path``.

        Args:
            session_id: Session to finish
            offset: Total bytes uploaded so far (before ``data``)
            path: Destination path
            data: Optional last chunk
        """
        arg = UploadSessionFinishArg(
            UploadSessionCursor(session_id, offset),
            CommitInfo(path, mode=mode, autorename=autorename, client_modified=client_modified,
                       mute=mute, strict_conflict=strict_conflict, update_rev=update_rev),
        )
        body = read_payload(data)
        log.info(f"Finishing upload session {session_id} at offset {offset} -> {path}")
        return await self.client.upload("files/upload_session/finish", arg, body)

    async def upload_session_finish_batch_v2(
        self, entries: Sequence[Union[UploadSessionFinishArg, UploadSessionFinishArgDict]]
    ) -> DbxResult:
        """Commit up to 1000 closed upload sessions in one request.

        The last start/append call of every session must have had ``close=True``.
        """
        arg = UploadSessionFinishBatchArg(_listed(entries, "entries"))
        log.info(f"Finishing {len(arg.entries)} upload sessions in batch")
        return await self.client.rpc("files/upload_session/finish_batch_v2", arg)

    async def upload_session_finish_batch_check(self, async_job_id: str) -> DbxResult:
        """Return the status of an upload_session/finish_batch job."""
        return await self.client.rpc("files/upload_session/finish_batch/check", PollArg(async_job_id))

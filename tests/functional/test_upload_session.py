"""
Test: upload a local file through an upload session, then download it back
Usage:
  python tests/functional/test_upload_session.py <local_file> [chunk_size_bytes]
"""

import asyncio
import sys
from pathlib import Path

# Add repo root to path for package imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from tests.utils.read_credentials import read_credentials


async def main():
    creds = read_credentials()
    if not creds.get("DROPBOX_ACCESS_TOKEN"):
        print("Missing credentials.")
        return
    if len(sys.argv) < 2:
        print("Usage: python tests/functional/test_upload_session.py <local_file> [chunk_size_bytes]")
        return
    local = Path(sys.argv[1])
    chunk_size = int(sys.argv[2]) if len(sys.argv) > 2 else 4 * 1024 * 1024
    target = f"{creds['DROPBOX_TEST_FOLDER'].rstrip('/')}/{local.name}"

    from dbx_api import Dropbox, DropboxFile

    app = Dropbox.initialize_app(creds["DROPBOX_ACCESS_TOKEN"])
    async with DropboxFile.from_app(app, timeout=300) as files:
        with open(local, "rb") as f:
            chunk = f.read(chunk_size)
            started = await files.upload_session_start(chunk)
            if not started.success:
                print("upload_session_start failed:", started.error)
                return
            session_id = started.payload["session_id"]
            offset = len(chunk)
            while True:
                chunk = f.read(chunk_size)
                if not chunk:
                    break
                appended = await files.upload_session_append_v2(chunk, session_id, offset)
                if not appended.success:
                    print("append failed:", appended.error)
                    return
                offset += len(chunk)
                print(f"Uploaded {offset} bytes")

        finished = await files.upload_session_finish(session_id, offset, target, mode="overwrite")
        if not finished.success:
            print("upload_session_finish failed:", finished.error)
            return
        print("Committed:", finished.payload["path_display"], finished.payload["size"], "bytes")

        downloaded = await files.download(target)
        same = downloaded.success and downloaded.payload.content == local.read_bytes()
        print("Round trip matches:", same)


if __name__ == "__main__":
    asyncio.run(main())

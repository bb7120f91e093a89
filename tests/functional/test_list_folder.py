"""
Test: list_folder + list_folder_continue (prints every entry under a folder)
Usage:
  python tests/functional/test_list_folder.py [path]
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
        print(
            "Missing credentials. Copy tests/utils/credentials.txt.example -> "
            "tests/utils/credentials.txt and fill in DROPBOX_ACCESS_TOKEN"
        )
        return
    path = sys.argv[1] if len(sys.argv) > 1 else ""
    from dbx_api import Dropbox, DropboxFile

    app = Dropbox.initialize_app(creds["DROPBOX_ACCESS_TOKEN"])
    async with DropboxFile.from_app(app) as files:
        result = await files.list_folder(path, limit=100)
        if not result.success:
            print("list_folder failed:", result.status, result.error)
            return
        page = 1
        while True:
            for entry in result.payload["entries"]:
                print(f"[{entry['.tag']}] {entry.get('path_display')}")
            if not result.payload["has_more"]:
                break
            page += 1
            result = await files.list_folder_continue(result.payload["cursor"])
            if not result.success:
                print("list_folder_continue failed:", result.status, result.error)
                return
        print(f"Done ({page} page(s))")


if __name__ == "__main__":
    asyncio.run(main())

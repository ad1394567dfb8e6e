"""
Example: Local Server Authentication (Development Only)

This example authorizes against Google Drive with the local server flow and
lists the first page of folders in My Drive. The browser opens automatically
and handles the OAuth callback.

IMPORTANT: This is for NON-PRODUCTION use only!

Prerequisites:
1. Create a Google Cloud Project and enable the Google Drive API
2. Create OAuth 2.0 credentials (Desktop application type)
3. Export them:
       export GOOGLE_DRIVE_CLIENT_ID=...
       export GOOGLE_DRIVE_CLIENT_SECRET=...

Usage:
    python example_local_auth.py [folder_id]
"""

import logging
import sys

from src.google_drive_client import UserClient, DriveConfig, GoogleDriveClientError


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    folder_id = sys.argv[1] if len(sys.argv) > 1 else "root"

    print("=" * 60)
    print("Local Server Authentication Example")
    print("=" * 60)
    print()

    try:
        user = UserClient.authorize(config=DriveConfig.from_env())
        print("✓ Authentication successful!")
        print()

        about = user.drive.get_about(fields="user")
        print(f"Signed in as {about.get('user', {}).get('displayName')}")
        print()

        page_token = None
        while True:
            page = user.drive.list_folders_in_folder(folder_id, page_size=100, page_token=page_token)
            for folder in page.files:
                print(f"  [Folder] {folder.name} ({folder.file_id})")
            if not page.has_next_page:
                break
            page_token = page.next_page_token

    except GoogleDriveClientError as e:
        print()
        print(f"✗ Error: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())

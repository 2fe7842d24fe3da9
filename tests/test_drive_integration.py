import argparse
import os
import unittest
import uuid

from gdriveblobs import AuthInfo, GoogleDriveBlobs, NotFoundError

REQUIRED_ENV = (
    "GDRIVEBLOBS_CLIENT_ID",
    "GDRIVEBLOBS_CLIENT_SECRET",
    "GDRIVEBLOBS_REFRESH_TOKEN",
    "GDRIVEBLOBS_TEST_ROOT_ID",
)


@unittest.skipUnless(
    all(os.environ.get(name, "").strip() for name in REQUIRED_ENV),
    "Set GDRIVEBLOBS_* env vars to run the Drive integration test",
)
class TestGoogleDriveIntegration(unittest.TestCase):
    """
    Integration test with real Google Drive.

    Required env vars:
        - GDRIVEBLOBS_CLIENT_ID / GDRIVEBLOBS_CLIENT_SECRET: OAuth client
        - GDRIVEBLOBS_REFRESH_TOKEN: refresh token for that client
        - GDRIVEBLOBS_TEST_ROOT_ID: Drive folder ID used as test root (safe sandbox)
    """

    @classmethod
    def setUpClass(cls) -> None:
        cls.root_id = os.environ["GDRIVEBLOBS_TEST_ROOT_ID"].strip()
        cls.auth_info = AuthInfo.from_env()

    def test_blob_lifecycle(self) -> None:
        store = GoogleDriveBlobs(self.auth_info, parent_id=self.root_id)

        folder = store.mkdir(f"gdriveblobs_it_{uuid.uuid4().hex[:8]}")
        scoped = GoogleDriveBlobs(self.auth_info, parent_id=folder.file_id)

        key = "hello.txt"
        payload = b"hello from gdriveblobs integration test\n"
        try:
            info = scoped.write(key, payload)
            self.assertEqual(info.size, len(payload))
            self.assertEqual(info.key, info.md5_checksum)

            self.assertTrue(scoped.exists(key))
            self.assertEqual(scoped.read(key), payload)
            self.assertEqual(b"".join(scoped.iter_read(key)), payload)

            scoped.remove(key)
            self.assertFalse(scoped.exists(key))
            with self.assertRaises(NotFoundError):
                scoped.remove(key)
        finally:
            store.remove(folder.title)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose unittest output",
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_args()
    unittest.main(verbosity=2 if args.verbose else 1, argv=[__file__])

import unittest

import gdriveblobs


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(gdriveblobs, "GoogleDriveBlobs"))
        self.assertTrue(hasattr(gdriveblobs, "BlobInfo"))
        self.assertTrue(hasattr(gdriveblobs, "AuthInfo"))
        self.assertTrue(hasattr(gdriveblobs, "OAuthClient"))

        self.assertTrue(hasattr(gdriveblobs, "GDriveBlobsError"))
        self.assertTrue(hasattr(gdriveblobs, "NotFoundError"))
        self.assertTrue(hasattr(gdriveblobs, "AuthError"))

    def test___all___is_defined(self) -> None:
        self.assertTrue(hasattr(gdriveblobs, "__all__"))
        self.assertIn("GoogleDriveBlobs", gdriveblobs.__all__)
        self.assertIn("GDriveBlobsError", gdriveblobs.__all__)
        for name in gdriveblobs.__all__:
            self.assertTrue(hasattr(gdriveblobs, name), name)


if __name__ == "__main__":
    unittest.main()

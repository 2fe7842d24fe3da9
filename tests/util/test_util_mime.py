import unittest

from gdriveblobs.util.mime import (
    DEFAULT_MIME,
    FOLDER_MIME,
    guess_mime_type,
    is_download_disallowed,
    is_folder,
    is_google_app,
)


class TestUtilMime(unittest.TestCase):
    def test_guess_mime_type(self) -> None:
        self.assertEqual(guess_mime_type("hello.txt"), "text/plain")
        self.assertEqual(guess_mime_type("photo.PNG"), "image/png")
        self.assertEqual(guess_mime_type("data.json"), "application/json")

    def test_guess_mime_type_fallback(self) -> None:
        self.assertEqual(guess_mime_type("d41d8cd98f00b204e9800998ecf8427e"), DEFAULT_MIME)
        self.assertEqual(guess_mime_type(""), DEFAULT_MIME)
        self.assertEqual(guess_mime_type(None), DEFAULT_MIME)

    def test_is_folder(self) -> None:
        self.assertTrue(is_folder(FOLDER_MIME))
        self.assertFalse(is_folder("text/plain"))

    def test_is_google_app(self) -> None:
        self.assertTrue(is_google_app("application/vnd.google-apps.document"))
        self.assertTrue(is_google_app("application/vnd.google-apps.some-new-type"))
        self.assertFalse(is_google_app("application/pdf"))

    def test_is_download_disallowed(self) -> None:
        self.assertTrue(is_download_disallowed(FOLDER_MIME))
        self.assertTrue(is_download_disallowed("application/vnd.google-apps.spreadsheet"))
        self.assertFalse(is_download_disallowed("text/plain"))
        self.assertFalse(is_download_disallowed(DEFAULT_MIME))


if __name__ == "__main__":
    unittest.main()

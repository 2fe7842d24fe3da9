import unittest

from gdriveblobs.models import BlobInfo
from gdriveblobs.util.mime import FOLDER_MIME


class TestBlobInfo(unittest.TestCase):
    def test_defaults(self) -> None:
        info = BlobInfo(file_id="F1", title="a.txt", mime_type="text/plain")
        self.assertEqual(info.parents, [])
        self.assertEqual(info.properties, {})
        self.assertIsNone(info.key)
        self.assertIsNone(info.size)
        self.assertFalse(info.trashed)

    def test_mutable_defaults_are_not_shared(self) -> None:
        a = BlobInfo(file_id="A", title="a", mime_type=FOLDER_MIME)
        b = BlobInfo(file_id="B", title="b", mime_type=FOLDER_MIME)
        a.parents.append("P1")
        a.properties["key"] = "x"
        self.assertEqual(b.parents, [])
        self.assertEqual(b.properties, {})


if __name__ == "__main__":
    unittest.main()

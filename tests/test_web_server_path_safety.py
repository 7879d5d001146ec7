"""
Tests for web server path safety: every route that takes a client path must
reject traversal and never touch files outside storage.
"""

import io
import os
import shutil
import tempfile
import unittest

from folder_share.web.server import create_app


class TestWebServerPathSafety(unittest.TestCase):
    """Verify path traversal attempts return 400/404 and do not expose or
    modify files outside storage."""

    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self.addCleanup(lambda: shutil.rmtree(self.tmp, ignore_errors=True))
        self.storage = os.path.join(self.tmp, "data")
        self.secret = os.path.join(self.tmp, "secret.txt")
        with open(self.secret, "w") as f:
            f.write("top secret")
        self.app = create_app({"STORAGE_PATH": self.storage, "MAX_UPLOAD_MB": 1})
        self.client = self.app.test_client()

    def test_create_folder_traversal_returns_400(self):
        r = self.client.post("/folder", data={"name": "../../etc/passwd"})
        assert r.status_code == 400
        assert not os.path.exists(os.path.join(self.tmp, "etc"))
        assert os.listdir(self.storage) == []

    def test_create_folder_backslash_traversal_returns_400(self):
        r = self.client.post("/folder", data={"name": "..\\..\\evil"})
        assert r.status_code == 400
        assert os.listdir(self.storage) == []

    def test_create_folder_absolute_name_stays_in_storage(self):
        r = self.client.post("/folder", data={"name": "/etc"})
        assert r.status_code == 302
        assert os.path.isdir(os.path.join(self.storage, "etc"))

    def test_download_traversal_returns_404(self):
        r = self.client.get("/download/../secret.txt")
        assert r.status_code in (400, 404)
        r = self.client.get("/download/..%2fsecret.txt")
        assert r.status_code == 404

    def test_download_folder_traversal_returns_404(self):
        r = self.client.get("/download-folder/..%2f..")
        assert r.status_code == 404

    def test_folder_view_traversal_returns_404(self):
        r = self.client.get("/folder/..%2f..%2fetc")
        assert r.status_code == 404

    def test_api_folder_traversal_returns_404(self):
        r = self.client.get("/api/folder", query_string={"path": "../"})
        assert r.status_code == 404
        assert r.get_json() == {"error": "Folder not found"}

    def test_upload_to_traversal_folder_returns_400(self):
        r = self.client.post(
            "/upload",
            data={"folder": "../", "file": (io.BytesIO(b"x"), "evil.txt")},
            content_type="multipart/form-data",
        )
        assert r.status_code == 400
        assert not os.path.exists(os.path.join(self.tmp, "evil.txt"))

    def test_upload_filename_with_directories_lands_in_destination(self):
        r = self.client.post(
            "/upload",
            data={"file": (io.BytesIO(b"x"), "../../evil.txt")},
            content_type="multipart/form-data",
        )
        assert r.status_code in (302, 400)
        assert not os.path.exists(os.path.join(self.tmp, "evil.txt"))

    def test_delete_traversal_returns_404_and_keeps_file(self):
        r = self.client.post("/delete", data={"target": "../secret.txt"})
        assert r.status_code == 404
        assert os.path.isfile(self.secret)

    def test_delete_storage_root_refused(self):
        r = self.client.post("/delete", data={"target": "/"})
        assert r.status_code == 400
        assert os.path.isdir(self.storage)


if __name__ == '__main__':
    unittest.main()

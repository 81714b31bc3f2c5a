import os
import unittest

from routers.upload_router import _generate_filename
from support import ApiTestCase


class UploadTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.headers = self.auth_headers()

    def upload(self, name="drawing.png", content=b"\x89PNG fake bytes", headers=None):
        return self.client.post(
            "/api/upload",
            files={"file": (name, content, "image/png")},
            headers=self.headers if headers is None else headers,
        )

    def test_upload_stores_file_and_serves_it(self):
        resp = self.upload()
        self.assertEqual(resp.status_code, 200)
        url = resp.json()["url"]
        self.assertTrue(url.startswith("/uploads/"))
        self.assertTrue(url.endswith(".png"))

        stored = os.path.join(self.settings.UPLOAD_DIR, os.path.basename(url))
        with open(stored, "rb") as fh:
            self.assertEqual(fh.read(), b"\x89PNG fake bytes")

        served = self.client.get(url)
        self.assertEqual(served.status_code, 200)
        self.assertEqual(served.content, b"\x89PNG fake bytes")

    def test_same_name_gets_distinct_urls(self):
        first = self.upload().json()["url"]
        second = self.upload().json()["url"]
        self.assertNotEqual(first, second)

    def test_missing_file(self):
        resp = self.client.post("/api/upload", data={"note": "no file"}, headers=self.headers)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"message": "No file uploaded"})

    def test_requires_token(self):
        resp = self.upload(headers={})
        self.assertEqual(resp.status_code, 401)

    def test_upload_then_attach_to_project(self):
        url = self.upload().json()["url"]
        proj = self.create_project(self.headers)
        body = self.client.post(
            f"/api/projects/{proj['id']}/assets", json={"url": url}, headers=self.headers
        ).json()
        self.assertEqual(body["assets"], [url])


class GenerateFilenameTests(unittest.TestCase):
    def test_keeps_extension_drops_stem(self):
        name = _generate_filename("My Drawing.PNG")
        self.assertTrue(name.endswith(".png"))
        self.assertNotIn("Drawing", name)

    def test_path_components_discarded(self):
        name = _generate_filename("../../etc/passwd")
        self.assertNotIn("/", name)
        self.assertNotIn("..", name)

    def test_odd_extension_dropped(self):
        self.assertNotIn(".", _generate_filename("payload.p$p"))
        self.assertNotIn(".", _generate_filename(None))


if __name__ == "__main__":
    unittest.main()

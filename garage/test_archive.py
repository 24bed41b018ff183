import os
import unittest

from garage.testing_db import DatabaseTestCase, TEST_ROOT
from garage.config import settings


class TestInvoiceArchive(DatabaseTestCase):

    def _upload(self, year, *names):
        files = [("files", (name, b"%PDF-1.4 scanned", "application/pdf")) for name in names]
        return self.client.post("/api/archive/files", data={"year": year}, files=files)

    def test_archive_lives_in_scratch_directory(self):
        self.assertTrue(settings.UPLOAD_ROOT.startswith(TEST_ROOT))
        self.assertTrue(settings.invoice_archive_dir.startswith(TEST_ROOT))

    def test_upload_then_list(self):
        res = self._upload("2019", "march invoice.pdf", "na*me?.pdf")
        self.assertEqual(res.status_code, 200)
        stored = res.json()["data"]["files"]
        self.assertEqual(len(stored), 2)
        self.assertEqual(stored[0]["original_name"], "march invoice.pdf")
        self.assertTrue(stored[0]["filename"].endswith("_march invoice.pdf"))
        self.assertTrue(stored[1]["filename"].endswith("_na_me_.pdf"))
        for f in stored:
            self.assertTrue(f["url"].startswith("/uploads/invoices/2019/"))
            self.assertTrue(os.path.isfile(os.path.join(settings.invoice_archive_dir, "2019", f["filename"])))

        listed = self.client.get("/api/archive/files/2019").json()["data"]
        self.assertEqual(listed["year"], "2019")
        self.assertEqual(sorted(f["name"] for f in listed["files"]),
                         sorted(f["filename"] for f in stored))

        served = self.client.get(stored[0]["url"])
        self.assertEqual(served.status_code, 200)
        self.assertEqual(served.content, b"%PDF-1.4 scanned")

    def test_empty_year_bucket(self):
        res = self.client.get("/api/archive/files/1999")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["data"], {"year": "1999", "files": []})

    def test_too_many_files(self):
        res = self._upload("2020", *[f"scan{i}.pdf" for i in range(21)])
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["error"]["field"], "files")
        self.assertFalse(os.path.isdir(os.path.join(settings.invoice_archive_dir, "2020")))

    def test_invalid_year(self):
        self.assertEqual(self._upload("20x4", "a.pdf").status_code, 400)
        self.assertEqual(self._upload("", "a.pdf").status_code, 400)
        res = self.client.get("/api/archive/files/24")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["error"]["code"], "INVALID_YEAR")


if __name__ == '__main__':
    unittest.main()

import io
import os
import tempfile
import unittest
import zipfile

import httpx

from ais_replay.sources.archive import ArchiveCache, validate_date

CSV_CONTENT = "# Timestamp,Type of mobile,MMSI\n15/01/2024 10:30:45,Class A,220382000\n"


def make_zip(name="aisdk-2024-01-15.csv", content=CSV_CONTENT) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as z:
        z.writestr(name, content)
    return buffer.getvalue()


class TestArchiveCache(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.cache_dir = os.path.join(self.tmpdir.name, "AisReplay")
        self.requests = []
        self.response = httpx.Response(200, content=make_zip())

    def tearDown(self):
        self.tmpdir.cleanup()

    def handler(self, request):
        self.requests.append(request)
        return self.response

    def make_cache(self):
        client = httpx.Client(transport=httpx.MockTransport(self.handler))
        self.addCleanup(client.close)
        return ArchiveCache(self.cache_dir, client=client)

    def test_downloads_and_extracts(self):
        path = self.make_cache().fetch("2024-01-15")
        self.assertEqual(path, os.path.join(self.cache_dir, "aisdk-2024-01-15.csv"))
        with open(path) as f:
            self.assertEqual(f.read(), CSV_CONTENT)
        self.assertEqual(str(self.requests[0].url), "http://aisdata.ais.dk/aisdk-2024-01-15.zip")
        self.assertFalse(os.path.exists(os.path.join(self.cache_dir, "aisdk-2024-01-15.zip")))

    def test_uses_cached_csv(self):
        cache = self.make_cache()
        cache.fetch("2024-01-15")
        cache.fetch("2024-01-15")
        self.assertEqual(len(self.requests), 1)

    def test_http_error(self):
        self.response = httpx.Response(404)
        with self.assertRaises(httpx.HTTPStatusError):
            self.make_cache().fetch("2024-01-15")
        self.assertEqual(os.listdir(self.cache_dir), [])

    def test_archive_without_expected_csv(self):
        self.response = httpx.Response(200, content=make_zip(name="other.csv"))
        with self.assertRaises(FileNotFoundError):
            self.make_cache().fetch("2024-01-15")

    def test_invalid_date(self):
        with self.assertRaises(ValueError):
            self.make_cache().fetch("15/01/2024")
        self.assertEqual(self.requests, [])

    def test_purge(self):
        cache = self.make_cache()
        cache.fetch("2024-01-15")
        self.assertTrue(cache.purge())
        self.assertFalse(os.path.exists(self.cache_dir))
        self.assertFalse(cache.purge())


class TestValidateDate(unittest.TestCase):
    def test_valid(self):
        self.assertEqual(validate_date("2024-01-15"), "2024-01-15")

    def test_invalid(self):
        for date in ("2024-13-01", "20240115", ""):
            with self.subTest(date=date):
                with self.assertRaises(ValueError):
                    validate_date(date)


if __name__ == "__main__":
    unittest.main()

import logging
import os
import shutil
import tempfile
import zipfile
from datetime import datetime
from typing import Optional

import httpx

ARCHIVE_URL = "http://aisdata.ais.dk/aisdk-{date}.zip"
DEFAULT_CACHE_DIR = os.path.join(tempfile.gettempdir(), "AisReplay")
DOWNLOAD_TIMEOUT = 30 * 60.0


def validate_date(date: str) -> str:
    """Check that date is in YYYY-MM-DD format."""
    try:
        datetime.strptime(date, "%Y-%m-%d")
    except ValueError as e:
        raise ValueError(f"Invalid date: {date}. Use YYYY-MM-DD") from e
    return date


class ArchiveCache:
    """Downloads daily ais.dk archives and keeps the extracted CSV files"""

    def __init__(self, cache_dir: str = DEFAULT_CACHE_DIR, client: Optional[httpx.Client] = None):
        """
        Args:
            cache_dir: Directory holding downloaded CSV files
            client: Optional HTTP client, a new one is created per download otherwise
        """
        self.cache_dir = cache_dir
        self.client = client

    def csv_path(self, date: str) -> str:
        return os.path.join(self.cache_dir, f"aisdk-{date}.csv")

    def fetch(self, date: str) -> str:
        """
        Return the path of the CSV for a date, downloading it if needed.

        Raises:
            ValueError: If date is not YYYY-MM-DD
            httpx.HTTPError: If the download fails
            FileNotFoundError: If the archive does not contain the expected CSV
        """
        validate_date(date)
        os.makedirs(self.cache_dir, exist_ok=True)
        csv_path = self.csv_path(date)
        if os.path.exists(csv_path):
            logging.info(f"Using cached {csv_path}")
            return csv_path

        url = ARCHIVE_URL.format(date=date)
        zip_path = os.path.join(self.cache_dir, f"aisdk-{date}.zip")
        logging.info(f"Downloading {url} ...")
        try:
            self._download(url, zip_path)
            logging.info("Extracting ...")
            with zipfile.ZipFile(zip_path, "r") as z:
                z.extractall(self.cache_dir)
        finally:
            if os.path.exists(zip_path):
                os.remove(zip_path)

        if not os.path.exists(csv_path):
            raise FileNotFoundError(f"Expected CSV not found after extraction: {csv_path}")
        logging.info(f"Ready: {csv_path}")
        return csv_path

    def _download(self, url: str, zip_path: str):
        if self.client is not None:
            self._stream_to_file(self.client, url, zip_path)
            return
        with httpx.Client(timeout=DOWNLOAD_TIMEOUT, follow_redirects=True) as client:
            self._stream_to_file(client, url, zip_path)

    @staticmethod
    def _stream_to_file(client: httpx.Client, url: str, path: str):
        with client.stream("GET", url) as response:
            response.raise_for_status()
            with open(path, "wb") as f:
                for chunk in response.iter_bytes():
                    f.write(chunk)

    def purge(self) -> bool:
        """Remove the cache directory. Returns False if there was none."""
        if not os.path.isdir(self.cache_dir):
            logging.info("No cache to purge")
            return False
        shutil.rmtree(self.cache_dir)
        logging.info(f"Cache purged: {self.cache_dir}")
        return True

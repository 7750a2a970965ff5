import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import requests
from tqdm import tqdm

from .models import CanonicalDocument

logger = logging.getLogger(__name__)

DEFAULT_DOWNLOAD_DIR = "Weekly Current Affairs"

HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; WCA-Collector/1.0)"
}

SKIPPED = "skipped"
DOWNLOADED = "downloaded"
FAILED = "failed"


@dataclass
class DownloadResult:
    doc: CanonicalDocument
    status: str                     # skipped, downloaded, failed
    path: Path
    error: Optional[str] = None


def build_filename(doc: CanonicalDocument) -> str:
    # e.g. "1730592000 2024-11-03.pdf"
    return doc.filename


def declared_length(resp: requests.Response) -> Optional[int]:
    try:
        total = int(resp.headers.get("content-length", ""))
    except ValueError:
        return None
    return total if total > 0 else None


def set_creation_time(path: Path, doc: CanonicalDocument) -> None:
    # Windows only: mtime/atime are handled by os.utime, creation time is not
    iso = f"{doc.date.isoformat()}T00:00:00Z"
    literal = str(path).replace("'", "''")
    try:
        subprocess.check_call(
            [
                "powershell",
                "-NoProfile",
                "-Command",
                f"(Get-Item -LiteralPath '{literal}').CreationTime = [datetime]'{iso}'",
            ],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug(f"Could not set creation time on {path.name}: {e}")


def stamp_file_times(path: Path, doc: CanonicalDocument) -> None:
    os.utime(path, (doc.key, doc.key))
    if sys.platform == "win32":
        set_creation_time(path, doc)


class Downloader:
    """
    Downloads canonical documents into `output_dir`, one at a time.

    Files already present are skipped, so running twice over the same
    documents transfers nothing the second time.
    """

    def __init__(
        self,
        output_dir=DEFAULT_DOWNLOAD_DIR,
        *,
        timeout: int = 60,
        chunk_size: int = 8192,
        show_progress: bool = True,
        session: Optional[requests.Session] = None,
    ):
        self.output_dir = Path(output_dir)
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.show_progress = show_progress
        self.session = session or requests.Session()
        self.session.headers.update(HEADERS)

    def ensure_output_dir(self) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir

    def _stream_to_file(self, url: str, filepath: Path) -> None:
        with self.session.get(url, stream=True, timeout=self.timeout) as resp:
            resp.raise_for_status()
            total = declared_length(resp)

            with open(filepath, "wb") as f, tqdm(
                total=total,
                unit="B",
                unit_scale=True,
                unit_divisor=1024,
                desc=f"Downloading {filepath.name}",
                disable=not self.show_progress,
                leave=False,
            ) as bar:
                for chunk in resp.iter_content(chunk_size=self.chunk_size):
                    if chunk:  # filter out keep-alive chunks
                        f.write(chunk)
                        bar.update(len(chunk))

    def materialize(self, doc: CanonicalDocument) -> DownloadResult:
        filename = build_filename(doc)
        filepath = self.output_dir / filename

        if filepath.exists():
            logger.info(f"Skipping (already exists): {filename}")
            return DownloadResult(doc=doc, status=SKIPPED, path=filepath)

        try:
            self._stream_to_file(doc.link, filepath)
            stamp_file_times(filepath, doc)
        except (requests.RequestException, OSError) as e:
            logger.error(f"Failed to download {filename}: {e}")
            # partial files would be mistaken for finished ones on the next run
            try:
                filepath.unlink(missing_ok=True)
            except OSError as cleanup_error:
                logger.debug(f"Could not remove partial file {filename}: {cleanup_error}")
            return DownloadResult(doc=doc, status=FAILED, path=filepath, error=str(e))

        logger.info(f"Downloaded and timestamped: {filename}")
        return DownloadResult(doc=doc, status=DOWNLOADED, path=filepath)

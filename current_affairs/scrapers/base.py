from typing import List
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from ..models import RawCandidate


class ExtractionError(RuntimeError):
    """The page does not have the shape a source's extractor expects."""


class BaseExtractor:
    # URL helpers
    def make_absolute(self, base_url: str, link: str) -> str:
        return urljoin(base_url, link)

    def looks_like_file_url(self, url: str, extension: str = ".pdf") -> bool:
        parsed = urlparse(url)
        return parsed.path.lower().endswith(extension.lower())

    # HTML helpers
    def get_soup(self, html: str) -> BeautifulSoup:
        return BeautifulSoup(html, "html.parser")

    def text_of(self, tag) -> str:
        # collapse newlines / indentation from the page source
        return " ".join(tag.get_text(" ", strip=True).split())

    # implementing per source
    def extract(self, html: str, base_url: str) -> List[RawCandidate]:
        """
        Main entrypoint. Implement in subclass:
        Given the rendered HTML of a source page, return its candidates.
        Must not touch the network.
        """
        raise NotImplementedError

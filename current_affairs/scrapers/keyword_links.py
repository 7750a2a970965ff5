from typing import List

from ..models import RawCandidate
from .base import BaseExtractor


class KeywordLinkExtractor(BaseExtractor):
    """
    Keeps every <a href="...pdf"> whose visible text mentions `keyword`.
    e.g. "Weekly Current Affairs (28 Oct - 03 Nov 2024)" for "current affairs"
    """

    def __init__(self, keyword: str, extension: str = ".pdf"):
        self.keyword = keyword.lower()
        self.extension = extension

    def extract(self, html: str, base_url: str) -> List[RawCandidate]:
        soup = self.get_soup(html)
        candidates: List[RawCandidate] = []

        for a in soup.find_all("a", href=True):
            abs_url = self.make_absolute(base_url, a["href"].strip())
            if not self.looks_like_file_url(abs_url, self.extension):
                continue

            label = self.text_of(a)
            if self.keyword not in label.lower():
                continue

            candidates.append(RawCandidate(label=label, link=abs_url))

        return candidates

from typing import List

from bs4 import Tag

from ..models import RawCandidate
from .base import BaseExtractor, ExtractionError


def child_tags(tag: Tag) -> List[Tag]:
    return [c for c in tag.children if isinstance(c, Tag)]


class StructuredListExtractor(BaseExtractor):
    """
    Reads a fixed list layout, one document per matched container:

        <ul>
          <li>Weekly Current Affairs (28 Oct - 03 Nov 2024)</li>
          <li><a href="/files/wca-03-11-2024.pdf">Download</a></li>
        </ul>

    The first child holds the label, the first element inside the second
    child holds the link. A container missing either is a broken page and
    raises ExtractionError rather than being skipped.
    """

    def __init__(self, selector: str):
        self.selector = selector

    def extract(self, html: str, base_url: str) -> List[RawCandidate]:
        soup = self.get_soup(html)
        candidates: List[RawCandidate] = []

        for index, container in enumerate(soup.select(self.selector)):
            children = child_tags(container)
            if len(children) < 2:
                raise ExtractionError(
                    f"{self.selector} #{index}: expected 2 children, found {len(children)}"
                )

            link_holders = child_tags(children[1])
            if not link_holders:
                raise ExtractionError(f"{self.selector} #{index}: no link element in second child")

            href = link_holders[0].get("href")
            if not href:
                raise ExtractionError(f"{self.selector} #{index}: link element has no href")

            candidates.append(RawCandidate(
                label=self.text_of(children[0]),
                link=self.make_absolute(base_url, href.strip()),
            ))

        return candidates

"""
Known sources of Weekly Current Affairs PDFs, processed in this order.
"""

from typing import Tuple

from ..models import SourceDescriptor
from .keyword_links import KeywordLinkExtractor
from .structured_list import StructuredListExtractor

SOURCES: Tuple[SourceDescriptor, ...] = (
    SourceDescriptor(
        name="madeeasyprime",
        location="https://www.madeeasyprime.com/current-affairs",
        extractor=KeywordLinkExtractor("current affairs"),
    ),
    SourceDescriptor(
        name="madeeasy",
        location="https://www.madeeasy.in/weekly-current-affairs",
        extractor=StructuredListExtractor(".re-jobs ul"),
    ),
)

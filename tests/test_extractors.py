import unittest

from current_affairs.models import RawCandidate
from current_affairs.scrapers.base import ExtractionError
from current_affairs.scrapers.keyword_links import KeywordLinkExtractor
from current_affairs.scrapers.registry import SOURCES
from current_affairs.scrapers.structured_list import StructuredListExtractor

BASE_URL = "https://www.example.com/current-affairs"

LINK_PAGE = """
<html><body>
  <a href="/files/wca-03-11-2024.pdf">Weekly Current Affairs (28 Oct - 03 Nov 2024)</a>
  <a href="https://cdn.example.com/wca.pdf?v=2">
      Weekly <b>CURRENT AFFAIRS</b>
      (04 Nov - 10 Nov 2024)
  </a>
  <a href="/files/syllabus.pdf">Syllabus 2025</a>
  <a href="/current-affairs/today">Current Affairs today</a>
  <a>Current Affairs (no href)</a>
</body></html>
"""

LIST_PAGE = """
<html><body>
<div class="re-jobs">
  <ul>
    <li>Weekly Current Affairs (28 Oct - 03 Nov 2024)</li>
    <li><a href="/uploads/wca-1.pdf">Download</a></li>
  </ul>
  <ul>
    <li>  Weekly Current Affairs
          (21st - 27th Oct 2024) </li>
    <li><a href="https://files.example.com/wca-2.pdf">Download</a></li>
  </ul>
</div>
<ul><li>not inside the container</li><li><a href="/x.pdf">x</a></li></ul>
</body></html>
"""


class TestKeywordLinkExtractor(unittest.TestCase):
    def test_keeps_pdf_links_mentioning_keyword(self):
        found = KeywordLinkExtractor("current affairs").extract(LINK_PAGE, BASE_URL)
        self.assertEqual(found, [
            RawCandidate(
                label="Weekly Current Affairs (28 Oct - 03 Nov 2024)",
                link="https://www.example.com/files/wca-03-11-2024.pdf",
            ),
            RawCandidate(
                label="Weekly CURRENT AFFAIRS (04 Nov - 10 Nov 2024)",
                link="https://cdn.example.com/wca.pdf?v=2",
            ),
        ])

    def test_no_matches(self):
        html = '<a href="/a.pdf">Syllabus</a><a href="/b.html">Current Affairs</a>'
        self.assertEqual(KeywordLinkExtractor("current affairs").extract(html, BASE_URL), [])

    def test_empty_page(self):
        self.assertEqual(KeywordLinkExtractor("current affairs").extract("", BASE_URL), [])


class TestStructuredListExtractor(unittest.TestCase):
    def test_reads_label_and_link_per_list(self):
        found = StructuredListExtractor(".re-jobs ul").extract(LIST_PAGE, BASE_URL)
        self.assertEqual(found, [
            RawCandidate(
                label="Weekly Current Affairs (28 Oct - 03 Nov 2024)",
                link="https://www.example.com/uploads/wca-1.pdf",
            ),
            RawCandidate(
                label="Weekly Current Affairs (21st - 27th Oct 2024)",
                link="https://files.example.com/wca-2.pdf",
            ),
        ])

    def test_no_containers(self):
        self.assertEqual(StructuredListExtractor(".re-jobs ul").extract("<p>nothing</p>", BASE_URL), [])

    def test_missing_second_child_is_fatal(self):
        html = '<div class="re-jobs"><ul><li>Weekly Current Affairs (03 Nov 2024)</li></ul></div>'
        with self.assertRaises(ExtractionError):
            StructuredListExtractor(".re-jobs ul").extract(html, BASE_URL)

    def test_missing_link_element_is_fatal(self):
        html = '<div class="re-jobs"><ul><li>WCA (03 Nov 2024)</li><li>soon</li></ul></div>'
        with self.assertRaises(ExtractionError):
            StructuredListExtractor(".re-jobs ul").extract(html, BASE_URL)

    def test_missing_href_is_fatal(self):
        html = '<div class="re-jobs"><ul><li>WCA (03 Nov 2024)</li><li><span>soon</span></li></ul></div>'
        with self.assertRaises(ExtractionError):
            StructuredListExtractor(".re-jobs ul").extract(html, BASE_URL)


class TestRegistry(unittest.TestCase):
    def test_sources_in_order(self):
        self.assertEqual([s.name for s in SOURCES], ["madeeasyprime", "madeeasy"])
        self.assertIsInstance(SOURCES[0].extractor, KeywordLinkExtractor)
        self.assertIsInstance(SOURCES[1].extractor, StructuredListExtractor)


if __name__ == "__main__":
    unittest.main()

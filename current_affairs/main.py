import argparse
import logging
import math
import sys
from collections import Counter
from typing import Iterable, List, Optional, Sequence

from .dedup import DEFAULT_PROXIMITY_DAYS, Deduplicator
from .downloader import DEFAULT_DOWNLOAD_DIR, FAILED, DownloadResult, Downloader
from .models import CanonicalDocument, SourceDescriptor
from .renderer import PageRenderer, RenderError
from .scrapers.base import ExtractionError
from .scrapers.registry import SOURCES

logger = logging.getLogger("current_affairs")


def setup_logger(verbose: bool) -> logging.Logger:
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG if verbose else logging.INFO)

    formatter = logging.Formatter("[%(levelname)s] %(message)s")
    handler.setFormatter(formatter)

    if not logger.handlers:
        logger.addHandler(handler)

    return logger


def discover(
    sources: Sequence[SourceDescriptor],
    renderer: PageRenderer,
    dedup: Deduplicator,
) -> List[CanonicalDocument]:
    """
    Render every source in order and offer its candidates to `dedup`.
    Render and extraction errors propagate; the caller owns the renderer.
    """
    for source in sources:
        html = renderer.render(source.location)

        logger.info(f"[{source.name}] Searching for data...")
        candidates = source.extractor.extract(html, source.location)

        admitted = 0
        for candidate in candidates:
            if dedup.offer(candidate) is not None:
                admitted += 1

        logger.info(
            f"[{source.name}] {len(candidates)} candidate(s), {admitted} new edition(s)"
        )

    return dedup.documents


def download_all(
    documents: Iterable[CanonicalDocument],
    downloader: Downloader,
) -> List[DownloadResult]:
    documents = list(documents)
    downloader.ensure_output_dir()
    return [downloader.materialize(doc) for doc in documents]


def run(
    sources: Sequence[SourceDescriptor] = SOURCES,
    *,
    output_dir=DEFAULT_DOWNLOAD_DIR,
    proximity_days: float = DEFAULT_PROXIMITY_DAYS,
    headless: bool = True,
    renderer: Optional[PageRenderer] = None,
    downloader: Optional[Downloader] = None,
) -> List[DownloadResult]:
    dedup = Deduplicator(proximity_days=proximity_days)
    renderer = renderer or PageRenderer(headless=headless)

    with renderer:
        documents = discover(sources, renderer, dedup)

    logger.info(f"Found {len(documents)} Weekly Current Affairs PDFs")

    downloader = downloader or Downloader(output_dir)
    results = download_all(documents, downloader)

    counts = Counter(r.status for r in results)
    logger.info("============================================================")
    logger.info("Run summary")
    logger.info(f"Editions discovered: {len(documents)}")
    logger.info(f"Downloaded: {counts['downloaded']}")
    logger.info(f"Skipped (already on disk): {counts['skipped']}")
    logger.info(f"Failed: {counts['failed']}")
    logger.info(f"Output directory: {downloader.output_dir.resolve()}")
    logger.info("============================================================")
    return results


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Collect Weekly Current Affairs PDFs, one file per edition."
    )
    parser.add_argument(
        "--output-dir",
        default=DEFAULT_DOWNLOAD_DIR,
        help=f"Where PDFs are saved (default: '{DEFAULT_DOWNLOAD_DIR}').",
    )
    parser.add_argument(
        "--proximity-days",
        type=float,
        default=DEFAULT_PROXIMITY_DAYS,
        help="Editions dated closer than this many days are treated as one.",
    )
    parser.add_argument("--show-browser", action="store_true", help="Run Chrome with a visible window.")
    parser.add_argument("--verbose", action="store_true", help="Verbose logging.")
    args = parser.parse_args(argv)

    setup_logger(args.verbose)

    if not math.isfinite(args.proximity_days) or args.proximity_days <= 0:
        parser.error("--proximity-days must be a positive number")

    try:
        results = run(
            output_dir=args.output_dir,
            proximity_days=args.proximity_days,
            headless=not args.show_browser,
        )
    except (RenderError, ExtractionError) as e:
        logger.error(f"Aborting: {e}")
        return 1

    return 1 if any(r.status == FAILED for r in results) else 0


if __name__ == "__main__":
    sys.exit(main())

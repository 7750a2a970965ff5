import logging
import time

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service as ChromeService
from webdriver_manager.chrome import ChromeDriverManager

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/127.0.0.0 Safari/537.36"
)


class RenderError(RuntimeError):
    """A source page could not be loaded."""


def build_chrome_options(headless: bool = True) -> Options:
    chrome_options = Options()
    if headless:
        chrome_options.add_argument("--headless")
    chrome_options.add_argument("--disable-gpu")
    chrome_options.add_argument("--no-sandbox")
    chrome_options.add_argument("--disable-dev-shm-usage")
    chrome_options.add_argument("--window-size=1920,1080")
    chrome_options.add_argument(f"user-agent={USER_AGENT}")
    return chrome_options


class PageRenderer:
    """
    One Chrome session for the whole run.

    Use as a context manager so the browser is quit on every exit path:

        with PageRenderer() as renderer:
            html = renderer.render(url)
    """

    def __init__(
        self,
        headless: bool = True,
        page_load_timeout: int = 60,
        scroll_distance: int = 500,
        scroll_pause: float = 0.3,
        max_scroll_steps: int = 400,
        driver=None,
    ):
        self.headless = headless
        self.page_load_timeout = page_load_timeout
        self.scroll_distance = scroll_distance
        self.scroll_pause = scroll_pause
        self.max_scroll_steps = max_scroll_steps
        self.driver = driver

    def open(self) -> "PageRenderer":
        if self.driver is None:
            logger.info("Opening browser...")
            try:
                self.driver = webdriver.Chrome(
                    service=ChromeService(ChromeDriverManager().install()),
                    options=build_chrome_options(self.headless),
                )
            except WebDriverException as e:
                raise RenderError(f"Failed to start browser: {e.msg or e}") from e

            # __exit__ never runs if __enter__ fails, so quit here
            try:
                self.driver.set_page_load_timeout(self.page_load_timeout)
            except WebDriverException as e:
                self.close()
                raise RenderError(f"Failed to configure browser: {e.msg or e}") from e
            except BaseException:
                self.close()
                raise
        return self

    def close(self) -> None:
        if self.driver is None:
            return
        try:
            self.driver.quit()
        finally:
            self.driver = None
            logger.info("Browser closed.")

    def __enter__(self) -> "PageRenderer":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def page_height(self) -> int:
        return int(self.driver.execute_script("return document.body.scrollHeight") or 0)

    def scroll_to_bottom(self) -> None:
        """
        Scroll down step by step so lazy-loaded entries get rendered.
        Stops once the scrolled distance catches up with a page height
        that has stopped growing.
        """
        scrolled = 0
        height = self.page_height()
        for _ in range(self.max_scroll_steps):
            self.driver.execute_script(f"window.scrollBy(0, {self.scroll_distance});")
            scrolled += self.scroll_distance
            time.sleep(self.scroll_pause)

            new_height = self.page_height()
            if scrolled >= new_height and new_height == height:
                return
            height = new_height

        logger.warning(f"Page still growing after {self.max_scroll_steps} scroll steps, extracting anyway")

    def render(self, url: str) -> str:
        """Navigate to `url`, trigger lazy loading and return the rendered HTML."""
        if self.driver is None:
            self.open()

        logger.info(f"Navigating to: {url}")
        try:
            self.driver.get(url)
            logger.info("Waiting for page to load...")
            self.scroll_to_bottom()
            return self.driver.page_source
        except WebDriverException as e:
            raise RenderError(f"Failed to render {url}: {e.msg or e}") from e

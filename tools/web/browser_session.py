"""Headless browser session scoped to a single retrieval."""

import logging
from typing import Any

from utils.logger import extra_fields, get_logger


class BrowserFetchError(RuntimeError):
    """Raised when a navigation returns no response or a non-2xx status."""


class BrowserSession:
    """
    Thin wrapper over a Playwright browser, page and context.

    ``start`` acquires the browser; ``close`` releases everything and is safe
    to call more than once or after a failed start.
    """

    def __init__(
        self,
        headless: bool = True,
        timeout_ms: int = 15000,
        browser_name: str = "chromium",
        logger: logging.Logger | None = None,
    ):
        self.headless = headless
        self.timeout_ms = timeout_ms
        self.browser_name = browser_name
        self.logger = logger or get_logger(__name__)
        self._playwright = None
        self._browser = None
        self._context = None
        self._page = None

    async def start(self) -> None:
        from playwright.async_api import async_playwright

        self._playwright = await async_playwright().start()
        browser_type = getattr(self._playwright, self.browser_name)
        self._browser = await browser_type.launch(headless=self.headless)
        self._context = await self._browser.new_context(accept_downloads=False)
        self._page = await self._context.new_page()
        self.logger.debug(
            "Browser session started",
            extra=extra_fields(browser=self.browser_name, headless=self.headless),
        )

    async def _goto(self, url: str):
        if self._page is None:
            raise BrowserFetchError("Browser session is not started")
        response = await self._page.goto(url, wait_until="domcontentloaded", timeout=self.timeout_ms)
        if response is None:
            raise BrowserFetchError(f"No response from {url}")
        if not response.ok:
            raise BrowserFetchError(f"HTTP {response.status} from {url}")
        return response

    async def fetch_json(self, url: str) -> dict[str, Any]:
        response = await self._goto(url)
        return await response.json()

    async def page_text(self, url: str) -> str:
        await self._goto(url)
        return await self._page.locator("body").inner_text(timeout=self.timeout_ms)

    async def close(self) -> None:
        try:
            if self._context is not None:
                await self._context.close()
            if self._browser is not None:
                await self._browser.close()
        finally:
            if self._playwright is not None:
                await self._playwright.stop()
            self._page = None
            self._context = None
            self._browser = None
            self._playwright = None

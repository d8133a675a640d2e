"""Headless Chromium rendering of Mermaid diagrams through Playwright."""
from __future__ import annotations

import html
import json
import logging
import re

from playwright.async_api import Browser, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .config import Settings
from .errors import RenderEngineError, RenderHostError, RenderTimeoutError
from .models import DiagramSource, RenderedImage, RenderOptions, png_dimensions

INSTALL_HINT = "Install the browser with `playwright install chromium`."

SVG_SELECTOR = "#container .mermaid svg"

# Characters that could close the CSS declaration or the <style> element
_CSS_UNSAFE = re.compile(r"[;{}<>\"'\\]")

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <style>
      html, body {{ margin: 0; padding: 0; background-color: {background}; }}
      #container {{ padding: 10px; }}
    </style>
  </head>
  <body>
    <div id="container"><pre class="mermaid">{diagram}</pre></div>
    <script src="{script_url}" onerror="window.__mermaidStatus = 'error'; window.__mermaidError = 'failed to load the Mermaid script';"></script>
    <script>
      if (window.mermaid) {{
        mermaid.initialize({config});
        mermaid.run({{ querySelector: '.mermaid' }})
          .then(function () {{ window.__mermaidStatus = 'done'; }})
          .catch(function (err) {{
            window.__mermaidStatus = 'error';
            window.__mermaidError = String((err && err.message) || err);
          }});
      }}
    </script>
  </body>
</html>
"""


def _first_line(exc: Exception) -> str:
    lines = str(exc).strip().splitlines()
    return lines[0] if lines else type(exc).__name__


def css_background(options: RenderOptions) -> str:
    if options.transparent:
        return "transparent"
    return _CSS_UNSAFE.sub("", options.background_color).strip() or "white"


def build_page(source: DiagramSource, options: RenderOptions, settings: Settings) -> str:
    config = {
        "startOnLoad": False,
        "theme": options.theme.value,
        "securityLevel": "loose",
        "fontFamily": settings.font_family,
        "fontSize": settings.font_size,
    }
    return PAGE_TEMPLATE.format(
        background=css_background(options),
        diagram=html.escape(source.text, quote=False),
        script_url=html.escape(settings.mermaid_js_url, quote=True),
        config=json.dumps(config),
    )


class MermaidRenderer:
    """One headless browser for a whole conversion run.

    Use as ``async with MermaidRenderer(settings) as r: await r.render(...)``.
    Each diagram gets its own browser context so styles and scripts from one
    page never reach the next.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

    async def __aenter__(self) -> MermaidRenderer:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def start(self) -> None:
        try:
            self._playwright = await async_playwright().start()
        except PlaywrightError as exc:
            raise RenderHostError(f"Failed to start Playwright: {exc}") from exc
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=True, args=list(self.settings.browser_args)
            )
        except PlaywrightError as exc:
            await self._playwright.stop()
            self._playwright = None
            raise RenderHostError(f"Failed to launch headless Chromium: {exc}. {INSTALL_HINT}") from exc
        logging.debug("Headless Chromium %s started", self._browser.version)

    async def close(self) -> None:
        browser, pw = self._browser, self._playwright
        self._browser = self._playwright = None
        if browser is not None:
            try:
                await browser.close()
            except PlaywrightError:
                logging.warning("Browser did not close cleanly", exc_info=True)
        if pw is not None:
            await pw.stop()

    async def render(self, source: DiagramSource, options: RenderOptions) -> RenderedImage:
        if self._browser is None:
            raise RuntimeError("MermaidRenderer.render() called outside of its async context")

        timeout = self.settings.render_timeout_ms
        try:
            context = await self._browser.new_context(
                viewport={"width": options.width, "height": options.height},
                device_scale_factor=options.scale,
            )
        except PlaywrightError as exc:
            raise RenderEngineError(source.index, _first_line(exc)) from exc
        try:
            page = await context.new_page()
            page.set_default_timeout(timeout)
            await page.set_content(build_page(source, options, self.settings), wait_until="load")
            await page.wait_for_function("() => window.__mermaidStatus !== undefined")

            status, message = await page.evaluate(
                "() => [window.__mermaidStatus, window.__mermaidError || '']"
            )
            if status != "done":
                raise RenderEngineError(source.index, message or "Mermaid reported an error")

            svg = page.locator(SVG_SELECTOR).first
            if await svg.count() == 0:
                raise RenderEngineError(source.index, "Mermaid produced no <svg> element")
            data = await svg.screenshot(type="png", omit_background=options.transparent)
        except PlaywrightTimeoutError as exc:
            raise RenderTimeoutError(
                source.index,
                f"rendering did not finish within {self.settings.render_timeout_sec:g}s",
            ) from exc
        except PlaywrightError as exc:
            raise RenderEngineError(source.index, _first_line(exc)) from exc
        finally:
            try:
                await context.close()
            except PlaywrightError:
                logging.debug("Browser context for diagram %d already gone", source.index)

        width, height = png_dimensions(data)
        return RenderedImage(data=data, width=width, height=height)

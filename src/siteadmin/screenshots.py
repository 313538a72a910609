# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Full-page screenshots of the public site with Playwright.

The page list comes from ``pages.json`` (``{"pages": ["/", "/about", ...]}``).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

log = logging.getLogger("siteadmin.screenshots")

VIEWPORT = {"width": 1920, "height": 1080}
NAV_TIMEOUT_MS = 30000
SETTLE_MS = 1000


def load_pages(path: Path) -> List[str]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    pages = raw.get("pages") if isinstance(raw, dict) else None
    if not isinstance(pages, list):
        raise ValueError(f"{path} has no 'pages' list")
    return [str(p) for p in pages]


def page_url(base_url: str, page_path: str) -> str:
    if not page_path.startswith("/"):
        page_path = "/" + page_path
    return base_url.rstrip("/") + page_path


def screenshot_filename(page_path: str) -> str:
    """``/`` -> ``index.png``, ``/blog/post`` -> ``blog_post.png``."""
    if page_path in ("", "/"):
        return "index.png"
    return page_path.lstrip("/").replace("/", "_") + ".png"


def capture_screenshots(pages: List[str], output_dir: Path, base_url: str) -> List[Path]:
    """Capture every page; failures are logged and skipped. Returns saved files."""
    from playwright.sync_api import Error as PlaywrightError
    from playwright.sync_api import sync_playwright

    output_dir.mkdir(parents=True, exist_ok=True)
    saved: List[Path] = []
    with sync_playwright() as p:
        browser = p.chromium.launch()
        context = browser.new_context(viewport=VIEWPORT)
        try:
            for i, page_path in enumerate(pages, start=1):
                out = output_dir / screenshot_filename(page_path)
                log.info("[%d/%d] Capturing %s", i, len(pages), page_path)
                page = context.new_page()
                try:
                    page.goto(page_url(base_url, page_path), wait_until="networkidle", timeout=NAV_TIMEOUT_MS)
                    page.wait_for_timeout(SETTLE_MS)
                    page.screenshot(path=str(out), full_page=True)
                    saved.append(out)
                except PlaywrightError as e:
                    log.warning("Failed to capture %s: %s", page_path, e)
                finally:
                    page.close()
        finally:
            browser.close()
    return saved

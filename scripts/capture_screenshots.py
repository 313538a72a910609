#!/usr/bin/env python3
"""Capture full-page screenshots of every page listed in pages.json.

Usage: python scripts/capture_screenshots.py [output_dir] [base_url]

Needs the ``screenshots`` extra and ``playwright install chromium``.
"""
from __future__ import annotations

import sys
from pathlib import Path

from siteadmin.logging_config import setup_logging
from siteadmin.screenshots import capture_screenshots, load_pages


def main() -> None:
    output_dir = Path(sys.argv[1] if len(sys.argv) > 1 else "screenshots")
    base_url = sys.argv[2] if len(sys.argv) > 2 else "http://localhost:4321"
    setup_logging("INFO")

    pages = load_pages(Path("pages.json"))
    saved = capture_screenshots(pages, output_dir, base_url)

    print(f"\nCaptured {len(saved)}/{len(pages)} pages to: {output_dir}/")
    for f in saved:
        print(f"  {f.name}")


if __name__ == "__main__":
    main()

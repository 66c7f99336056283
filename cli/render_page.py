"""Render-page CLI

Decorates an HTML page with the grayscale effect using the operator options
stored in a directory, and prints the result. Handy for inspecting exactly
what the host hooks would emit.

Features:
 - Reads options from ``grayscale_options.json`` (defaults when absent).
 - Renders the built-in sample page unless ``--input`` is given.
 - ``--admin`` renders the admin-dashboard context instead of the public site.
 - ``--role`` sets the viewer role used for the admin bar privilege check.
 - Exit code 2 when the input file does not exist.

Example:
  grayscale-render --options-dir ./data --input page.html --role administrator
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from grayscale_mode.app.options_store import clamp_intensity, load_options
from grayscale_mode.config.settings import DATA_DIR, OPT_OUT_CLASS, SHORTCODE_TAG
from grayscale_mode.plugin import GrayscalePlugin
from grayscale_mode.services.configuration import RenderContext

SAMPLE_PAGE = f"""<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>Grayscale sample</title></head>
<body>
<h1>Grayscale sample</h1>
<p>This page is rendered through the grayscale filter.</p>
<p class="{OPT_OUT_CLASS}">This paragraph opts out and keeps its colours.</p>
<p>[{SHORTCODE_TAG}]</p>
</body>
</html>
"""


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Render an HTML page with site grayscale mode applied")
    p.add_argument("--options-dir", default=DATA_DIR, help="Directory containing grayscale_options.json")
    p.add_argument("--input", help="HTML file to decorate (default: built-in sample page)")
    p.add_argument("--admin", action="store_true", help="Render the admin dashboard context")
    p.add_argument("--role", default=None, help="Viewer role for the admin bar check (e.g. administrator)")
    p.add_argument("--intensity", type=int, default=None, help="Override the stored intensity (clamped to 0-100)")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging on stderr")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)
    if args.input:
        path = Path(args.input)
        if not path.is_file():
            print(f"Input file not found: {path}", file=sys.stderr)
            return 2
        page = path.read_text(encoding="utf-8")
    else:
        page = SAMPLE_PAGE

    def provider():
        opts = load_options(args.options_dir)
        if args.intensity is not None:
            opts = dataclasses.replace(opts, intensity=clamp_intensity(args.intensity))
        return opts

    plugin = GrayscalePlugin(provider)
    context = RenderContext.ADMIN if args.admin else RenderContext.PUBLIC
    print(plugin.render_page(page, context, viewer_role=args.role))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

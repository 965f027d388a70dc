#!/usr/bin/env python3
"""
PdfRearrange CLI - reorder, rotate and crop PDF pages from the terminal.

Usage:
    python -m pdfrearrange.cli <command> [options]

Commands:
    arrange     Reorder, rotate and crop pages and write a new PDF
    info        Show page count and rendered page sizes
    edit        Open the interactive GUI editor

Page numbers on the command line are the 1-indexed page numbers of the
input document, regardless of any reordering.

Examples:
    # Move page 3 to the front and rotate the first page clockwise
    pdfrearrange-cli arrange input.pdf -o rearranged.pdf --order 3,1,2 --rotate 1:90

    # Reverse and crop page 2 to a 400x300 box at (10, 20)
    pdfrearrange-cli arrange input.pdf -o out.pdf --reverse --crop 2:10,20,400,300

    # Info
    pdfrearrange-cli info document.pdf
"""

import argparse
import logging
import sys
from pathlib import Path

from pdfrearrange.config import APP_VERSION, LOGGER_NAME
from pdfrearrange.services.cropper import CropRegion
from pdfrearrange.utils.exceptions import PdfRearrangeError, ValidationError
from pdfrearrange.utils.i18n import _

# ---------------------------------------------------------------------------
# Argument parsers (shared)
# ---------------------------------------------------------------------------


def _parse_page_number(text: str, field: str) -> int:
    """Parse a 1-indexed page number into a 0-indexed page identifier."""
    try:
        number = int(text.strip())
    except ValueError:
        raise ValidationError(field, text, "page numbers must be integers") from None
    if number < 1:
        raise ValidationError(field, text, "page numbers start at 1")
    return number - 1


def _parse_order(text: str) -> list[int]:
    """Parse "3,1,2" into 0-indexed page identifiers [2, 0, 1]."""
    parts = [p for p in (part.strip() for part in text.split(",")) if p]
    if not parts:
        raise ValidationError("order", text, "no pages given")
    return [_parse_page_number(p, "order") for p in parts]


def _parse_rotation(text: str) -> tuple[int, int]:
    """Parse "PAGE:ANGLE" into (page identifier, angle)."""
    page_s, sep, angle_s = text.partition(":")
    if not sep:
        raise ValidationError("rotate", text, "expected PAGE:ANGLE")
    page_id = _parse_page_number(page_s, "rotate")
    try:
        angle = int(angle_s.strip())
    except ValueError:
        raise ValidationError("rotate", text, "angle must be an integer") from None
    return page_id, angle


def _parse_crop(text: str) -> tuple[int, CropRegion]:
    """Parse "PAGE:X,Y,W,H" into (page identifier, region)."""
    page_s, sep, region_s = text.partition(":")
    if not sep:
        raise ValidationError("crop", text, "expected PAGE:X,Y,WIDTH,HEIGHT")
    return _parse_page_number(page_s, "crop"), CropRegion.parse(region_s)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pdfrearrange-cli",
        description=_("Reorder, rotate and crop the pages of a PDF document"),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    p.add_argument("-v", "--verbose", action="store_true", help=_("Enable debug logging"))
    sub = p.add_subparsers(dest="command")

    # --- arrange ---
    arrange_p = sub.add_parser("arrange", help=_("Reorder, rotate and crop pages"))
    arrange_p.add_argument("input", type=Path, help=_("Input PDF file"))
    arrange_p.add_argument("-o", "--output", type=Path, required=True, help=_("Output PDF file"))
    order_grp = arrange_p.add_mutually_exclusive_group()
    order_grp.add_argument(
        "--order",
        type=str,
        metavar="ORDER",
        help=_("New page order listing every page once (e.g. '3,1,2')"),
    )
    order_grp.add_argument("--reverse", action="store_true", help=_("Reverse the page order"))
    arrange_p.add_argument(
        "--rotate",
        action="append",
        default=[],
        metavar="PAGE:ANGLE",
        help=_("Rotate a page clockwise by ANGLE degrees (repeatable)"),
    )
    arrange_p.add_argument(
        "--crop",
        action="append",
        default=[],
        metavar="PAGE:X,Y,W,H",
        help=_("Crop a page to a box in rendered pixels (repeatable)"),
    )
    arrange_p.add_argument(
        "--scale",
        type=float,
        default=None,
        help=_("Render scale (multiple of 72 DPI). Default: from settings (1.5)"),
    )

    # --- info ---
    info_p = sub.add_parser("info", help=_("Show page count and rendered page sizes"))
    info_p.add_argument("input", type=Path, help=_("Input PDF file"))
    info_p.add_argument("--scale", type=float, default=None, help=_("Render scale"))

    # --- edit ---
    edit_p = sub.add_parser("edit", help=_("Open interactive GUI editor"))
    edit_p.add_argument("input", type=Path, nargs="?", default=None, help=_("PDF file to edit"))

    return p


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _make_session(scale: float | None):
    """Create an editor session backed by pdftoppm and the user settings."""
    from pdfrearrange.editor.session import EditorSession
    from pdfrearrange.services.page_renderer import PdftoppmRenderer
    from pdfrearrange.utils.config_manager import get_config_manager

    config = get_config_manager()
    if scale is not None and scale <= 0:
        raise ValidationError("scale", str(scale), "must be positive")
    renderer = PdftoppmRenderer(
        scale=scale if scale is not None else config.render_scale,
        workers=config.render_workers,
    )
    return EditorSession(renderer)


def _select_or_fail(session, page_id: int, field: str) -> None:
    if not session.select(page_id):
        raise ValidationError(
            field,
            str(page_id + 1),
            f"document has {session.page_count} page(s)",
        )


def _cmd_arrange(args, logger) -> int:
    """Handle the 'arrange' command."""
    order = _parse_order(args.order) if args.order else None
    rotations = [_parse_rotation(text) for text in args.rotate]
    crops = [_parse_crop(text) for text in args.crop]

    session = _make_session(args.scale)
    session.load(args.input)

    if order is not None:
        session.set_order(order)
    elif args.reverse:
        session.reverse_pages()

    for page_id, region in crops:
        _select_or_fail(session, page_id, "crop")
        session.crop(region)

    for page_id, angle in rotations:
        _select_or_fail(session, page_id, "rotate")
        session.rotate(angle)

    session.select(None)
    output = session.save(args.output)

    labels = ",".join(str(page_id + 1) for page_id in session.page_order)
    logger.debug("Final order: %s", labels)
    print(f"Rearranged {session.page_count} page(s) [{labels}] → {output}")
    return 0


def _cmd_info(args, _logger) -> int:
    """Handle the 'info' command."""
    session = _make_session(args.scale)
    session.load(args.input)

    print(f"File:       {args.input}")
    print(f"Pages:      {session.page_count}")
    for page_id in session.page_order:
        raster = session.raster(page_id)
        width, height = raster.size if raster is not None else (0, 0)
        print(f"  Page {page_id + 1}: {width}x{height} px")
    return 0


def _cmd_edit(args, _logger) -> int:
    """Handle the 'edit' command - launch GUI editor directly."""
    from pdfrearrange import main as gui_main

    argv = [str(args.input.resolve())] if args.input else []
    return gui_main(argv)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.getLogger(LOGGER_NAME).setLevel(level)
    logger = logging.getLogger(f"{LOGGER_NAME}.cli")

    if getattr(args, "input", None) and not args.input.exists():
        print(f"Error: {args.input} not found", file=sys.stderr)
        return 1

    handlers = {
        "arrange": _cmd_arrange,
        "info": _cmd_info,
        "edit": _cmd_edit,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args, logger)
    except PdfRearrangeError as e:
        logger.debug("Command failed: %s", e)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

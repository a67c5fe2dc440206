"""Command-line entry point for pixdither.

This tool loads an image, reduces it to a lower bit depth or a fixed palette
with an error-diffusion ditherer, and saves the result.

Options are validated before the input is read; any ``DitherError`` ends the
run with ``error: <message>`` on stderr and exit status 1.

Usage example:
    pixdither bunny.png --dither atkinson --color color --depth 2
    pixdither bunny.png out.png --color "0xffd700 0x1e1e1e"
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from .dithers import DITHERERS, Ditherer, get_ditherer
from .errors import DitherError
from .modes import Mode, parse_mode, resolve
from .utils.loader import load_image, save_image


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse the pixdither command line (``sys.argv[1:]`` when ``argv`` is None).

    Only the syntax is checked here: ``--depth`` must be an integer. The
    ditherer name, the ``--color`` value and the depth range are validated by
    ``run`` so that they surface as ``DitherError`` messages.
    """
    parser = argparse.ArgumentParser(
        prog="pixdither",
        description=(
            "Reduce an image to a lower bit depth or a fixed palette using "
            "error-diffusion dithering."
        ),
    )

    parser.add_argument(
        "input",
        help="Input image (PNG, JPEG, GIF, BMP, ICO, TIFF)",
    )
    parser.add_argument(
        "output",
        nargs="?",
        default=None,
        help=(
            "Output image; PNG or JPEG inferred from the extension. Defaults to "
            "{input}_dithered_{dither}_{color}_{depth}.png in the current directory."
        ),
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=1,
        help="Bit depth, 1..7 (default: 1). Palette modes require 1.",
    )
    parser.add_argument(
        "-d",
        "--dither",
        type=str,
        default="floyd",
        help="Dithering method: " + " | ".join(DITHERERS) + " (default: floyd)",
    )
    parser.add_argument(
        "-c",
        "--color",
        type=str,
        default="bw",
        help=(
            "Color mode: bw | color | cga | a CGA color name (RED, LIGHT_BLUE, ...) "
            'for a single tint | "0xRRGGBB 0xRRGGBB" for a custom '
            "foreground/background palette (default: bw)"
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print progress information to stderr.",
    )

    return parser.parse_args(argv)


def default_output_path(input_path: Path, ditherer: Ditherer, mode: Mode, depth: int) -> Path:
    """``{stem}_dithered_{ditherer}_{mode}_{depth}.png`` in the current directory.

    ``bunny.png --dither atkinson --color color --depth 2`` saves to
    ``bunny_dithered_atkinson_color_2.png``.
    """
    stem = input_path.resolve().stem
    return Path(f"{stem}_dithered_{ditherer.name}_{mode.tag}_{depth}.png")


def _log(verbose: bool, message: str) -> None:
    if verbose:
        print(message, file=sys.stderr)


def run(args: argparse.Namespace) -> Path:
    """Run the dithering pipeline described by ``args``; returns the output path.

    Configuration errors are raised before the input image is read.
    """
    ditherer = get_ditherer(args.dither)
    mode = parse_mode(args.color)
    pipeline = resolve(mode, args.depth)

    input_path = Path(args.input)
    if args.output:
        output_path = Path(args.output).resolve()
    else:
        output_path = default_output_path(input_path, ditherer, mode, args.depth)

    verbose = args.verbose
    _log(
        verbose,
        "running pixdither in VERBOSE mode:\n"
        f"\tINPUT: {input_path.resolve()}\n"
        f"\tOUTPUT: {output_path}\n"
        f"\tDITHERER: {ditherer}\n"
        f"\tBIT_DEPTH: {args.depth}\n"
        f"\tCOLOR_MODE: {mode}",
    )

    img = load_image(input_path)
    _log(verbose, f'image loaded from "{input_path}".\ndithering...')

    out = pipeline.run(img, ditherer)
    _log(verbose, "dithering complete.\nsaving...")

    save_image(out, output_path)
    _log(verbose, f'saved to "{output_path}"')
    return output_path


def main(argv: Optional[list[str]] = None) -> int:
    """Dither one image from the command line and return the exit status.

    Every ``DitherError`` (an unknown option, ditherer or palette color, a bad
    depth, or an ``ImageReadError`` / ``ImageWriteError`` from loading and
    saving) is printed as ``error: <message>`` on stderr and gives status 1.
    Argument syntax errors exit through argparse with status 2.
    """
    args = parse_args(argv)
    try:
        run(args)
    except DitherError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

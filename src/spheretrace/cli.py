"""Command-line entry point: render the default scene to an image file.

Usage:
    spheretrace [options]
    python -m spheretrace [options]

Options:
    --width WIDTH           Image width in pixels (default: 800)
    --height HEIGHT         Image height in pixels (instead of --aspect-ratio)
    --aspect-ratio RATIO    Width / height used when --height is absent (default: 16/9)
    --samples SAMPLES       Samples per pixel (default: 16)
    --max-depth DEPTH       Maximum ray bounces (default: 10)
    --seed SEED             Sampler seed for reproducible renders
    --absorption POLICY     black or diffuse (default: black)
    --output OUTPUT         Output file path (default: image.ppm)
    --quiet                 Suppress progress output
    --verbose               Enable debug logging

Example:
    spheretrace --width 400 --samples 50 --seed 1 --output spheres.png
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path

import taichi as ti

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 800
DEFAULT_ASPECT_RATIO = 16.0 / 9.0
DEFAULT_SAMPLES = 16
DEFAULT_MAX_DEPTH = 10
DEFAULT_OUTPUT = "image.ppm"

ABSORPTION_CHOICES = ("black", "diffuse")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="spheretrace",
        description="Render the default sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_WIDTH,
        help=f"Image width in pixels (default: {DEFAULT_WIDTH})",
    )
    size = parser.add_mutually_exclusive_group()
    size.add_argument(
        "--height",
        type=int,
        default=None,
        help="Image height in pixels (default: derived from --aspect-ratio)",
    )
    size.add_argument(
        "--aspect-ratio",
        type=float,
        default=DEFAULT_ASPECT_RATIO,
        help="Width / height ratio (default: 16/9)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=DEFAULT_SAMPLES,
        help=f"Number of samples per pixel (default: {DEFAULT_SAMPLES})",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum ray bounces (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Sampler seed (default: fresh entropy)",
    )
    parser.add_argument(
        "--absorption",
        choices=ABSORPTION_CHOICES,
        default="black",
        help="How absorbed rays are shaded (default: black)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=DEFAULT_OUTPUT,
        help=f"Output file path (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> Path:
    """Render the default scene with the parsed options and save it.

    Taichi must already be initialized.

    Returns:
        Path to the saved image file.

    Raises:
        ValueError: If the options describe an invalid camera.
        OSError: If the image cannot be written.
    """
    # Lazy imports to allow Taichi initialization first
    from spheretrace.camera.camera import Camera
    from spheretrace.core.integrator import AbsorptionPolicy
    from spheretrace.scene.default_scene import create_default_scene

    policy = (
        AbsorptionPolicy.DIFFUSE_FALLBACK
        if args.absorption == "diffuse"
        else AbsorptionPolicy.BLACK
    )
    options = {
        "samples_per_pixel": args.samples,
        "max_depth": args.max_depth,
        "seed": args.seed,
        "absorption": policy,
    }
    if args.height is not None:
        camera = Camera(width=args.width, height=args.height, **options)
    else:
        camera = Camera.with_aspect_ratio(args.width, args.aspect_ratio, **options)

    world = create_default_scene()

    if not args.quiet:
        print(
            f"Rendering {camera.width}x{camera.height}, "
            f"{camera.samples_per_pixel} samples per pixel..."
        )

    start_time = time.time()

    def progress_callback(rows_done: int, total_rows: int) -> None:
        remaining = total_rows - rows_done
        print(f"\r  Scanlines remaining: {remaining:5d}", end="", flush=True)

    image = camera.render(world, callback=None if args.quiet else progress_callback)

    if not args.quiet:
        print()  # Newline after progress

    output_file = image.save(args.output)

    total_time = time.time() - start_time
    logger.info("Render finished in %.2fs", total_time)
    if not args.quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    ti.init(arch=ti.cpu)

    try:
        run(args)
        return 0
    except Exception as e:
        logger.debug("Render failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""Render a depth image of a sphere scene.

This script builds a scene (a default group of transformed unit spheres, or
one loaded from a JSON scene file), renders it with an orthographic camera,
and writes the per-pixel hit parameter as 8-bit greyscale.

Usage:
    python examples/render_spheres.py [options]

Options:
    --width WIDTH       Image width in pixels (default: 1920)
    --height HEIGHT     Image height in pixels (default: 1080)
    --scene SCENE       JSON scene file (default: built-in sphere group)
    --scale SCALE       Intensity per unit of ray parameter (default: 128)
    --output OUTPUT     Output file path, .pgm or .png (default: out.pgm)
    --quiet             Suppress progress output

Environment:
    LOG_LEVEL           Logging level for the rayframe loggers (default: INFO)

Example:
    python examples/render_spheres.py --width 320 --height 180 --output spheres.png
"""

from __future__ import annotations

import argparse
import logging
import math
import os
import sys
from pathlib import Path

from rayframe.camera.orthographic import OrthographicCamera
from rayframe.core.renderer import DepthRenderer, coverage
from rayframe.geometry.sphere import Sphere
from rayframe.preview.export import DEFAULT_DEPTH_SCALE, save_image
from rayframe.scene.config import load_scene
from rayframe.scene.node import Render
from rayframe.scene.union import Union

logger = logging.getLogger("render_spheres")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a depth image of a sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1920,
        help="Image width in pixels (default: 1920)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=1080,
        help="Image height in pixels (default: 1080)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file (default: built-in sphere group)",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=DEFAULT_DEPTH_SCALE,
        help=f"Intensity per unit of ray parameter (default: {DEFAULT_DEPTH_SCALE:g})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="out.pgm",
        help="Output file path, .pgm or .png (default: out.pgm)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def build_default_scene() -> Render:
    """A squashed center sphere flanked by two small tilted ellipsoids."""
    scene = Union(name="spheres")

    scene.add(Sphere(name="center")).scale(0.8, 0.8, 0.5)
    scene.add(Sphere(name="left")).translate(-1.3, 0.2, 0.5).rotate_z(math.pi / 6).scale(
        0.3, 0.6, 0.3
    )
    scene.add(Sphere(name="right")).translate(1.3, -0.2, 0.5).rotate_z(-math.pi / 6).scale(
        0.3, 0.6, 0.3
    )
    return scene


def render_spheres(
    width: int = 1920,
    height: int = 1080,
    scene_path: str | None = None,
    scale: float = DEFAULT_DEPTH_SCALE,
    output_path: str = "out.pgm",
    quiet: bool = False,
) -> Path:
    """Render the scene and save the depth image.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        scene_path: Optional JSON scene file; the default scene is used if None.
        scale: Intensity per unit of ray parameter.
        output_path: Output file path (.pgm or .png).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    scene = load_scene(scene_path) if scene_path else build_default_scene()
    camera = OrthographicCamera(width=width, height=height)
    renderer = DepthRenderer(scene, camera)

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            print(f"\r  Progress: {current}/{target} rows", end="", flush=True)

    depth = renderer.render(callback=progress_callback)
    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    save_image(depth, output_file, scale=scale)

    if not quiet:
        print(f"Coverage: {coverage(depth) * 100.0:.1f}%")
        print(f"Saved to: {output_file.absolute()}")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    log_level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    logging.basicConfig(level=log_level)

    try:
        render_spheres(
            width=args.width,
            height=args.height,
            scene_path=args.scene,
            scale=args.scale,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError) as e:
        logger.debug("Render failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

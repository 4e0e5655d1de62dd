#!/usr/bin/env python3
"""Render the reference scene (or a scene loaded from JSON).

This script creates the scene, renders it with the Phong ray caster, and
writes the image as plain-text PPM or as PNG.

Usage:
    python -m examples.render_reference_scene [options]

Options:
    --scene PATH            Scene JSON file (default: the reference scene)
    --width WIDTH           Override the image width in pixels
    --height HEIGHT         Override the image height in pixels
    --output OUTPUT         Output file; .png writes PNG, anything else PPM
                            (default: PPM on stdout)
    --serial                Evaluate pixels with the serialised kernel
    --rows-per-batch N      Rows per kernel launch / progress update (default: 16)
    --timeout SECONDS       Abort if the render takes longer than this
    --cpu                   Force the CPU backend
    --quiet                 Suppress progress output

Progress is printed to stderr so that PPM output on stdout stays clean.

Example:
    python -m examples.render_reference_scene --width 640 --height 480 --output scene.png
    python -m examples.render_reference_scene > scene.ppm
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the reference scene with the Phong ray caster.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="Scene JSON file (default: the reference scene)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Override the image width in pixels",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Override the image height in pixels",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output file; .png writes PNG, anything else PPM (default: PPM on stdout)",
    )
    parser.add_argument(
        "--serial",
        action="store_true",
        help="Evaluate pixels with the serialised kernel",
    )
    parser.add_argument(
        "--rows-per-batch",
        type=int,
        default=16,
        help="Rows per kernel launch and progress update (default: 16)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Abort if rendering takes longer than this many seconds",
    )
    parser.add_argument(
        "--cpu",
        action="store_true",
        help="Force the CPU backend",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_scene(
    scene_path: str | None = None,
    width: int | None = None,
    height: int | None = None,
    output_path: str | None = None,
    serial: bool = False,
    rows_per_batch: int = 16,
    timeout: float | None = None,
    quiet: bool = False,
) -> Path | None:
    """Render a scene and write the image.

    Args:
        scene_path: Scene JSON file, or None for the reference scene.
        width: Image width override.
        height: Image height override.
        output_path: Output file path, or None for PPM on stdout.
        serial: If True, use the serialised kernel.
        rows_per_batch: Number of rows rendered between progress updates.
        timeout: Maximum render time in seconds, or None for no limit.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file, or None if the image went to stdout.
    """
    # Lazy imports to allow Taichi initialization first
    from rray.core.render import render
    from rray.output.export import save_png
    from rray.output.ppm import save_ppm, write_ppm
    from rray.scene.config import load_scene_file
    from rray.scene.reference import create_reference_scene

    if scene_path is not None:
        if not quiet:
            print(f"Loading scene from {scene_path}...", file=sys.stderr)
        scene = load_scene_file(scene_path)
    else:
        scene = create_reference_scene()

    if width is not None or height is not None:
        scene = scene.replace_size(
            width if width is not None else scene.width,
            height if height is not None else scene.height,
        )

    if not quiet:
        print(
            f"Rendering {scene.width}x{scene.height} "
            f"({len(scene.primitives)} primitives, {len(scene.lights)} lights)...",
            file=sys.stderr,
        )

    start_time = time.time()
    deadline = start_time + timeout if timeout is not None else None

    def should_cancel() -> bool:
        return deadline is not None and time.time() > deadline

    def progress_callback(rows_done: int, total_rows: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (rows_done / total_rows) * 100 if total_rows > 0 else 0
            print(
                f"\r  Progress: {rows_done}/{total_rows} rows "
                f"({progress_pct:.1f}%) - {elapsed:.2f}s",
                end="",
                file=sys.stderr,
                flush=True,
            )

    image = render(
        scene,
        parallel=not serial,
        rows_per_batch=rows_per_batch,
        callback=progress_callback,
        should_cancel=should_cancel,
    )

    if not quiet:
        print(file=sys.stderr)  # Newline after progress

    total_time = time.time() - start_time

    if output_path is None:
        write_ppm(image, sys.stdout)
        if not quiet:
            print(f"Total time: {total_time:.2f}s", file=sys.stderr)
        return None

    output_file = Path(output_path)
    if output_file.suffix.lower() == ".png":
        save_png(image, output_file)
    else:
        save_ppm(image, output_file)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}", file=sys.stderr)
        print(f"Total time: {total_time:.2f}s", file=sys.stderr)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Initialize Taichi
    # Use GPU if available, fall back to CPU
    backend = "CPU"
    if args.cpu:
        ti.init(arch=ti.cpu, fast_math=False)
    else:
        try:
            ti.init(arch=ti.gpu, fast_math=False)
            backend = "GPU"
        except Exception:
            ti.init(arch=ti.cpu, fast_math=False)
    if not args.quiet:
        print(f"Using {backend} backend", file=sys.stderr)

    try:
        render_scene(
            scene_path=args.scene,
            width=args.width,
            height=args.height,
            output_path=args.output,
            serial=args.serial,
            rows_per_batch=args.rows_per_batch,
            timeout=args.timeout,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""
CT Viewer

Command-line entry point: builds a phantom, renders every mode, and
optionally exports the phantom as a DICOM series.
"""

import argparse
import logging
import sys
import time

import numpy as np

from config import DEFAULT_RENDER, WindowPreset
from core import RenderError, RenderMode, ViewParameters, ViewPlane
from rendering import get_backend, render
from simulation import generate_phantom


def setup_logging(verbose: bool = False):
    """Configure logging to stdout."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a synthetic head CT phantom.")
    parser.add_argument("--size", type=int, nargs=3, default=(128, 128, 100),
                        metavar=("WIDTH", "HEIGHT", "DEPTH"))
    parser.add_argument("--seed", type=int, default=None, help="Phantom random seed")
    parser.add_argument("--workers", type=int, default=DEFAULT_RENDER.max_workers,
                        help="Render threads (1 = sequential)")
    parser.add_argument("--rotation", type=float, nargs=2, default=(0.0, 0.0),
                        metavar=("X", "Y"), help="3D rotation in degrees")
    parser.add_argument("--export", metavar="DIR", help="Write the phantom as a DICOM series")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Application entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        width, height, depth = args.size
        volume = generate_phantom(width, height, depth, rng=np.random.default_rng(args.seed))
        backend = get_backend(args.workers)
        logging.info(f"Using backend: {backend.name}")

        base = ViewParameters().rotated(*args.rotation)
        requests = [ViewParameters(view_plane=plane) for plane in ViewPlane]
        requests += [base.with_mode(mode) for mode in (RenderMode.MIP, RenderMode.SURFACE)]

        for params in requests:
            start = time.perf_counter()
            image = render(volume, params, backend)
            elapsed = time.perf_counter() - start
            label = params.view_plane.value if params.mode == RenderMode.SLICE else params.mode.value
            logging.info(f"{label}: {image.width}x{image.height}, "
                         f"mean intensity {image.pixels.mean():.1f}, {elapsed * 1000:.0f} ms")

        if args.export:
            from exporters import DICOMExporter
            preset = WindowPreset.DEFAULT
            DICOMExporter().export(volume, args.export, preset.center, preset.width)
    except (RenderError, ImportError, OSError) as e:
        logging.error(f"Rendering failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

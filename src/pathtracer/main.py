# main.py
import argparse
import logging
import sys
import time
from typing import List, Optional

from pathtracer.core.errors import RayTracerError
from pathtracer.renderer.image_output import FORMATS, save
from pathtracer.renderer.raytracer import Renderer
from pathtracer.scenes import SCENES, setup

logger = logging.getLogger("pathtracer")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render one of the demo scenes with the stochastic path tracer.",
    )
    parser.add_argument("--scene", choices=sorted(SCENES), default="random_scene",
                        help="Scene to render (default: random_scene)")
    parser.add_argument("--width", type=int, default=None,
                        help="Image width in pixels (default: the scene's own)")
    parser.add_argument("--samples", type=int, default=None,
                        help="Samples per pixel (default: the scene's own)")
    parser.add_argument("--depth", type=int, default=None,
                        help="Maximum number of bounces per path (default: 50)")
    parser.add_argument("--repetitions", type=int, default=None,
                        help="Independent full renders to average (default: 1)")
    parser.add_argument("--workers", type=int, default=None,
                        help="Worker processes (default: one per CPU)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for a reproducible scene and image")
    parser.add_argument("--output", default="main",
                        help="Output path; the format suffix is added if missing (default: main)")
    parser.add_argument("--format", choices=FORMATS, default="png",
                        help="Output image format (default: png)")
    parser.add_argument("--asset", default=None,
                        help="Image texture used by the earth and final_scene scenes")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log per-row progress")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        settings = setup(args.scene, asset_path=args.asset, seed=args.seed,
                         image_width=args.width, samples_per_pixel=args.samples,
                         max_depth=args.depth, repetitions=args.repetitions,
                         workers=args.workers)
        start = time.perf_counter()
        image = Renderer(settings.world, settings.camera, settings.config).render()
        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        path = save(image, args.output, args.format)
    except RayTracerError as e:
        logger.error("%s", e)
        return 1

    print(f"Wrote {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

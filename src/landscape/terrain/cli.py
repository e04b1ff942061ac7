"""Command-line interface for terrain generation."""

import argparse
import logging
import secrets
import sys
import time
from pathlib import Path

import structlog


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for terrain generation."""
    parser = argparse.ArgumentParser(
        description="Generate a procedural island terrain as a GLB file"
    )
    parser.add_argument(
        "--size", type=int, default=None, help="Grid size in vertices per side (default: 256)"
    )
    parser.add_argument(
        "--scale", type=float, default=None, help="Base noise frequency (default: 0.1)"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Noise seed (default: random)"
    )
    parser.add_argument(
        "--config", type=str, default=None, help="TOML terrain config file (optional)"
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default="heightmap.glb",
        help="Output path (default: heightmap.glb)",
    )
    parser.add_argument(
        "--points",
        type=str,
        default=None,
        help="Path to save interest points as JSON (optional)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )

    # Import here to avoid slow startup for --help
    from ..exceptions import InvalidParameterError
    from ..glb import encode
    from .config import TerrainConfig, load_config
    from .generator import generate_terrain
    from .persistence import save_glb, save_interest_points

    if args.config:
        try:
            config = load_config(Path(args.config))
        except FileNotFoundError as e:
            parser.error(str(e))
    else:
        config = TerrainConfig()

    # Apply CLI overrides
    updates: dict[str, int | float] = {}
    if args.size is not None:
        updates["size"] = args.size
    if args.scale is not None:
        updates["scale"] = args.scale
    if args.seed is not None:
        updates["seed"] = args.seed
    elif not args.config:
        updates["seed"] = secrets.randbits(32)
    config = config.model_copy(update=updates)

    output_path = Path(args.output)
    print(f"Generating {config.size}x{config.size} terrain with seed {config.seed}")

    start_time = time.time()
    try:
        result = generate_terrain(config)
        data = encode(result.mesh.positions, result.mesh.indices)
    except InvalidParameterError as e:
        parser.error(str(e))
    gen_time = time.time() - start_time

    save_glb(output_path, data)
    if args.points:
        save_interest_points(Path(args.points), result.interest_points)

    print(f"Generated {output_path} with seed {config.seed} in {gen_time:.2f}s")
    for point in result.interest_points:
        print(f"  {point}")


if __name__ == "__main__":
    main(sys.argv[1:])

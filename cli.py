from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from tqdm import tqdm

from carver import SeamCarver, SeamCarvingError
from dimensions import InvalidDimensionSpec, ResizeDimension
from utils import Config, read_image, save_uint8
from viz import VizGifRecorder


def _dimensions_arg(text: str) -> ResizeDimension:
    try:
        return ResizeDimension.parse(text)
    except InvalidDimensionSpec as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def parse_args(argv: Optional[List[str]] = None) -> dict:
    ap = argparse.ArgumentParser(
        prog="seamcarver",
        description="Content-aware image shrinking by seam carving",
    )

    ap.add_argument("image", help="Path to input image")
    ap.add_argument(
        "dimensions",
        type=_dimensions_arg,
        help="Target size: WxH, Wx (width only) or xH (height only)",
    )
    ap.add_argument("output", nargs="?", default=None,
                    help="Output image path (default: overwrite the input image)")

    ap.add_argument("--no-progress", action="store_true", help="Do not show a progress bar.")

    # Plan-only (dry run)
    ap.add_argument(
        "--plan-only",
        action="store_true",
        help="Print the source/target sizes and seam counts and exit without carving.",
    )

    # Visualization (GIF)
    ap.add_argument("--viz-gif", help="Path to an output GIF that visualizes carved seams over time.")
    ap.add_argument("--viz-every", type=int, default=1, help="Record every N-th seam (default: 1 = every seam).")
    ap.add_argument("--viz-max-frames", type=int, default=0, help="Optional cap on recorded frames (0 = unlimited).")
    ap.add_argument("--viz-fps", type=int, default=12, help="GIF frames per second (default: 12).")

    return vars(ap.parse_args(argv))


def validate_and_normalize_args(a: dict) -> dict:
    if not os.path.exists(a["image"]):
        sys.exit(f"Error: Input image not found: {a['image']}")

    if a.get("output") is None:
        a["output"] = a["image"]

    return a


def ensure_output_dirs(a: dict) -> None:
    """Create the parent directories of the output image and GIF."""
    for key in ("output", "viz_gif"):
        if a.get(key):
            out_dir = os.path.dirname(os.path.abspath(a[key]))
            if out_dir and not os.path.exists(out_dir):
                os.makedirs(out_dir, exist_ok=True)


def build_config(a: dict) -> Config:
    return Config(
        show_progress=not a["no_progress"],
        viz_every=max(1, int(a["viz_every"])),
        viz_max_frames=a["viz_max_frames"] if a["viz_max_frames"] > 0 else None,
        viz_fps=max(1, int(a["viz_fps"])),
    )


def print_plan(args: dict, cfg: Config, sc: SeamCarver) -> None:
    """Emit a deterministic, human-friendly plan and exit."""
    src_w, src_h = sc.source_size
    dst_w, dst_h = sc.target_size

    print("=== Seam Carving Plan ===")
    print(f"Source size:     {src_w}x{src_h} (WxH)")
    print(f"Requested:       {args['dimensions']}")
    print(f"Target size:     {dst_w}x{dst_h} (WxH)")
    print(f"Vertical seams:  {sc.remaining_vertical_seams}")
    print(f"Horizontal seams: {sc.remaining_horizontal_seams}")
    print(f"Output:          {args['output']}")

    if args.get("viz_gif"):
        cap = cfg.viz_max_frames if cfg.viz_max_frames is not None else "unlimited"
        print(f"Visualization:   GIF -> {args['viz_gif']}  (every={cfg.viz_every}, max_frames={cap}, fps={cfg.viz_fps})")
    else:
        print("Visualization:   (disabled)")

    print("Plan-only:       No processing will be performed.")
    sys.exit(0)


def main(argv: Optional[List[str]] = None) -> None:
    args = validate_and_normalize_args(parse_args(argv))
    cfg = build_config(args)

    try:
        im = read_image(args["image"])
    except RuntimeError:
        sys.exit(f"Error: could not open image: {args['image']}")

    try:
        sc = SeamCarver(im, args["dimensions"])
    except SeamCarvingError as e:
        sys.exit(f"Error: {e}")

    if args["plan_only"]:
        print_plan(args, cfg, sc)

    ensure_output_dirs(args)

    recorder = None
    if args.get("viz_gif"):
        recorder = VizGifRecorder(
            gif_path=args["viz_gif"],
            every=cfg.viz_every,
            max_frames=cfg.viz_max_frames,
            fps=cfg.viz_fps,
        )

    bar = tqdm(total=sc.seams_remaining(), ncols=cfg.bar_width,
               bar_format="{bar} {n_fmt:>7}/{total_fmt:7}",
               disable=not cfg.show_progress)
    output = sc.carve(lambda: bar.update(1),
                      on_seam=(recorder.on_seam if recorder else None))
    bar.close()

    if recorder is not None:
        recorder.close()

    try:
        save_uint8(args["output"], output)
    except RuntimeError as e:
        sys.exit(f"Error: could not save image: {e}")

    print(f"Saved to {args['output']}")


if __name__ == "__main__":
    main()

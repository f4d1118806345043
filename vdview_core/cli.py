from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from vdview_raster.image_io import ImageLoadError, load_image, save_png
from vdview_script import format_scene, load_script, parse_script

from .config import ViewerConfig, load_config
from .events import QueuedEventSource
from .targets.base import RenderTarget
from .targets.headless import HeadlessTarget
from .viewer import ViewerContext, ViewerSession


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="vdview")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    view = sub.add_parser("view", help="Show an image with a drawing script overlaid.")
    view.add_argument("image", type=Path)
    view.add_argument("script", type=Path, nargs="?", default=None)
    view.add_argument("--config", type=Path, default=None, help="TOML file with [viewer]/[style] tables.")
    view.add_argument("--render", choices=["headless", "tk"], default="headless")
    view.add_argument(
        "--frames",
        type=int,
        default=None,
        help="Max frames to render. Default: until quit for tk render; 1 for headless render.",
    )
    view.add_argument("--fps", type=int, default=None)
    view.add_argument("--max-elements", type=int, default=None)
    view.add_argument("--screenshot", type=Path, default=None, help="Path written by the 's' key.")
    view.add_argument("--save", type=Path, default=None, help="Write the composed frame to this PNG and exit.")

    check = sub.add_parser("check", help="Parse a drawing script and report diagnostics.")
    check.add_argument("script", type=Path)
    check.add_argument("--max-elements", type=int, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "view":
        return _run_view(args)
    if args.command == "check":
        return _run_check(args)
    raise RuntimeError(f"unsupported command: {args.command}")


def _run_view(args: argparse.Namespace) -> int:
    config = load_config(args.config) if args.config is not None else ViewerConfig()
    config = config.with_overrides(
        target_fps=args.fps,
        max_elements=args.max_elements,
        screenshot_path=args.screenshot,
    )
    try:
        image = load_image(args.image)
    except ImageLoadError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.script is not None:
        result = load_script(args.script, max_points=config.max_elements, max_lines=config.max_elements)
    else:
        result = parse_script("", max_points=config.max_elements, max_lines=config.max_elements)

    context = ViewerContext.for_image(image, config)
    if args.render == "tk":
        from .targets.tk_target import TkTarget

        tk_target = TkTarget(width=context.width, height=context.height, title=context.title)
        target: RenderTarget = tk_target
        events = tk_target.events
    else:
        target = HeadlessTarget()
        events = QueuedEventSource()

    session = ViewerSession(context=context, image=image, scene=result.scene, target=target, events=events)
    if args.save is not None:
        return 0 if save_png(session.compose_frame(), args.save) else 1

    max_frames = args.frames
    if max_frames is None and args.render == "headless":
        max_frames = 1
    run = session.run(max_frames=max_frames)
    print(
        f"view complete: frames={run.frames_presented} points={len(result.scene.points)} "
        f"lines={len(result.scene.lines)} diagnostics={len(result.diagnostics)}"
    )
    return 0


def _run_check(args: argparse.Namespace) -> int:
    kwargs = {}
    if args.max_elements is not None:
        kwargs = {"max_points": args.max_elements, "max_lines": args.max_elements}
    result = load_script(args.script, **kwargs)
    sys.stdout.write(format_scene(result.scene))
    for diagnostic in result.diagnostics:
        print(f"{diagnostic.kind}: {diagnostic}", file=sys.stderr)
    return 1 if result.diagnostics else 0

"""Headless playback of an animation file, logging each frame as it comes up."""

from __future__ import annotations

import argparse
import logging
import time

from microbit_animator.config import load_config
from microbit_animator.errors import AnimationError
from microbit_animator.logs import configure_logging
from microbit_animator.model import AnimationDocument
from microbit_animator.playback import PlaybackClock

logger = logging.getLogger("microbit_animator.scripts.play")


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("path", nargs="?", default=None)
    parser.add_argument("--fps", type=int, default=None)
    parser.add_argument("--seconds", type=float, default=5.0)
    parser.add_argument("--config", default="config/config.yaml")
    args = parser.parse_args()

    config = load_config(args.config)
    configure_logging(config.log)

    path = args.path or config.document.animation_path
    if not path:
        parser.error("no animation path given and ANIMATION_PATH is not set")

    document = AnimationDocument.blank(config.document.default_frame_count)
    try:
        document.load(path)
    except AnimationError as exc:
        logger.error("%s", exc)
        return 1

    fps = args.fps if args.fps is not None else config.playback.frames_per_second
    try:
        clock = PlaybackClock(document, frames_per_second=fps)
    except ValueError as exc:
        parser.error(str(exc))

    start = time.monotonic()
    clock.start(start)
    logger.info("Frame %d: %s", clock.current_index, document.selected_frame)
    try:
        while time.monotonic() - start < args.seconds:
            index = clock.tick()
            if index is not None:
                logger.info("Frame %d: %s", index, document.selected_frame)
            time.sleep(config.playback.poll_interval_seconds)
    except KeyboardInterrupt:
        pass
    finally:
        clock.stop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

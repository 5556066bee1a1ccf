"""Rewrite an animation file in canonical .byte form."""

from __future__ import annotations

import argparse
import logging

from microbit_animator.config import load_config
from microbit_animator.errors import AnimationError
from microbit_animator.logs import configure_logging
from microbit_animator.model import AnimationDocument

logger = logging.getLogger("microbit_animator.scripts.normalize")


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("path", nargs="?", default=None)
    parser.add_argument("--output", default=None, help="Write here instead of overwriting the input")
    parser.add_argument("--config", default="config/config.yaml")
    args = parser.parse_args()

    config = load_config(args.config)
    configure_logging(config.log)

    path = args.path or config.document.animation_path
    if not path:
        parser.error("no animation path given and ANIMATION_PATH is not set")

    document = AnimationDocument.blank(config.document.default_frame_count)
    try:
        skipped = document.load(path)
        target = document.save_as(args.output) if args.output else document.save()
    except AnimationError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Wrote %d frame(s) to %s (%d line(s) dropped)", len(document), target, skipped)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Animation data model and its text format."""

from microbit_animator.model.codec import DecodeResult, decode_lines, decode_text, encode_frames
from microbit_animator.model.document import AnimationDocument
from microbit_animator.model.frame import Frame

__all__ = [
    "AnimationDocument",
    "DecodeResult",
    "Frame",
    "decode_lines",
    "decode_text",
    "encode_frames",
]

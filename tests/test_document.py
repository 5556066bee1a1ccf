from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from microbit_animator.errors import (
    AnimationIOError,
    EmptyAnimationError,
    LastFrameError,
    NoBoundPathError,
)
from microbit_animator.model.codec import encode_frames
from microbit_animator.model.document import AnimationDocument
from microbit_animator.model.frame import Frame


def _numbered_document(count: int) -> AnimationDocument:
    """Frames whose first LED holds their original position."""
    return AnimationDocument([Frame.with_values([i] * 25) for i in range(count)])


def _order(document: AnimationDocument) -> list[int]:
    return [frame.leds[0] for frame in document]


def test_default_document() -> None:
    document = AnimationDocument()

    assert len(document) == 5
    assert all(frame == Frame() for frame in document)
    assert document.selected_index == 0
    assert document.path is None


def test_blank_document_frame_count() -> None:
    assert len(AnimationDocument.blank(2)) == 2
    with pytest.raises(ValueError):
        AnimationDocument.blank(0)


def test_empty_document_rejected() -> None:
    with pytest.raises(ValueError):
        AnimationDocument([])


def test_select_validates_index() -> None:
    document = _numbered_document(3)

    assert document.select(2).leds[0] == 2
    assert document.selected_frame is document[2]
    with pytest.raises(IndexError):
        document.select(3)
    with pytest.raises(IndexError):
        document.selected_index = -1
    assert document.selected_index == 2


def test_insert_after_duplicates_and_selects_copy() -> None:
    document = _numbered_document(3)

    copy = document.insert_after(1)

    assert _order(document) == [0, 1, 1, 2]
    assert document.selected_index == 2
    assert document[2] is copy
    copy.set_all(99)
    assert document[1].leds[0] == 1


def test_remove_only_frame_rejected() -> None:
    document = AnimationDocument([Frame()])

    with pytest.raises(LastFrameError):
        document.remove(0)

    assert len(document) == 1


def test_remove_reclamps_selection() -> None:
    document = _numbered_document(3)
    document.select(2)

    document.remove(2)

    assert _order(document) == [0, 1]
    assert document.selected_index == 1

    document.remove(0)
    assert _order(document) == [1]
    assert document.selected_index == 0


def test_remove_middle_selects_next_frame() -> None:
    document = _numbered_document(4)

    removed = document.remove(1)

    assert removed.leds[0] == 1
    assert _order(document) == [0, 2, 3]
    assert document.selected_index == 1


def test_swap_selection_follows_selected_frame() -> None:
    document = _numbered_document(4)
    document.select(1)

    document.swap(1, 3)

    assert _order(document) == [0, 3, 2, 1]
    assert document.selected_index == 3

    document.swap(0, 3)
    assert document.selected_index == 0


def test_swap_leaves_unrelated_selection() -> None:
    document = _numbered_document(4)
    document.select(0)

    document.swap(2, 3)

    assert _order(document) == [0, 1, 3, 2]
    assert document.selected_index == 0


def test_move_up_and_down() -> None:
    document = _numbered_document(3)
    document.select(2)

    document.move_up(2)
    assert _order(document) == [0, 2, 1]
    assert document.selected_index == 1

    document.move_down(0)
    assert _order(document) == [2, 0, 1]
    assert document.selected_index == 0


def test_move_at_boundaries_is_noop() -> None:
    document = _numbered_document(3)

    document.move_up(0)
    document.move_down(2)

    assert _order(document) == [0, 1, 2]


def test_editing_rejects_bad_indices() -> None:
    document = _numbered_document(2)

    with pytest.raises(IndexError):
        document.insert_after(2)
    with pytest.raises(IndexError):
        document.remove(-1)
    with pytest.raises(IndexError):
        document.swap(0, 5)
    with pytest.raises(IndexError):
        document.move_up(2)


def test_save_without_path_raises() -> None:
    document = AnimationDocument()

    with pytest.raises(NoBoundPathError):
        document.save()


def test_save_as_writes_file_and_binds_path(tmp_path: Path) -> None:
    document = AnimationDocument([Frame.with_values([0] * 25), Frame()])
    target = tmp_path / "anim" / "animation.txt"

    document.save_as(target)

    assert document.path == target
    assert target.read_text(encoding="utf-8") == encode_frames(document.frames)
    assert list(target.parent.iterdir()) == [target]


def test_save_rewrites_bound_file(tmp_path: Path) -> None:
    target = tmp_path / "animation.txt"
    document = AnimationDocument([Frame()])
    document.save_as(target)

    document.insert_after(0).set_all(0)
    document.save()

    lines = target.read_text(encoding="utf-8").splitlines()
    assert lines[1] == ".byte 1"
    assert lines[2] == ".byte " + ",".join(["0"] * 25)
    assert len(lines) == 4


def test_write_failure_leaves_file_and_binding(tmp_path: Path) -> None:
    target = tmp_path / "animation.txt"
    target.write_text("original\n", encoding="utf-8")
    document = AnimationDocument()

    with patch("microbit_animator.model.document.os.replace", side_effect=OSError("disk full")):
        with pytest.raises(AnimationIOError) as exc_info:
            document.save_as(target)

    assert exc_info.value.path == target
    assert document.path is None
    assert target.read_text(encoding="utf-8") == "original\n"
    assert list(tmp_path.iterdir()) == [target]


def test_load_replaces_frames_and_binds_path(tmp_path: Path) -> None:
    source = tmp_path / "animation.txt"
    source.write_text(encode_frames([Frame.with_values(range(25)), Frame()]), encoding="utf-8")
    document = AnimationDocument()

    skipped = document.load(source)

    assert skipped == 0
    assert document.path == source
    assert list(document) == [Frame.with_values(range(25)), Frame()]


def test_load_roundtrip_after_save(tmp_path: Path) -> None:
    original = AnimationDocument([Frame.with_values([(i * 11) % 256 for i in range(25)]), Frame()])
    original.save_as(tmp_path / "animation.txt")

    reloaded = AnimationDocument()
    reloaded.load(tmp_path / "animation.txt")

    assert list(reloaded) == list(original)


def test_load_clamps_selection(tmp_path: Path) -> None:
    source = tmp_path / "animation.txt"
    source.write_text(encode_frames([Frame(), Frame()]), encoding="utf-8")
    document = AnimationDocument()
    document.select(4)

    document.load(source)

    assert document.selected_index == 1


def test_load_counts_and_logs_skipped_lines(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    source = tmp_path / "animation.txt"
    source.write_text(".byte 1,2,x\n.byte 1\n.byte 4,5,6\n.byte 0\n", encoding="utf-8")
    document = AnimationDocument()

    with caplog.at_level(logging.WARNING, logger="microbit_animator.model.document"):
        skipped = document.load(source)

    assert skipped == 1
    assert len(document) == 1
    assert "Skipped 1 malformed line" in caplog.text


def test_load_missing_file_keeps_document(tmp_path: Path) -> None:
    document = _numbered_document(2)
    document.save_as(tmp_path / "kept.txt")

    with pytest.raises(AnimationIOError):
        document.load(tmp_path / "missing.txt")

    assert _order(document) == [0, 1]
    assert document.path == tmp_path / "kept.txt"


def test_load_without_frames_keeps_document(tmp_path: Path) -> None:
    source = tmp_path / "broken.txt"
    source.write_text("not an animation\n.byte 0\n", encoding="utf-8")
    document = _numbered_document(3)
    document.select(2)

    with pytest.raises(EmptyAnimationError):
        document.load(source)

    assert _order(document) == [0, 1, 2]
    assert document.path is None
    assert document.selected_index == 2


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
@pytest.mark.parametrize("mode", [0o644, 0o640])
def test_save_keeps_existing_file_mode(tmp_path: Path, mode: int) -> None:
    target = tmp_path / "animation.txt"
    target.write_text("original\n", encoding="utf-8")
    target.chmod(mode)

    AnimationDocument().save_as(target)

    assert stat.S_IMODE(target.stat().st_mode) == mode
    assert target.read_text(encoding="utf-8").endswith(".byte 0\n")


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_save_new_file_uses_umask(tmp_path: Path) -> None:
    target = tmp_path / "animation.txt"
    previous = os.umask(0o022)
    try:
        AnimationDocument().save_as(target)
    finally:
        os.umask(previous)

    assert stat.S_IMODE(target.stat().st_mode) == 0o644

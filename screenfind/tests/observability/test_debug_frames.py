import logging
from pathlib import Path

from PIL import Image

from screenfind.contracts.events import DebugConfig, MatchStep
from screenfind.contracts.geometry import Coordinate
from screenfind.contracts.grid import Grid, Icon
from screenfind.observability.debug_frames import HIGHLIGHT, DebugFrameWriter
from screenfind.vision.icon_locator import ScreenLocator


def _white_screen():
    return Image.new("RGBA", (3, 3), color=(255, 255, 255, 255))


def _square_icon():
    return Icon(Grid.filled(2, 2, Grid.from_image(_white_screen()).pixel(0, 0)), "square")


def test_frames_written_for_each_narrowing_step(tmp_path: Path):
    config = DebugConfig(enabled=True, directory=tmp_path, verbose=True)
    locator = ScreenLocator(_white_screen(), debug_config=config)

    assert len(locator.locate(_square_icon())) == 4

    writer = locator.frame_writer
    assert writer is not None
    assert [p.name for p in writer.written] == ["0.png", "1.png", "2.png"]
    assert len({p.parent for p in writer.written}) == 1
    assert writer.written[0].parent.parent == tmp_path

    with Image.open(writer.written[-1]) as frame:
        frame = frame.convert("RGBA")
        assert frame.getpixel((0, 0)) == HIGHLIGHT
        assert frame.getpixel((1, 1)) == HIGHLIGHT
        assert frame.getpixel((2, 2)) == (255, 255, 255, 255)


def test_each_query_gets_its_own_directory(tmp_path: Path):
    config = DebugConfig(enabled=True, directory=tmp_path, verbose=True)
    locator = ScreenLocator(_white_screen(), debug_config=config)

    locator.locate(_square_icon())
    locator.locate(Icon(Grid.filled(1, 1, Grid.from_image(_white_screen()).pixel(0, 0)), "dot"))

    dirs = {p.parent for p in locator.frame_writer.written}
    assert len(dirs) == 2


def test_no_frames_without_verbose(tmp_path: Path):
    config = DebugConfig(enabled=True, directory=tmp_path, verbose=False)
    locator = ScreenLocator(_white_screen(), debug_config=config)

    assert len(locator.locate(_square_icon())) == 4
    assert locator.frame_writer is None
    assert list(tmp_path.iterdir()) == []


def test_unchanged_count_is_not_rewritten(tmp_path: Path):
    writer = DebugFrameWriter(_white_screen(), DebugConfig(enabled=True, directory=tmp_path, verbose=True))
    writer(MatchStep(icon_name="x", offset_index=0, remaining_candidate_count=2, anchors=[Coordinate(0, 0), Coordinate(1, 0)]))
    writer(MatchStep(icon_name="x", offset_index=3, remaining_candidate_count=2, anchors=[Coordinate(0, 0), Coordinate(1, 0)]))
    assert len(writer.written) == 1


def test_write_failure_does_not_break_search(tmp_path: Path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("occupied", encoding="utf-8")
    config = DebugConfig(enabled=True, directory=blocker, verbose=True)
    locator = ScreenLocator(_white_screen(), debug_config=config)

    assert len(locator.locate(_square_icon())) == 4
    assert locator.frame_writer.written == []


def test_repeated_queries_for_same_icon_never_share_a_directory(tmp_path: Path):
    config = DebugConfig(enabled=True, directory=tmp_path, verbose=True)
    locator = ScreenLocator(_white_screen(), debug_config=config)

    for _ in range(5):
        locator.locate(_square_icon())

    dirs = {p.parent for p in locator.frame_writer.written}
    assert len(dirs) == 5
    assert len(locator.frame_writer.written) == 15
    assert sorted(p.name for p in tmp_path.iterdir()) == sorted(d.name for d in dirs)


def test_caller_observer_and_frames_both_receive_steps(tmp_path: Path):
    seen = []
    config = DebugConfig(enabled=True, directory=tmp_path, verbose=True)
    locator = ScreenLocator(_white_screen(), debug_config=config, observer=seen.append)

    assert len(locator.locate(_square_icon())) == 4
    assert [s.remaining_candidate_count for s in seen] == [9, 6, 4]
    assert len(locator.frame_writer.written) == 3


def test_failing_caller_observer_still_lets_frames_through(tmp_path: Path):
    def broken(step):
        raise RuntimeError("boom")

    config = DebugConfig(enabled=True, directory=tmp_path, verbose=True)
    locator = ScreenLocator(_white_screen(), debug_config=config, observer=broken)

    assert len(locator.locate(_square_icon())) == 4
    assert len(locator.frame_writer.written) == 3


def test_grid_screen_with_frames_enabled_logs_and_skips_writer(tmp_path: Path, caplog):
    config = DebugConfig(enabled=True, directory=tmp_path, verbose=True)
    with caplog.at_level(logging.INFO, logger="screenfind.vision.icon_locator"):
        locator = ScreenLocator(Grid.from_image(_white_screen()), debug_config=config)

    assert locator.frame_writer is None
    assert "frames are off" in caplog.text
    assert len(locator.locate(_square_icon())) == 4

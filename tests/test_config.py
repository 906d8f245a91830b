"""Tests for RecorderConfig."""

import pytest

from canvas_recorder import InvalidConfigurationError, RecorderConfig


def test_defaults():
    """A fresh configuration should carry the library defaults."""
    config = RecorderConfig()

    assert config.size == (640, 640)
    assert config.color == "white"
    assert config.clear is True
    assert config.record is True
    assert config.fps == 60
    assert config.frames == 0
    assert config.on_complete is None
    assert config.image_format == "png"


def test_merged_keeps_unspecified_fields():
    """merged should only replace the options it is given."""
    config = RecorderConfig().merged(size=(300, 500), fps=10)
    merged = config.merged(color="black")

    assert merged.size == (300, 500)
    assert merged.fps == 10
    assert merged.color == "black"
    assert config.color == "white"


def test_merged_normalizes_size_to_tuple():
    """Sizes given as lists should be stored as tuples."""
    config = RecorderConfig().merged(size=[3, 5])

    assert config.size == (3, 5)
    assert config.width == 3
    assert config.height == 5


@pytest.mark.parametrize("size", [(0, 10), (10, -1), (10,), "ab", (1.5, 2), (True, 2), None])
def test_invalid_size_rejected(size):
    """Non-positive or malformed sizes should be rejected."""
    with pytest.raises(InvalidConfigurationError):
        RecorderConfig().merged(size=size)


@pytest.mark.parametrize("fps", [0, -30, 2.5, "60"])
def test_invalid_fps_rejected(fps):
    """Frame rates must be positive integers."""
    with pytest.raises(InvalidConfigurationError):
        RecorderConfig().merged(fps=fps)


def test_frames_must_be_non_negative():
    """Zero frames means unbounded; negative counts are errors."""
    assert RecorderConfig().merged(frames=0).frames == 0
    with pytest.raises(InvalidConfigurationError):
        RecorderConfig().merged(frames=-1)


def test_color_accepts_pillow_colors_and_none():
    """Pillow color strings, RGB tuples and None should all be valid."""
    config = RecorderConfig()

    assert config.merged(color="#ff0000").color == "#ff0000"
    assert config.merged(color="rgb(10, 20, 30)").color == "rgb(10, 20, 30)"
    assert config.merged(color=(1, 2, 3)).color == (1, 2, 3)
    assert config.merged(color=None).color is None


def test_unparseable_color_rejected():
    """Unknown color names should be rejected."""
    with pytest.raises(InvalidConfigurationError, match="Invalid color"):
        RecorderConfig().merged(color="not-a-color")


def test_flags_must_be_bool():
    """clear and record only accept real booleans."""
    with pytest.raises(InvalidConfigurationError, match="'clear'"):
        RecorderConfig().merged(clear=1)
    with pytest.raises(InvalidConfigurationError, match="'record'"):
        RecorderConfig().merged(record="yes")


def test_on_complete_must_be_callable():
    """on_complete accepts callables or None."""
    callback = lambda archive: None  # noqa: E731

    assert RecorderConfig().merged(on_complete=callback).on_complete is callback
    with pytest.raises(InvalidConfigurationError):
        RecorderConfig().merged(on_complete="callback")


def test_image_format_normalized():
    """Image formats should be matched case-insensitively."""
    assert RecorderConfig().merged(image_format="WEBP").image_format == "webp"
    assert RecorderConfig().merged(image_format=".png").image_format == "png"


def test_unsupported_image_format_rejected():
    """Only lossless formats with an encoder are accepted."""
    with pytest.raises(InvalidConfigurationError, match="Unsupported image format"):
        RecorderConfig().merged(image_format="jpeg")


def test_unknown_option_rejected():
    """Misspelled options should not be silently ignored."""
    with pytest.raises(InvalidConfigurationError, match="Unknown option"):
        RecorderConfig().merged(framerate=30)

"""Tests for the canvas-recorder CLI."""

import zipfile

from typer.testing import CliRunner
from canvas_recorder.cli import app

runner = CliRunner()

SKETCH = '''
def draw(context, delta):
    x = int(delta / 100)
    context.rectangle((x, 0, x, 0), fill="black")
'''


def write_sketch(tmp_path):
    path = tmp_path / "sketch.py"
    path.write_text(SKETCH)
    return path


def test_record_writes_archive(tmp_path):
    """record should save one entry per frame."""
    sketch = write_sketch(tmp_path)
    output = tmp_path / "frames.zip"

    result = runner.invoke(
        app,
        ["record", f"{sketch}:draw", "-o", str(output), "-W", "8", "-H", "4", "-n", "3", "--fps", "10"],
    )

    assert result.exit_code == 0, result.output
    with zipfile.ZipFile(output) as zf:
        assert zf.namelist() == ["000000.png", "000001.png", "000002.png"]


def test_record_format_from_environment(tmp_path):
    """CANVAS_RECORDER_FORMAT should pick the frame format."""
    sketch = write_sketch(tmp_path)
    output = tmp_path / "frames.zip"

    result = runner.invoke(
        app,
        ["record", f"{sketch}:draw", "-o", str(output), "-W", "4", "-H", "4", "-n", "2"],
        env={"CANVAS_RECORDER_FORMAT": "webp"},
    )

    assert result.exit_code == 0, result.output
    with zipfile.ZipFile(output) as zf:
        assert zf.namelist() == ["000000.webp", "000001.webp"]


def test_record_requires_positive_frames(tmp_path):
    sketch = write_sketch(tmp_path)

    result = runner.invoke(app, ["record", f"{sketch}:draw", "-n", "0"])

    assert result.exit_code == 1
    assert "--frames must be a positive number" in result.output


def test_record_rejects_malformed_sketch():
    result = runner.invoke(app, ["record", "no_colon_here", "-n", "1"])

    assert result.exit_code == 1
    assert "module:function" in result.output


def test_record_reports_missing_sketch_file(tmp_path):
    result = runner.invoke(app, ["record", f"{tmp_path / 'missing.py'}:draw", "-n", "1"])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_record_reports_invalid_options(tmp_path):
    """Recorder configuration errors exit with status 1."""
    sketch = write_sketch(tmp_path)

    result = runner.invoke(app, ["record", f"{sketch}:draw", "-n", "1", "--fps", "0"])

    assert result.exit_code == 1
    assert "fps" in result.output


def test_formats_lists_supported_formats():
    result = runner.invoke(app, ["formats"])

    assert result.exit_code == 0
    assert "png" in result.output
    assert "image/webp" in result.output

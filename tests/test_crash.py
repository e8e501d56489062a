from rebase_editor import __version__
from rebase_editor.crash import report_crash
from rebase_editor.errors import MalformedPlanError


def _raise_nested():
    try:
        raise ValueError("bad json")
    except ValueError as e:
        raise MalformedPlanError("bad json") from e


def test_report_crash_writes_log(tmp_path):
    try:
        _raise_nested()
    except MalformedPlanError as e:
        crash_file = report_crash(e, tmp_path / "data")

    assert crash_file.parent == tmp_path / "data"
    assert crash_file.name.startswith("crash_")
    text = crash_file.read_text()
    assert text.startswith(
        "Crash::: rebase_editor.errors.MalformedPlanError: "
        "Malformed rebase plan: bad json"
    )
    assert f"Version: {__version__}" in text
    assert "Traceback" in text
    assert "ValueError: bad json" in text
    assert "_raise_nested" in text

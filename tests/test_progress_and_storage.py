import json

import pytest

from engine_export.exceptions import FileIOError
from engine_export.progress import NullProgress, TqdmProgress
from engine_export.storage import read_json, write_json


def test_tqdm_progress_lifecycle():
    progress = TqdmProgress(unit="page", leave=False)

    progress.start("Getting synonyms", 2)
    progress.advance()
    progress.advance()
    assert progress._bar.n == 2
    assert progress._bar.desc.startswith("Getting synonyms")

    progress.finish()
    assert progress._bar is None


def test_tqdm_progress_restart_closes_previous_bar():
    progress = TqdmProgress(leave=False)
    progress.start("first", 1)
    first = progress._bar

    progress.start("second", 3)

    assert progress._bar is not first
    assert progress._bar.total == 3
    progress.finish()


def test_null_progress_accepts_calls():
    progress = NullProgress()
    progress.start("anything", 10)
    progress.advance(5)
    progress.finish()


def test_write_json_creates_parent_and_overwrites(tmp_path):
    path = tmp_path / "nested" / "out.json"

    write_json(path, {"old": True})
    size = write_json(path, [1, 2])

    assert json.loads(path.read_text(encoding="utf-8")) == [1, 2]
    assert size == len(path.read_bytes())


def test_write_json_to_directory_fails(tmp_path):
    with pytest.raises(FileIOError):
        write_json(tmp_path, [])


def test_read_json_invalid(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[1, 2", encoding="utf-8")

    with pytest.raises(FileIOError, match="invalid JSON"):
        read_json(path)

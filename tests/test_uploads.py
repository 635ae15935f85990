import io
import os

import pytest

from inspection_app.services import uploads
from inspection_app.services.uploads import staged_upload


def test_staged_file_exists_only_inside_block(tmp_path):
    with staged_upload(io.BytesIO(b"report bytes"), tmp_path / "staging") as path:
        assert path.parent == tmp_path / "staging"
        assert path.read_bytes() == b"report bytes"
    assert not path.exists()


def test_staged_file_removed_on_error(tmp_path):
    with pytest.raises(RuntimeError):
        with staged_upload(io.BytesIO(b"x"), tmp_path) as path:
            raise RuntimeError("boom")
    assert not path.exists()


def test_staged_names_are_unique(tmp_path):
    with staged_upload(io.BytesIO(b"a"), tmp_path) as first, staged_upload(io.BytesIO(b"b"), tmp_path) as second:
        assert first != second


def test_failed_removal_is_not_raised(tmp_path, monkeypatch):
    def failing_unlink(path):
        raise PermissionError("read-only")

    with staged_upload(io.BytesIO(b"x"), tmp_path) as path:
        monkeypatch.setattr(uploads.os, "unlink", failing_unlink)
    monkeypatch.undo()
    assert path.exists()
    os.unlink(path)

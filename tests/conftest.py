import pytest

from core import NotesViewModel


@pytest.fixture
def notes_dir(tmp_path):
    """A folder with three notes plus files that must be ignored."""
    (tmp_path / "beta.txt").write_text("Second note", encoding="utf-8")
    (tmp_path / "Alpha.txt").write_text("First note", encoding="utf-8")
    (tmp_path / "gamma.TXT").write_text("Third note", encoding="utf-8")
    (tmp_path / "notes.md").write_text("# not a note", encoding="utf-8")
    (tmp_path / ".secret.txt").write_text("hidden", encoding="utf-8")
    (tmp_path / "folder.txt").mkdir()
    return tmp_path


@pytest.fixture
def view_model():
    vm = NotesViewModel(mode='sequential')
    yield vm
    vm.shutdown()


@pytest.fixture
def finish():
    """Waits for a background fetch and applies it the way the UI timer does."""
    def _finish(vm, future):
        assert future is not None
        future.result(timeout=5)
        return vm.process_queue()
    return _finish

from __future__ import annotations

from pathlib import Path

import pytest

from pdfmerger.exceptions import PageRangeError, SessionError
from pdfmerger.session import MergeSession
from pdfmerger.storage import UploadStore
from pdfmerger.typing.enums import MoveDirection
from pdfmerger.typing.models import UploadedFile


def _uploaded(name: str, page_count: int = 3, selection: str | None = None) -> UploadedFile:
    return UploadedFile(
        id=name,
        original_name=f"{name}.pdf",
        stored_name=f"1-1-{name}.pdf",
        path=f"/tmp/1-1-{name}.pdf",
        size_bytes=100,
        page_count=page_count,
        selected_pages=selection,
    )


def _names(session: MergeSession) -> list[str]:
    return [uploaded.id for uploaded in session.files]


def test_add_appends_in_order() -> None:
    session = MergeSession()
    session.add(_uploaded("a"))
    session.extend([_uploaded("b"), _uploaded("c")])

    assert _names(session) == ["a", "b", "c"]
    assert len(session) == 3


def test_move_swaps_adjacent_entries() -> None:
    session = MergeSession(files=[_uploaded("a"), _uploaded("b"), _uploaded("c")])

    assert session.move(0, MoveDirection.DOWN) is True
    assert _names(session) == ["b", "a", "c"]

    assert session.move(2, MoveDirection.UP) is True
    assert _names(session) == ["b", "c", "a"]


def test_move_is_noop_at_either_end() -> None:
    session = MergeSession(files=[_uploaded("a"), _uploaded("b")])

    assert session.move(0, MoveDirection.UP) is False
    assert session.move(1, MoveDirection.DOWN) is False
    assert _names(session) == ["a", "b"]


def test_move_rejects_unknown_index() -> None:
    session = MergeSession(files=[_uploaded("a")])

    with pytest.raises(SessionError, match="No file at position 3"):
        session.move(3, MoveDirection.UP)


def test_set_selection_accepts_all_and_valid_ranges() -> None:
    session = MergeSession(files=[_uploaded("a", page_count=10), _uploaded("b")])

    session.set_selection(0, " 1-3,5,8-10 ")
    session.set_selection(1, "all")

    assert [uploaded.selected_pages for uploaded in session.files] == ["1-3,5,8-10", "all"]


@pytest.mark.parametrize("selection", ["4", "2-1", "0", "x", ""])
def test_set_selection_rejects_invalid_range_and_keeps_previous(selection: str) -> None:
    session = MergeSession(files=[_uploaded("a", page_count=3, selection="1")])

    with pytest.raises(PageRangeError):
        session.set_selection(0, selection)

    assert session.files[0].selected_pages == "1"


def test_readiness_needs_selection_on_every_file_and_two_files() -> None:
    session = MergeSession(files=[_uploaded("a", selection="all")])
    assert not session.is_ready
    assert session.files_needed == 1

    session.add(_uploaded("b"))
    assert session.files_needed == 0
    assert not session.is_ready

    session.set_selection(1, "2")
    assert session.is_ready


def test_remove_excludes_file_and_counts_toward_minimum() -> None:
    session = MergeSession(files=[_uploaded("a", selection="all"), _uploaded("b", selection="all")])
    assert session.is_ready

    removed = session.remove(0)

    assert removed.id == "a"
    assert _names(session) == ["b"]
    assert session.files_needed == 1
    assert not session.is_ready
    with pytest.raises(SessionError, match="at least 2"):
        session.build_request()


def test_remove_deletes_stored_upload(tmp_path: Path) -> None:
    store = UploadStore(root=tmp_path)
    stored = store.save_upload("a.pdf", b"%PDF")
    uploaded = _uploaded("a").model_copy(update={"stored_name": stored.name, "path": str(stored)})
    session = MergeSession(files=[uploaded], store=store)

    session.remove(0)

    assert not stored.exists()


def test_clear_removes_everything(tmp_path: Path) -> None:
    store = UploadStore(root=tmp_path)
    session = MergeSession(files=[_uploaded("a"), _uploaded("b")], store=store)

    session.clear()

    assert len(session) == 0


def test_build_request_follows_session_order() -> None:
    session = MergeSession(files=[_uploaded("a", selection="1-2"), _uploaded("b", selection="all")])
    session.move(1, MoveDirection.UP)

    request = session.build_request()

    assert [entry.filename for entry in request.files] == ["1-1-b.pdf", "1-1-a.pdf"]
    assert [entry.selected_pages for entry in request.files] == ["all", "1-2"]
    assert request.files[0].original_name == "b.pdf"


def test_build_items_requires_selection() -> None:
    session = MergeSession(files=[_uploaded("a", selection="all"), _uploaded("b")])

    with pytest.raises(SessionError, match="select pages"):
        session.build_items()


def test_build_items_points_at_local_paths() -> None:
    session = MergeSession(files=[_uploaded("a", selection="all"), _uploaded("b", selection="3")])

    items = session.build_items()

    assert [item.path for item in items] == [Path("/tmp/1-1-a.pdf"), Path("/tmp/1-1-b.pdf")]
    assert [item.label for item in items] == ["a.pdf", "b.pdf"]

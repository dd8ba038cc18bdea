from docmerge.domain.models import AcceptedFile, CandidateFile
from docmerge.domain.selection import SelectionStore


def _accepted(name: str) -> AcceptedFile:
    return AcceptedFile.from_candidate(CandidateFile(name=name, mime_type="", content=name.encode()))


def test_append_then_remove_at_zero_leaves_second_file() -> None:
    store = SelectionStore()
    first = _accepted("a.docx")
    second = _accepted("b.docx")

    store.append([first])
    store.append([second])
    removed = store.remove_at(0)

    assert removed is True
    assert store.files == (second,)


def test_append_preserves_order_and_allows_duplicate_names() -> None:
    store = SelectionStore()
    files = [_accepted("a.docx"), _accepted("a.docx"), _accepted("c.docx")]

    store.append(files[:2])
    store.append(files[2:])

    assert [item.name for item in store] == ["a.docx", "a.docx", "c.docx"]
    assert len({item.file_id for item in store}) == 3


def test_remove_at_shifts_later_positions_and_keeps_others_in_order() -> None:
    files = [_accepted(f"{letter}.docx") for letter in "abcde"]
    store = SelectionStore(files)

    store.remove_at(2)

    assert store.files == (files[0], files[1], files[3], files[4])


def test_remove_at_out_of_range_is_noop() -> None:
    files = [_accepted("a.docx"), _accepted("b.docx")]
    store = SelectionStore(files)

    assert store.remove_at(2) is False
    assert store.remove_at(-1) is False
    assert store.files == tuple(files)


def test_remove_by_id() -> None:
    files = [_accepted("a.docx"), _accepted("b.docx"), _accepted("c.docx")]
    store = SelectionStore(files)

    assert store.remove(files[1].file_id) is True
    assert store.remove(files[1].file_id) is False
    assert store.files == (files[0], files[2])


def test_files_snapshot_is_not_affected_by_later_mutation() -> None:
    store = SelectionStore([_accepted("a.docx")])
    snapshot = store.files

    store.append([_accepted("b.docx")])
    store.clear()

    assert len(snapshot) == 1
    assert store.is_empty()
    assert len(store) == 0

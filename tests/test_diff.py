import pytest

from visindigo.diff import analyze, analyze_files, format_difference


def test_identical_documents():
    data = analyze(["a", "b", "c"], ["a", "b", "c"])
    assert data.removed_lines == []
    assert data.added_lines == []
    assert data.lcs_previous == [0, 1, 2]
    assert data.lcs_current == [0, 1, 2]


def test_appended_line():
    data = analyze(["a", "b"], ["a", "b", "c"])
    assert data.added_lines == [2]
    assert data.removed_lines == []


def test_removed_line():
    data = analyze(["a", "b", "c"], ["a", "c"])
    assert data.removed_lines == [1]
    assert data.added_lines == []


def test_completely_different():
    data = analyze(["a", "b"], ["x", "y"])
    assert data.removed_lines == [0, 1]
    assert data.added_lines == [0, 1]
    assert data.lcs_previous == []


def test_empty_inputs():
    data = analyze([], ["x"])
    assert data.added_lines == [0]
    assert data.removed_lines == []


def test_unmatched_and_matched_cover_all_lines():
    prev = ["a", "b", "c", "d"]
    cur = ["b", "x", "d"]
    data = analyze(prev, cur)
    assert set(data.removed_lines) | set(data.lcs_previous) == set(range(len(prev)))
    assert set(data.added_lines) | set(data.lcs_current) == set(range(len(cur)))
    assert not set(data.removed_lines) & set(data.lcs_previous)


def test_analyze_files(tmp_path):
    before = tmp_path / "before.txt"
    after = tmp_path / "after.txt"
    before.write_text("a\nb\nc\n", encoding="utf-8")
    after.write_text("a\nc\n", encoding="utf-8")
    data = analyze_files(str(before), str(after))
    assert data.previous_document == ["a", "b", "c"]
    assert data.removed_lines == [1]


def test_analyze_files_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        analyze_files(str(tmp_path / "nope"), str(tmp_path / "nope2"))


def test_format_difference():
    data = analyze(["a", "b", "c"], ["a", "c", "z"])
    lines = format_difference(data)
    assert lines[0] == "Previous Document Removed Lines: "
    assert "b" in lines
    assert lines[lines.index("Current Document Added Lines: ") + 1:] == ["z"]
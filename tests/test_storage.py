import pytest

from taskmd.errors import DueDateError, ParseError
from taskmd.models import Settings
from taskmd.storage import convert_file, read_file, write_file


class TestReadWrite:
    def test_read_file(self, tmp_path, example_doc):
        src = tmp_path / "taskell.md"
        src.write_text(example_doc, encoding="utf-8")
        lists = read_file(str(src), Settings())
        assert lists.items[0].tasks[0].name == "Buy milk"

    def test_read_keeps_crlf(self, tmp_path):
        src = tmp_path / "crlf.md"
        src.write_bytes(b"## A\r\n\r\n- t\r\n    > d\r\n")
        lists = read_file(str(src), Settings())
        assert lists.items[0].tasks[0].description.value == "d"

    def test_write_creates_directories(self, tmp_path, example_doc):
        src = tmp_path / "in.md"
        src.write_text(example_doc, encoding="utf-8")
        dst = tmp_path / "nested" / "out" / "taskmd.md"
        write_file(str(dst), read_file(str(src), Settings()), Settings())
        assert dst.read_text(encoding="utf-8") == example_doc

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            read_file(str(tmp_path / "nope.md"), Settings())


class TestConvert:
    def test_convert_round_trip(self, tmp_path, two_lists_doc):
        src, dst = tmp_path / "in.md", tmp_path / "out.md"
        src.write_text(two_lists_doc, encoding="utf-8")
        lists = convert_file(str(src), str(dst), Settings())
        assert len(lists.items) == 2
        assert dst.read_text(encoding="utf-8") == two_lists_doc

    def test_nothing_written_on_parse_error(self, tmp_path):
        src, dst = tmp_path / "in.md", tmp_path / "out.md"
        src.write_text("## A\n\ngarbage", encoding="utf-8")
        with pytest.raises(ParseError):
            convert_file(str(src), str(dst), Settings())
        assert not dst.exists()

    def test_nothing_written_on_bad_due(self, tmp_path):
        src, dst = tmp_path / "in.md", tmp_path / "out.md"
        src.write_text("## A\n\n- t\n    @ not-a-date\n", encoding="utf-8")
        with pytest.raises(DueDateError):
            convert_file(str(src), str(dst), Settings())
        assert not dst.exists()

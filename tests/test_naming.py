"""Tests for memo file naming."""

from jotter.memo.naming import FileIdentity, file_name, is_memo_file_name, parse_file_name


class TestFileName:
    def test_pattern(self):
        assert file_name(1714552200123) == "memo-1714552200123.md"

    def test_round_trip(self):
        for ts in (0, 1, 42, 1714552200123):
            assert parse_file_name(file_name(ts)) == FileIdentity(id=str(ts), created_at=ts)

    def test_is_memo_file_name(self):
        assert is_memo_file_name("memo-1.md")
        assert not is_memo_file_name("memo-.md")
        assert not is_memo_file_name("notes.md")
        assert not is_memo_file_name("memo-1.md.bak")
        assert not is_memo_file_name("xmemo-1.md")


class TestParseFileName:
    def test_foreign_name_gets_current_time(self, monkeypatch):
        monkeypatch.setattr("jotter.memo.naming.now_ms", lambda: 99)
        assert parse_file_name("shopping list.md") == FileIdentity(id="99", created_at=99)

    def test_never_raises(self):
        ident = parse_file_name("")
        assert ident.id == str(ident.created_at)

"""
Tests for the fixer.
"""

import os
import stat
import tempfile

import pytest

from prosefmt.core.content import FileContent
from prosefmt.core.engine import ScanEngine
from prosefmt.core.rules import Rule, RuleMetadata, RuleSet
from prosefmt.errors import ConvergenceError, FileAccessError
from prosefmt.remediation import Fixer
from prosefmt.rules import FinalNewlineRule, TrailingWhitespaceRule


SAMPLES = [
    b"",
    b"\n",
    b"\n\n\n",
    b"a",
    b"a\n",
    b"x  \n",
    b"a\n\n\n",
    b"a\n  \n",
    b"a\n \n\t\n  ",
    b"  \t  ",
    b"a \r\n\r\n",
    b"\xe9t\xe9  \n\n",
]


class ReplaceRule(Rule):
    """Test rule that forbids one byte and replaces it with another."""

    def __init__(self, rule_id, forbidden, replacement):
        self._metadata = RuleMetadata(rule_id, rule_id.lower(), "test rule", f"no {forbidden!r}")
        self.forbidden = forbidden
        self.replacement = replacement

    @property
    def metadata(self):
        return self._metadata

    def check(self, content):
        for line in content.iter_lines():
            index = line.data.find(self.forbidden)
            if index != -1:
                yield self.create_issue(content, line.number, index + 1)

    def fix(self, content):
        return content.with_data(content.data.replace(self.forbidden, self.replacement))


class TestResolve:
    """Tests for fixed-point resolution of content."""

    def test_trailing_spaces(self):
        assert Fixer().resolve(b"x  \n").data == b"x\n"

    def test_trailing_blank_lines(self):
        assert Fixer().resolve(b"a\n\n\n").data == b"a\n"

    def test_empty_content(self):
        assert Fixer().resolve(b"").data == b""

    def test_missing_newline(self):
        assert Fixer().resolve(b"a").data == b"a\n"

    def test_zero_issues_after_resolve(self):
        fixer = Fixer()
        for data in SAMPLES:
            fixed = fixer.resolve(data)
            assert fixer.engine.scan_content(fixed) == [], data

    def test_resolve_is_idempotent(self):
        fixer = Fixer()
        for data in SAMPLES:
            once = fixer.resolve(data)
            assert fixer.resolve(once) == once, data

    def test_interacting_rules_need_a_second_pass(self):
        """
        With the newline rule applied first, stripping a whitespace-only
        last line leaves a blank line that only the next pass removes.
        """
        engine = ScanEngine(rules=RuleSet([FinalNewlineRule(), TrailingWhitespaceRule()]))
        fixer = Fixer(engine)
        content = FileContent(b"a\n  \n")

        one_pass = fixer.apply_rules(content)
        assert one_pass.data == b"a\n\n"
        assert [i.rule_id for i in engine.scan_content(one_pass)] == ["TL001"]

        assert fixer.resolve(content).data == b"a\n"

    def test_non_convergent_rules_raise(self):
        engine = ScanEngine(rules=RuleSet([
            ReplaceRule("XX1", b"x", b"y"),
            ReplaceRule("YY1", b"y", b"x"),
        ]))
        fixer = Fixer(engine, max_iterations=3)

        with pytest.raises(ConvergenceError) as exc_info:
            fixer.resolve(FileContent(b"x\n", path="loop.txt"))

        error = exc_info.value
        assert error.iterations == 3
        assert error.path == "loop.txt"
        assert {i.rule_id for i in error.remaining} == {"XX1"}
        assert "did not converge" in str(error)


class TestFixFile:
    """Tests for fixing files on disk."""

    def test_fix_file(self, make_file):
        path = make_file("bad.txt", b"x  \n")
        result = Fixer().fix_file(path)

        assert result is not None
        assert result.changed
        assert result.iterations == 1
        assert [i.rule_id for i in result.issues] == ["TL010"]
        with open(path, "rb") as f:
            assert f.read() == b"x\n"

    def test_clean_file_is_untouched(self, make_file):
        path = make_file("good.txt", b"fine\n")
        before = os.stat(path).st_mtime_ns
        assert Fixer().fix_file(path) is None
        assert os.stat(path).st_mtime_ns == before

    def test_dry_run_does_not_write(self, make_file):
        path = make_file("bad.txt", b"x  \n")
        result = Fixer().fix_file(path, dry_run=True)

        assert result.fixed == b"x\n"
        assert "-x  " in result.diff
        assert "+x" in result.diff
        with open(path, "rb") as f:
            assert f.read() == b"x  \n"

    def test_mode_is_preserved(self, make_file):
        path = make_file("script.sh", b"echo hi  \n")
        os.chmod(path, 0o751)
        Fixer().fix_file(path)
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o751

    def test_no_temporary_files_left(self, make_file, tmp_path):
        make_file("a.txt", b"a  ")
        Fixer().write([str(tmp_path)])
        assert sorted(os.listdir(tmp_path)) == ["a.txt"]

    def test_failed_replace_keeps_original(self, make_file, tmp_path, monkeypatch):
        path = make_file("bad.txt", b"x  \n")

        def fail_replace(src, dst):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(os, "replace", fail_replace)
        with pytest.raises(FileAccessError) as exc_info:
            Fixer().fix_file(path)
        monkeypatch.undo()

        assert exc_info.value.path == path
        with open(path, "rb") as f:
            assert f.read() == b"x  \n"
        assert sorted(os.listdir(tmp_path)) == ["bad.txt"]

    def test_failed_temp_file_is_fatal(self, make_file, monkeypatch):
        path = make_file("bad.txt", b"x  \n")

        def fail_mkstemp(*args, **kwargs):
            raise OSError(28, "No space left on device")

        monkeypatch.setattr(tempfile, "mkstemp", fail_mkstemp)
        with pytest.raises(FileAccessError):
            Fixer().fix_file(path)


class TestWrite:
    """Tests for fixing whole trees."""

    def test_write(self, make_file, tmp_path):
        a = make_file("a.txt", b"a\n\n\n")
        b = make_file("sub/b.txt", b"b  ")
        make_file("clean.txt", b"ok\n")
        binary = make_file("img.bin", b"\x00  \n")

        result = Fixer().write([str(tmp_path)])

        assert result.written == [a, b]
        assert result.files_scanned == 3
        assert result.rejected == {binary: "null byte"}
        assert result.issues_fixed == 3
        with open(b, "rb") as f:
            assert f.read() == b"b\n"
        with open(binary, "rb") as f:
            assert f.read() == b"\x00  \n"

    def test_write_dry_run(self, make_file):
        path = make_file("a.txt", b"a")
        result = Fixer().write([path], dry_run=True)
        assert result.dry_run
        assert result.written == [path]
        with open(path, "rb") as f:
            assert f.read() == b"a"

    def test_write_is_idempotent_on_disk(self, make_file, tmp_path):
        make_file("a.txt", b"a \n\n")
        Fixer().write([str(tmp_path)])
        assert Fixer().write([str(tmp_path)]).written == []
        assert ScanEngine().check([str(tmp_path)]).issues == []

"""Tests for binary detection and diff content extraction."""

from pathlib import Path

import pytest

from conftest import FakeRunner, commit_file, git

from gitscope.git.diff import DiffExtractor, is_binary_file
from gitscope.git.errors import PathError
from gitscope.git.runner import CommandRunner


class TestBinaryDetection:
    @pytest.mark.parametrize("name", ["logo.png", "photo.JPG", "bundle.tar", "font.woff2", "lib.so"])
    def test_blocklisted_extension(self, tmp_path: Path, name):
        # Never opened: the extension alone decides
        assert is_binary_file(str(tmp_path / name))

    def test_nul_byte_in_head(self, tmp_path: Path):
        f = tmp_path / "data.bin"
        f.write_bytes(b"header\x00\x01\x02rest")
        assert is_binary_file(str(f))

    def test_nul_byte_past_sniff_window(self, tmp_path: Path):
        f = tmp_path / "late.dat"
        f.write_bytes(b"a" * 600 + b"\x00")
        assert not is_binary_file(str(f))
        assert is_binary_file(str(f), sniff_bytes=1024)

    def test_text_file(self, tmp_path: Path):
        f = tmp_path / "notes.txt"
        f.write_text("plain text\n")
        assert not is_binary_file(str(f))

    def test_missing_file_not_binary(self, tmp_path: Path):
        assert not is_binary_file(str(tmp_path / "missing.txt"))

    def test_extra_extensions(self, fake_runner: FakeRunner, fake_repo: Path):
        extractor = DiffExtractor(fake_runner, extra_binary_extensions=["psd", ".SQLite", " "])
        assert ".psd" in extractor.binary_extensions
        assert ".sqlite" in extractor.binary_extensions
        assert ".png" in extractor.binary_extensions


class TestDiffWithFakeRunner:
    def test_binary_short_circuits(self, fake_runner: FakeRunner, fake_repo: Path):
        path = str(fake_repo / "image.png")
        diff = DiffExtractor(fake_runner).file_diff(str(fake_repo), path, staged=False)

        assert diff.is_binary
        assert diff.original is None and diff.modified is None
        assert not diff.is_new and not diff.is_deleted
        assert not fake_runner.called("show", ":image.png")

    def test_staged_reads_head_and_index(self, fake_runner: FakeRunner, fake_repo: Path):
        fake_runner.add("show", "HEAD:src/app.py", stdout="old\n")
        fake_runner.add("show", ":src/app.py", stdout="new\n")
        path = str(fake_repo / "src" / "app.py")
        diff = DiffExtractor(fake_runner).file_diff(str(fake_repo), path, staged=True)

        assert diff.original == b"old\n"
        assert diff.modified == b"new\n"
        assert not diff.is_new and not diff.is_deleted

    def test_unstaged_reads_index_and_worktree(self, fake_runner: FakeRunner, fake_repo: Path):
        (fake_repo / "a.txt").write_bytes(b"working\r\n")
        fake_runner.add("show", ":a.txt", stdout="indexed\n")
        diff = DiffExtractor(fake_runner).file_diff(
            str(fake_repo), str(fake_repo / "a.txt"), staged=False
        )
        assert diff.original == b"indexed\n"
        assert diff.modified == b"working\r\n"

    def test_file_outside_repo(self, fake_runner: FakeRunner, fake_repo: Path):
        with pytest.raises(PathError):
            DiffExtractor(fake_runner).file_diff(str(fake_repo), "/elsewhere/x.txt", staged=False)

    def test_relative_file_rejected(self, fake_runner: FakeRunner, fake_repo: Path):
        with pytest.raises(PathError):
            DiffExtractor(fake_runner).file_diff(str(fake_repo), "x.txt", staged=False)
        assert fake_runner.calls == []


class TestDiffWithRealGit:
    def test_staged_new_file(self, tmp_git_repo: Path):
        f = tmp_git_repo / "new.txt"
        f.write_text("hello\n")
        git(tmp_git_repo, "add", "new.txt")
        diff = DiffExtractor(CommandRunner()).file_diff(str(tmp_git_repo), str(f), staged=True)

        assert diff.is_new is True
        assert diff.is_deleted is False
        assert diff.is_binary is False
        assert diff.original == b""
        assert diff.modified == b"hello\n"

    def test_unstaged_modification(self, tmp_git_repo: Path):
        f = tmp_git_repo / "README.md"
        f.write_text("# Changed\n")
        diff = DiffExtractor(CommandRunner()).file_diff(str(tmp_git_repo), str(f), staged=False)

        assert diff.original == b"# Test\n"
        assert diff.modified == b"# Changed\n"
        assert not diff.is_new and not diff.is_deleted

    def test_staged_then_edited(self, tmp_git_repo: Path):
        f = tmp_git_repo / "README.md"
        f.write_text("staged\n")
        git(tmp_git_repo, "add", "README.md")
        f.write_text("working\n")
        extractor = DiffExtractor(CommandRunner())

        staged = extractor.file_diff(str(tmp_git_repo), str(f), staged=True)
        assert (staged.original, staged.modified) == (b"# Test\n", b"staged\n")

        unstaged = extractor.file_diff(str(tmp_git_repo), str(f), staged=False)
        assert (unstaged.original, unstaged.modified) == (b"staged\n", b"working\n")

    def test_deleted_from_worktree(self, tmp_git_repo: Path):
        f = tmp_git_repo / "README.md"
        f.unlink()
        diff = DiffExtractor(CommandRunner()).file_diff(str(tmp_git_repo), str(f), staged=False)
        assert diff.is_deleted is True
        assert diff.modified == b""
        assert diff.original == b"# Test\n"

    def test_staged_deletion(self, tmp_git_repo: Path):
        f = tmp_git_repo / "README.md"
        git(tmp_git_repo, "rm", "-q", "README.md")
        diff = DiffExtractor(CommandRunner()).file_diff(str(tmp_git_repo), str(f), staged=True)
        assert diff.is_deleted is True
        assert diff.original == b"# Test\n"

    def test_untracked_is_new(self, tmp_git_repo: Path):
        f = tmp_git_repo / "scratch.txt"
        f.write_text("draft\n")
        diff = DiffExtractor(CommandRunner()).file_diff(str(tmp_git_repo), str(f), staged=False)
        assert diff.is_new is True
        assert diff.modified == b"draft\n"

    def test_content_is_byte_exact(self, tmp_git_repo: Path):
        content = b"\n\n  leading and trailing whitespace  \n\n"
        commit_file(tmp_git_repo, "ws.txt", content, "whitespace")
        f = tmp_git_repo / "ws.txt"
        f.write_bytes(content + b"more\n")
        diff = DiffExtractor(CommandRunner()).file_diff(str(tmp_git_repo), str(f), staged=False)
        assert diff.original == content
        assert diff.modified == content + b"more\n"

    def test_binary_content(self, tmp_git_repo: Path):
        f = tmp_git_repo / "blob.dat"
        f.write_bytes(b"\x89BIN\x00\x00data")
        diff = DiffExtractor(CommandRunner()).file_diff(str(tmp_git_repo), str(f), staged=False)
        assert diff.is_binary is True
        assert diff.original is None

    def test_repo_path_may_be_file_directory(self, tmp_git_repo: Path):
        sub = tmp_git_repo / "src"
        sub.mkdir()
        f = sub / "mod.py"
        f.write_text("x = 1\n")
        diff = DiffExtractor(CommandRunner()).file_diff(str(sub), str(f), staged=False)
        assert diff.is_new
        assert diff.modified == b"x = 1\n"

"""Tests for the rustluau command-line driver."""

import json

from rustluau.cli import build_arg_parser, main

SOURCE = "fn add(a: i32, b: i32) -> i32 { a + b }\nfn two() -> i32 { 2 }\n"


def _write(tmp_path, text: str) -> str:
    path = tmp_path / "input.rs"
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestArgParser:
    def test_defaults(self):
        args = build_arg_parser().parse_args(["file.rs"])
        assert args.file == "file.rs"
        assert args.function == ""
        assert args.stats is False
        assert args.verbose is False


class TestMain:
    def test_prints_all_functions(self, tmp_path, capsys):
        assert main([_write(tmp_path, SOURCE)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [fn["name"] for fn in data] == ["add", "two"]

    def test_single_function(self, tmp_path, capsys):
        assert main([_write(tmp_path, SOURCE), "--function", "two"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["name"] == "two"

    def test_stats(self, tmp_path, capsys):
        assert main([_write(tmp_path, SOURCE), "--stats"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["Function"] == 2
        assert data["BinaryOp"] == 1

    def test_unsupported_source_exits_nonzero(self, tmp_path, capsys):
        assert main([_write(tmp_path, "fn main() { x.foo(); }")]) == 1
        assert capsys.readouterr().out == ""

    def test_missing_function_exits_nonzero(self, tmp_path):
        assert main([_write(tmp_path, SOURCE), "-f", "nope"]) == 1

    def test_reads_stdin(self, monkeypatch, capsys):
        import io

        monkeypatch.setattr("sys.stdin", io.StringIO("fn f() {}"))
        assert main(["-"]) == 0
        assert json.loads(capsys.readouterr().out)[0]["name"] == "f"

    def test_missing_file_exits_nonzero(self, tmp_path, capsys):
        assert main([str(tmp_path / "absent.rs")]) == 1
        assert capsys.readouterr().out == ""

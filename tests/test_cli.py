"""
Tests for the tlscan and tlparse command-line tools
===================================================
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from teachlang import __version__
from teachlang.cli import tlscan, tlparse
from teachlang.cli.errors import ExitCode


PROGRAM = """\
int i, total = 0;
for (i = 0; i < 10; i++) {
    total += i;
}
write total;
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def source_file(tmp_path) -> Path:
    path = tmp_path / "prog.tl"
    path.write_text(PROGRAM)
    return path


# =============================================================================
# tlscan
# =============================================================================

class TestTlscan:
    """Tests for the tlscan command."""

    def test_writes_token_file(self, runner, source_file):
        result = runner.invoke(tlscan.main, [str(source_file)])
        assert result.exit_code == 0, result.output
        assert "Scanned" in result.output

        token_file = source_file.with_suffix(".tok")
        lines = token_file.read_text().splitlines()
        assert lines[0] == '(4, "int", 1, 1)'
        assert lines[1] == '(0, "i", 1, 5)'

    def test_output_option(self, runner, source_file, tmp_path):
        out = tmp_path / "out.tok"
        result = runner.invoke(tlscan.main, [str(source_file), "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert out.exists()

    def test_stdout(self, runner, source_file):
        result = runner.invoke(tlscan.main, [str(source_file), "-o", "-"])
        assert result.exit_code == 0, result.output
        assert '(6, ";", 1, 17)' in result.output

    def test_lexical_error_exit_code(self, runner, tmp_path):
        path = tmp_path / "bad.tl"
        path.write_text("int 12abc;\n")
        result = runner.invoke(tlscan.main, [str(path)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "illegal identifier" in result.output
        assert '(8, "12abc", 1, 5)' in path.with_suffix(".tok").read_text()

    def test_keep_going(self, runner, tmp_path):
        path = tmp_path / "bad.tl"
        path.write_text("a = @;\n")
        result = runner.invoke(tlscan.main, [str(path), "--keep-going"])
        assert result.exit_code == 0
        assert "1 lexical error" in result.output

    def test_dump_tokens(self, runner, source_file):
        result = runner.invoke(tlscan.main, [str(source_file), "--dump-tokens"])
        assert result.exit_code == 0, result.output
        assert '(5, "+=", 3, 11)' in result.output

    def test_dump_tokens_to_stdout_once(self, runner, source_file):
        """With -o -, the records already go to stdout and are not dumped again."""
        result = runner.invoke(tlscan.main, [str(source_file), "--dump-tokens", "-o", "-"])
        assert result.exit_code == 0, result.output
        assert result.output.count('(5, "+=", 3, 11)') == 1
        assert result.output.count('(4, "int", 1, 1)') == 1

    def test_missing_input(self, runner, tmp_path):
        result = runner.invoke(tlscan.main, [str(tmp_path / "nope.tl")])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_version(self, runner):
        result = runner.invoke(tlscan.main, ["--version"])
        assert __version__ in result.output


# =============================================================================
# tlparse
# =============================================================================

class TestTlparse:
    """Tests for the tlparse command."""

    def test_writes_tree_file(self, runner, source_file):
        result = runner.invoke(tlparse.main, [str(source_file)])
        assert result.exit_code == 0, result.output

        tree = source_file.with_suffix(".ast").read_text()
        assert tree.startswith("[BLOCK]\n  [DECLS]\n")
        assert "    [FOR]" in tree
        assert "    [WRITE]" in tree

    def test_stdout(self, runner, source_file):
        result = runner.invoke(tlparse.main, [str(source_file), "-o", "-"])
        assert result.exit_code == 0, result.output
        assert "[ASSIGN] +=" in result.output

    def test_from_token_file(self, runner, source_file, tmp_path):
        token_file = tmp_path / "prog.tok"
        scan = runner.invoke(tlscan.main, [str(source_file), "-o", str(token_file)])
        assert scan.exit_code == 0, scan.output

        direct = runner.invoke(tlparse.main, [str(source_file), "-o", "-"])
        via_tokens = runner.invoke(tlparse.main, [str(token_file), "--tokens", "-o", "-"])
        assert via_tokens.exit_code == 0, via_tokens.output
        assert via_tokens.output == direct.output

    def test_syntax_error(self, runner, tmp_path):
        path = tmp_path / "bad.tl"
        path.write_text("int a;\na = 1 2;\n")
        result = runner.invoke(tlparse.main, [str(path)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "2:7: error: malformed expression" in result.output
        assert not path.with_suffix(".ast").exists()

    def test_lexical_error(self, runner, tmp_path):
        path = tmp_path / "bad.tl"
        path.write_text("a = 1.2.3;\n")
        result = runner.invoke(tlparse.main, [str(path)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "illegal number format" in result.output

    def test_keep_going_warns(self, runner, tmp_path):
        path = tmp_path / "bad.tl"
        path.write_text("a = 1 @;\n")
        result = runner.invoke(tlparse.main, [str(path), "--keep-going", "-o", "-"])
        assert result.exit_code == 0, result.output
        assert "warning: unrecognized symbol" in result.output
        assert "[NUM] 1" in result.output

    def test_bad_token_file(self, runner, tmp_path):
        path = tmp_path / "bad.tok"
        path.write_text('(0, "a", one, 1)\n')
        result = runner.invoke(tlparse.main, [str(path), "--tokens"])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "invalid token record" in result.output

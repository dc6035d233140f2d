"""Tests for the command line interface."""

import io

import pytest

from calclib.cli import main


class TestArguments:
    """Test evaluating expressions given as arguments."""

    def test_single_expression(self, capsys):
        """Test one expression prints its result."""
        assert main(["5*(3-1)"]) == 0
        assert capsys.readouterr().out == "10\n"

    def test_several_expressions(self, capsys):
        """Test each expression prints on its own line."""
        assert main(["1+1", "7/2", "5!"]) == 0
        assert capsys.readouterr().out.splitlines() == ["2", "3.5", "120"]

    def test_error_exit_status(self, capsys):
        """Test an error goes to stderr and sets the exit status."""
        assert main(["10/0", "1+1"]) == 1
        captured = capsys.readouterr()
        assert captured.out == "2\n"
        assert captured.err.strip().endswith("Error: Division by zero")

    def test_ast(self, capsys):
        """Test --ast prints the parsed expression."""
        assert main(["--ast", "--", "5(3-1)", "-5!", "3-"]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "5*(3-1)",
            "(-5)!",
            "(incomplete)",
        ]

    def test_ast_lex_error(self, capsys):
        """Test --ast still reports lexing errors."""
        assert main(["--ast", "2+x"]) == 1
        assert "Unknown character: x" in capsys.readouterr().err


class TestInteractive:
    """Test reading expressions from stdin."""

    def test_lines(self, monkeypatch, capsys):
        """Test each line is evaluated."""
        monkeypatch.setattr("sys.stdin", io.StringIO("2+3\n\n6*7=\n10/0\n2 + 3\n"))
        assert main([]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "5",
            "42",
            "Division by zero",
            "Error: invalid characters",
        ]

    def test_history_limit_option(self, monkeypatch, capsys):
        """Test --history-limit is accepted."""
        monkeypatch.setattr("sys.stdin", io.StringIO("1\n"))
        assert main(["--history-limit", "1"]) == 0
        assert capsys.readouterr().out == "1\n"


class TestOptions:
    """Test option parsing."""

    def test_bad_history_limit(self):
        """Test a non-numeric limit is rejected by argparse."""
        with pytest.raises(SystemExit):
            main(["--history-limit", "many"])

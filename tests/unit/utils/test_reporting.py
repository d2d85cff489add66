"""Tests for the console reporter."""

from io import StringIO

from cvdraft.utils.reporting import RULE, ConsoleReporter


def test_line_writes_to_stream():
    out = StringIO()
    ConsoleReporter(stream=out).line("hello")
    assert out.getvalue() == "hello\n"


def test_document_is_framed():
    out = StringIO()
    ConsoleReporter(stream=out).document("COVERING LETTER", "Dear Acme,")

    assert out.getvalue().splitlines() == ["", "COVERING LETTER:", RULE, "Dear Acme,", RULE]


def test_defaults_to_stdout(capsys):
    ConsoleReporter().line("to stdout")
    assert capsys.readouterr().out == "to stdout\n"

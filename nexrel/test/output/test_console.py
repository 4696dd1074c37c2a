"""Tests for nexrel.output.console module."""

from __future__ import annotations

import pytest

from nexrel.output.console import MockConsole, RichConsole, Style


def test_style_str() -> None:
    assert str(Style.SUCCESS) == "success"
    assert str(Style.DIM) == "dim"


class TestMockConsole:
    def test_labels_and_styles(self) -> None:
        console = MockConsole()
        console.success("Repo is clean")
        console.error("push failed")
        console.warning("manual cleanup")
        console.info("dry run")

        assert console.messages == [
            "OK Repo is clean",
            "error: push failed",
            "warning: manual cleanup",
            "info: dry run",
        ]
        assert console.has_error()
        assert console.count(Style.SUCCESS) == 1

    def test_debug_is_captured_dim(self) -> None:
        console = MockConsole()
        console.debug("Running command: mvn deploy:deploy-file")

        assert console.outputs[0].style == Style.DIM
        assert console.find("mvn")


class TestRichConsole:
    def test_brackets_are_not_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.success("Committed: [nexrel] release 1.0.0")

        out = capsys.readouterr().out
        assert "[nexrel] release 1.0.0" in out

    def test_debug_hidden_unless_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().debug("hidden detail")
        RichConsole(verbose=True).debug("shown detail")

        out = capsys.readouterr().out
        assert "hidden detail" not in out
        assert "shown detail" in out

"""Tests for the command-line runner."""

import pytest

from zkstudy import discuss
from zkstudy.discuss import main


@pytest.fixture(autouse=True)
def _keep_test_logging(monkeypatch):
    # Leave pytest's log capture in place instead of rebinding root handlers
    monkeypatch.setattr(discuss, "configure_logging", lambda settings: None)


class TestDiscussCli:
    """Tests for zkstudy.discuss.main on the fixture model."""

    def test_prints_summary(self, capsys):
        exit_code = main(["--fixture", "zkSNARKs for blockchain scalability"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Final Summary:" in out
        assert "Summary of key takeaways:" in out

    def test_transcript(self, capsys):
        exit_code = main(["--fixture", "--transcript", "range proofs"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "--- tool (Research Agent)" in out
        assert "--- agent (Summary Agent)" in out

    def test_invalid_topic(self, capsys):
        exit_code = main(["--fixture", "zk"])

        assert exit_code == 2
        assert "Invalid topic" in capsys.readouterr().err

    def test_timeout_exit_code(self, capsys):
        exit_code = main(["--fixture", "--deadline", "0.000001", "range proofs"])

        assert exit_code == 1
        assert "timeout" in capsys.readouterr().err

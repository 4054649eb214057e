"""Tests for the command-line entry point's exit codes."""

import main


class TestRun:
    """Tests for main.run."""

    def test_unexpected_error_exits_with_one(self, monkeypatch):
        def broken():
            raise RuntimeError("settings exploded")

        monkeypatch.setattr(main, "main", broken)

        assert main.run() == 1

    def test_interrupt_exits_with_zero(self, monkeypatch):
        def interrupted():
            raise KeyboardInterrupt

        monkeypatch.setattr(main, "main", interrupted)

        assert main.run() == 0

    def test_passes_through_main_exit_code(self, monkeypatch):
        monkeypatch.setattr(main, "main", lambda: 1)

        assert main.run() == 1

    def test_missing_credentials(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)  # no .env
        for name in ("SLACK_TOKEN", "CONFLUENCE_URL", "CONFLUENCE_USERNAME", "CONFLUENCE_API_TOKEN"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr(main, "setup_logging", lambda *args, **kwargs: None)

        assert main.run() == 1

import logging
import sys
import threading

import pytest

from domgrab_core import executor as executor_module
from domgrab_server import __main__ as entry
from domgrab_server import fault_boundary


class TestCheckBrowser:
    def test_success(self, monkeypatch, caplog):
        async def fake_check():
            return "Chrome/131.0.6778.85"

        monkeypatch.setattr(entry, "check_browser", fake_check)

        with caplog.at_level(logging.INFO):
            assert entry.main(["--check-browser"]) == 0

        assert "Success: Chrome/131.0.6778.85" in caplog.text

    def test_failure(self, monkeypatch, caplog):
        async def fake_check():
            raise RuntimeError("Failed to launch browser: spawn ENOENT")

        monkeypatch.setattr(entry, "check_browser", fake_check)

        assert entry.main(["--check-browser"]) == 1
        assert "FAILURE" in caplog.text

    def test_real_check_launches_and_tears_down(self, monkeypatch, test_config, fake_playwright, fake_context):
        async def fake_version(session):
            return "HeadlessChrome/131.0"

        monkeypatch.setattr(entry, "config", test_config)
        monkeypatch.setattr(entry, "browser_version", fake_version)

        assert entry.main(["--check-browser"]) == 0
        assert fake_context.close_calls == 1
        assert list(test_config.profile_root.iterdir()) == []


class TestServe:
    def test_binds_host_and_port(self, monkeypatch):
        ran = {}
        installed = []

        from domgrab_server.app import app

        monkeypatch.setattr(app, "run", lambda **kwargs: ran.update(kwargs))
        monkeypatch.setattr(fault_boundary, "install", lambda: installed.append(True))

        assert entry.main(["--host", "127.0.0.1", "--port", "6060"]) == 0
        assert ran["host"] == "127.0.0.1"
        assert ran["port"] == 6060
        assert ran["threaded"] is True
        assert installed == [True]

    def test_startup_warns_about_missing_executable(self, monkeypatch, test_config, caplog):
        test_config.executable_path = "/nonexistent/chromium"
        monkeypatch.setattr(entry, "config", test_config)

        with caplog.at_level(logging.INFO):
            entry.log_startup(5555)

        assert "Running on port 5555" in caplog.text
        assert "Chromium executable not found" in caplog.text
        assert "No extensions configured" in caplog.text


class TestFaultBoundary:
    @pytest.fixture
    def exits(self, monkeypatch):
        codes = []
        monkeypatch.setattr(fault_boundary, "_exit", lambda code=fault_boundary.EXIT_CODE: codes.append(code))
        return codes

    def test_uncaught_exception_exits(self, exits, caplog):
        fault_boundary.handle_uncaught_exception(ValueError, ValueError("bad state"), None)

        assert exits == [1]
        assert "[FATAL] Uncaught Exception" in caplog.text

    def test_keyboard_interrupt_is_not_fatal(self, exits, monkeypatch):
        monkeypatch.setattr(sys, "__excepthook__", lambda *args: None)

        fault_boundary.handle_uncaught_exception(KeyboardInterrupt, KeyboardInterrupt(), None)

        assert exits == []

    def test_loop_exception_exits(self, exits, caplog):
        fault_boundary.handle_loop_exception(None, {"message": "Task exception was never retrieved",
                                                    "exception": RuntimeError("lost")})

        assert exits == [1]
        assert "[FATAL] Unhandled Rejection" in caplog.text

    def test_thread_exception_exits(self, exits):
        args = threading.ExceptHookArgs((RuntimeError, RuntimeError("x"), None, None))

        fault_boundary.handle_thread_exception(args)

        assert exits == [1]

    def test_install(self, monkeypatch):
        monkeypatch.setattr(sys, "excepthook", sys.excepthook)
        monkeypatch.setattr(threading, "excepthook", threading.excepthook)
        monkeypatch.setattr(executor_module, "_loop_exception_handler", None)

        fault_boundary.install()

        assert sys.excepthook is fault_boundary.handle_uncaught_exception
        assert threading.excepthook is fault_boundary.handle_thread_exception
        assert executor_module._loop_exception_handler is fault_boundary.handle_loop_exception

import pytest

from main import CommandManager, main
from servercode.commands import ServerCodeCommand
from servercode.config import PluginConfig

SERVER_LOG = "[2025.11.04-10.17.29:161][  1]LogAbiotic: Warning: Session short code: 78B37\n"


@pytest.fixture
def environ(tmp_path, monkeypatch):
    log = tmp_path / "AbioticFactor.log"
    log.write_text(SERVER_LOG, encoding="utf-8")
    monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "absent.json"))
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("LOG_PATH", str(log))
    monkeypatch.delenv("LOKI_URL", raising=False)
    return tmp_path


class TestCommandManager:
    def test_dispatches_by_name_and_alias(self, make_host, tmp_path):
        log = tmp_path / "AbioticFactor.log"
        log.write_text(SERVER_LOG, encoding="utf-8")
        manager = CommandManager()
        manager.add_command(ServerCodeCommand(make_host(PluginConfig(log_path=str(log)))))

        assert manager.dispatch("servercode", "user-1") == "Server short code: 78B37"
        assert manager.dispatch("服务器代码", "user-1") == "Server short code: 78B37"

    def test_unknown_invocation(self, make_host):
        manager = CommandManager()
        manager.add_command(ServerCodeCommand(make_host()))

        assert manager.find("status") is None
        assert manager.dispatch("status", "user-1") is None


def test_main_prints_code(environ, capsys):
    assert main([]) == 0
    assert capsys.readouterr().out.strip() == "Server short code: 78B37"


def test_main_reports_missing_path(environ, monkeypatch, capsys):
    monkeypatch.setenv("LOG_PATH", "")
    assert main([]) == 0
    assert "no log file path is configured" in capsys.readouterr().out


def test_main_rejects_unknown_command(environ, capsys):
    assert main(["status"]) == 2
    err = capsys.readouterr().err
    assert "Unknown command: status" in err
    assert "servercode (Get the Abiotic Factor server short code)" in err


def test_main_fails_on_bad_configuration(environ, monkeypatch):
    monkeypatch.setenv("MAX_ATTEMPTS", "zero")
    assert main([]) == 1

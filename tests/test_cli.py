"""
CLI 테스트
main.py 자격 증명 검증 및 research 명령 오류 처리
"""

import argparse
import sys

import pytest

import main as cli
from config.settings import Settings


@pytest.fixture
def cli_env(monkeypatch, tmp_path):
    """디렉토리/로거 초기화를 임시 경로로 격리"""
    monkeypatch.setattr(Settings, "OUTPUT_DIR", tmp_path / "output")
    monkeypatch.setattr(Settings, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(cli, "setup_logger", lambda *args, **kwargs: None)
    return tmp_path


def _run_main(monkeypatch, argv: list[str]) -> int:
    monkeypatch.setattr(sys, "argv", ["main.py", *argv])
    with pytest.raises(SystemExit) as exc_info:
        cli.main()
    return exc_info.value.code


class TestCredentialCheck:
    """CLI 인자 + 환경변수 조합 자격 증명 검증"""

    def test_cli_id_with_env_secret_is_accepted(self, monkeypatch, cli_env):
        monkeypatch.setattr(Settings, "SPOTIFY_CLIENT_ID", "")
        monkeypatch.setattr(Settings, "SPOTIFY_CLIENT_SECRET", "env-secret")
        seen = []

        def fake_token(args):
            seen.append(cli._credentials(args))
            return 0

        monkeypatch.setattr(cli, "cmd_token", fake_token)

        assert _run_main(monkeypatch, ["--client-id", "cli-id", "token"]) == 0
        assert seen == [("cli-id", "env-secret")]

    def test_missing_secret_everywhere_exits_1(self, monkeypatch, cli_env, capsys):
        monkeypatch.setattr(Settings, "SPOTIFY_CLIENT_ID", "")
        monkeypatch.setattr(Settings, "SPOTIFY_CLIENT_SECRET", "")
        monkeypatch.setattr(cli, "cmd_token", lambda args: pytest.fail("cmd_token should not run"))

        assert _run_main(monkeypatch, ["--client-id", "cli-id", "token"]) == 1
        assert "SPOTIFY_CLIENT_SECRET" in capsys.readouterr().out

    def test_validate_prefers_given_values(self, monkeypatch):
        monkeypatch.setattr(Settings, "SPOTIFY_CLIENT_ID", "")
        monkeypatch.setattr(Settings, "SPOTIFY_CLIENT_SECRET", "")

        assert Settings.validate() == ["SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_SECRET"]
        assert Settings.validate("id", "  ") == ["SPOTIFY_CLIENT_SECRET"]
        assert Settings.validate("id", "secret") == []


class TestResearchCommand:
    """research 명령 --previous 오류 처리"""

    def _args(self, tmp_path, previous) -> argparse.Namespace:
        return argparse.Namespace(
            client_id="id",
            client_secret="secret",
            keywords_file=None,
            previous=str(previous),
            output=str(tmp_path / "out"),
            top=10,
        )

    def test_missing_previous_file_returns_1(self, tmp_path, capsys):
        code = cli.cmd_research(self._args(tmp_path, tmp_path / "nope.csv"))

        assert code == 1
        assert "❌" in capsys.readouterr().out

    def test_foreign_previous_file_returns_1(self, tmp_path, capsys):
        foreign = tmp_path / "other.csv"
        foreign.write_text('"name","value"\n"a","1"\n', encoding="utf-8")

        code = cli.cmd_research(self._args(tmp_path, foreign))

        assert code == 1
        assert "CSV" in capsys.readouterr().out

import subprocess

import pytest

from cbc_streamlink.errors import PlayerProcessError
from cbc_streamlink.playback import player
from cbc_streamlink.playback.player import PlayerCommand


def test_command_assembly():
    command = (
        PlayerCommand("https://cdn/master.m3u8", quality="720p")
        .with_proxy("1.2.3.4:1080")
        .with_header("Referer", "https://www.cbc.ca/player/play/1")
        .with_loglevel("debug")
    )
    assert command.build() == [
        "streamlink",
        "--http-proxy",
        "socks5h://1.2.3.4:1080",
        "--http-header",
        "Referer=https://www.cbc.ca/player/play/1",
        "--loglevel",
        "debug",
        "https://cdn/master.m3u8",
        "720p",
    ]


def test_optional_arguments_are_skipped():
    assert PlayerCommand("u").with_proxy(None).with_loglevel(None).build() == ["streamlink", "u", "best"]


def test_unknown_loglevel():
    with pytest.raises(ValueError):
        PlayerCommand("u").with_loglevel("loud")


@pytest.fixture
def fake_streamlink(monkeypatch):
    monkeypatch.setattr(player.shutil, "which", lambda name: f"/usr/bin/{name}")
    calls = []

    def install(returncode):
        def run(cmd, check):
            calls.append(cmd)
            if check and returncode:
                raise subprocess.CalledProcessError(returncode, cmd)
            return subprocess.CompletedProcess(cmd, returncode)

        monkeypatch.setattr(player.subprocess, "run", run)
        return calls

    return install


def test_successful_run(fake_streamlink):
    calls = fake_streamlink(0)
    PlayerCommand("u").run()
    assert calls == [["/usr/bin/streamlink", "u", "best"]]


def test_nonzero_exit_keeps_return_code(fake_streamlink):
    fake_streamlink(3)
    with pytest.raises(PlayerProcessError) as excinfo:
        PlayerCommand("u").run()
    assert excinfo.value.returncode == 3


def test_signal_termination(fake_streamlink):
    fake_streamlink(-9)
    with pytest.raises(PlayerProcessError, match="signal 9"):
        PlayerCommand("u").run()


def test_missing_executable(monkeypatch):
    monkeypatch.setattr(player.shutil, "which", lambda name: None)
    with pytest.raises(PlayerProcessError, match="not found"):
        PlayerCommand("u", executable="no-such-player").run()

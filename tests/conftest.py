"""
Общие фикстуры для тестов.

Настоящие процессы (плееры, notify-send) в тестах не запускаются:
FakeBackend записывает вызовы и падает так, как ему скажут.
"""

import pytest

from alerts.backends import AlertBackend
from alerts.errors import MechanismUnavailable, NotificationFailed, PlaybackFailed
from notifier import FallbackDispatcher


class FakeBackend(AlertBackend):
    name = "fake"
    audio_players = ("aplay", "paplay", "play")
    notifiers = ("notify-send", "plyer")

    def __init__(self, failing=None, unavailable=None, **kwargs):
        super().__init__(**kwargs)
        self.failing = set(failing or ())
        self.unavailable = set(unavailable or ())
        self.calls = []

    def play_bell(self) -> None:
        self.calls.append(("bell",))

    def play_audio_file(self, path: str, player: str) -> None:
        self.calls.append(("audio", player, path))
        if player in self.unavailable:
            raise MechanismUnavailable(player, "not installed")
        if player in self.failing:
            raise PlaybackFailed(player, "exit status 1")

    def show_notification(self, source: str, title: str, message: str, channel: str) -> None:
        self.calls.append(("notify", channel, source, title, message))
        if channel in self.unavailable:
            raise MechanismUnavailable(channel, "not installed")
        if channel in self.failing:
            raise NotificationFailed(channel, "exit status 1")


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def dispatcher(backend: FakeBackend) -> FallbackDispatcher:
    return FallbackDispatcher(backend=backend)


@pytest.fixture
def audio_file(tmp_path):
    path = tmp_path / "alarm.wav"
    path.write_bytes(b"RIFF\x00\x00\x00\x00WAVE")
    return str(path)

# alerts/backends.py

import platform
import shutil
import subprocess
import sys
from typing import Dict, List, Optional, Sequence

from alerts.errors import (
    MechanismUnavailable,
    NotificationFailed,
    PlaybackFailed,
)

# Определяем ОС
_SYSTEM = platform.system()

# winsound есть только в сборках Python под Windows
if _SYSTEM == "Windows":
    try:
        import winsound
    except ImportError:
        winsound = None
else:
    winsound = None

try:
    from plyer import notification as plyer_notification
    PLYER_AVAILABLE = True
except ImportError:
    plyer_notification = None
    PLYER_AVAILABLE = False
    print("[ALERT] plyer is not installed, desktop notifications via plyer are disabled.")


# Внешние плееры: имя -> argv, "{path}" подставляется при запуске
PLAYER_COMMANDS: Dict[str, List[str]] = {
    "aplay": ["aplay", "-q", "{path}"],                     # ALSA
    "paplay": ["paplay", "{path}"],                         # PulseAudio
    "play": ["play", "-q", "{path}"],                       # sox
    "mplayer": ["mplayer", "-really-quiet", "{path}"],
    "cvlc": ["cvlc", "--play-and-exit", "{path}"],          # VLC
    "afplay": ["afplay", "{path}"],                         # macOS
}


def _ring_terminal() -> None:
    sys.stdout.write("\a")
    sys.stdout.flush()


def _resolve(program: str) -> str:
    exe = shutil.which(program)
    if exe is None:
        raise MechanismUnavailable(program, "не найден в PATH")
    return exe


def _launch(argv: Sequence[str], grace_seconds: float, error_cls=PlaybackFailed) -> None:
    """
    Запускает процесс и не ждёт, пока он доиграет.

    Ждём только grace_seconds: если процесс успел завершиться с ошибкой —
    это провал, если ещё работает — считаем, что запуск удался.
    """
    exe = _resolve(argv[0])

    try:
        proc = subprocess.Popen(
            [exe, *argv[1:]],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except (OSError, ValueError) as e:
        # ValueError: например, нулевой байт в аргументах
        raise error_cls(argv[0], str(e)) from e

    try:
        code = proc.wait(timeout=grace_seconds)
    except subprocess.TimeoutExpired:
        return

    if code != 0:
        raise error_cls(argv[0], f"код возврата {code}")


def _run(argv: Sequence[str], error_cls=NotificationFailed) -> None:
    """Запускает короткую команду и ждёт её завершения."""
    exe = _resolve(argv[0])

    try:
        result = subprocess.run(
            [exe, *argv[1:]],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except (OSError, ValueError) as e:
        raise error_cls(argv[0], str(e)) from e

    if result.returncode != 0:
        raise error_cls(argv[0], f"код возврата {result.returncode}")


def _applescript_str(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class AlertBackend:
    """
    Платформенная реализация "сыграть звук" и "показать уведомление".

    Каждая операция пробует ровно один механизм и при неудаче бросает
    MechanismUnavailable / PlaybackFailed / NotificationFailed.
    Перебором механизмов занимается FallbackDispatcher.
    """

    name = "generic"
    audio_players: Sequence[str] = ()
    notifiers: Sequence[str] = ("plyer",)

    def __init__(
        self,
        audio_players: Optional[Sequence[str]] = None,
        notifiers: Optional[Sequence[str]] = None,
        launch_grace_seconds: float = 0.2,
        notification_timeout: int = 10,
    ):
        if audio_players:
            self.audio_players = tuple(audio_players)
        if notifiers:
            self.notifiers = tuple(notifiers)
        self.launch_grace_seconds = launch_grace_seconds
        self.notification_timeout = notification_timeout

    # --- звук ---

    def play_bell(self) -> None:
        """Короткий сигнал, доступный всегда. Не падает."""
        _ring_terminal()

    def play_audio_file(self, path: str, player: str) -> None:
        if player == "winsound":
            self._play_winsound(path)
            return

        template = PLAYER_COMMANDS.get(player)
        if template is None:
            raise MechanismUnavailable(player, "неизвестный плеер")

        argv = [arg.replace("{path}", path) for arg in template]
        _launch(argv, self.launch_grace_seconds, PlaybackFailed)

    def _play_winsound(self, path: str) -> None:
        if winsound is None:
            raise MechanismUnavailable("winsound", "доступен только в Windows")

        try:
            winsound.PlaySound(path, winsound.SND_FILENAME | winsound.SND_ASYNC)
        except RuntimeError as e:
            raise PlaybackFailed("winsound", str(e)) from e

    # --- уведомления ---

    def show_notification(self, source: str, title: str, message: str, channel: str) -> None:
        handlers = {
            "notify-send": self._notify_send,
            "osascript": self._notify_osascript,
            "plyer": self._notify_plyer,
        }
        handler = handlers.get(channel)
        if handler is None:
            raise MechanismUnavailable(channel, "неизвестный канал уведомлений")

        handler(source, title, message)

    def _notify_send(self, source: str, title: str, message: str) -> None:
        # "--": текст, начинающийся с "-", не должен читаться как опция
        _run(["notify-send", "-a", source, "--", title, message])

    def _notify_osascript(self, source: str, title: str, message: str) -> None:
        script = (
            f"display notification {_applescript_str(message)} "
            f"with title {_applescript_str(title)} "
            f"subtitle {_applescript_str(source)}"
        )
        _run(["osascript", "-e", script])

    def _notify_plyer(self, source: str, title: str, message: str) -> None:
        if not PLYER_AVAILABLE:
            raise MechanismUnavailable("plyer", "plyer не установлен")

        try:
            plyer_notification.notify(
                title=title,
                message=message,
                app_name=source,
                timeout=self.notification_timeout,
            )
        except NotImplementedError as e:
            # у plyer нет реализации для этой платформы
            raise MechanismUnavailable("plyer", str(e) or "нет реализации") from e
        except Exception as e:
            raise NotificationFailed("plyer", str(e)) from e


class LinuxBackend(AlertBackend):
    name = "linux"
    audio_players = ("aplay", "paplay", "play", "mplayer", "cvlc")
    notifiers = ("notify-send", "plyer")

    def play_bell(self) -> None:
        _ring_terminal()

        # системный сигнал — по возможности, молча
        for argv in (["beep"], ["pactl", "play-sample", "bell-terminal"]):
            try:
                _launch(argv, self.launch_grace_seconds)
            except (MechanismUnavailable, PlaybackFailed):
                continue
            break


class MacBackend(AlertBackend):
    name = "macos"
    audio_players = ("afplay",)
    notifiers = ("osascript", "plyer")

    def play_bell(self) -> None:
        _ring_terminal()

        # "beep" в AppleScript играет выбранный пользователем звук оповещения
        try:
            _launch(["osascript", "-e", "beep"], self.launch_grace_seconds)
        except (MechanismUnavailable, PlaybackFailed):
            pass


class WindowsBackend(AlertBackend):
    name = "windows"
    audio_players = ("winsound",)
    notifiers = ("plyer",)

    def play_bell(self) -> None:
        if winsound is None:
            _ring_terminal()
            return

        try:
            winsound.MessageBeep(winsound.MB_OK)
        except RuntimeError:
            _ring_terminal()


_BACKENDS = {
    "Linux": LinuxBackend,
    "Darwin": MacBackend,
    "Windows": WindowsBackend,
}


def get_backend(system: Optional[str] = None, **kwargs) -> AlertBackend:
    """
    Возвращает backend под текущую (или указанную) ОС.
    Неизвестные unix-подобные системы получают Linux-вариант.
    """
    backend_cls = _BACKENDS.get(system or _SYSTEM, LinuxBackend)
    return backend_cls(**kwargs)

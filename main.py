# main.py

import sys
import time
from typing import Callable, List, Optional, Tuple

from alerts.models import AlertRequest, DispatchOutcome
from config import load_config
from notifier import FallbackDispatcher
from timeparse import format_time, is_digit, parse_time

VERSION = "1.0.3"

# сообщение длиннее этого молча обрезается
MAX_MESSAGE_LEN = 4095


def usage(prog: str) -> str:
    return (
        f"notify v{VERSION} -- command-line notification utility.\n"
        "Usage:\n"
        f"    {prog} <time> <message>\n"
        f"    {prog} [audio] <time> <message>\n"
        "Time format examples: 1h30m, 90m, 3600s, 2h15m10s\n"
        f"Example: {prog} 5m \"Take a break!\""
    )


def parse_args(args: List[str]) -> Tuple[Optional[str], str, str]:
    """
    Разбирает аргументы: [audio] <time> <message...>.

    Первый аргумент считается путём к звуку, если он не начинается с цифры.
    Возвращает (audio_file, time_arg, message).
    """
    audio_file = None if is_digit(args[0][:1]) else args[0]
    rest = args[1:] if audio_file is not None else args

    time_arg = rest[0] if rest else ""
    message = " ".join(rest[1:])[:MAX_MESSAGE_LEN]

    return audio_file, time_arg, message


def countdown(
    total_seconds: int,
    message: str,
    dispatcher: FallbackDispatcher,
    audio_file: Optional[str] = None,
    source: str = "Notify",
    sleep: Optional[Callable[[float], None]] = None,
    tick_seconds: int = 1,
) -> List[DispatchOutcome]:
    """
    Обратный отсчёт с перерисовкой строки каждые tick_seconds секунд.
    По нулю — звук и уведомление, возвращает их результаты.
    """
    sleep = sleep or time.sleep
    tick_seconds = max(1, tick_seconds)
    remaining = total_seconds

    while remaining >= 0:
        # фиксированная ширина, чтобы старая строка затиралась целиком
        print(f"\r{format_time(remaining):<20}", end="", flush=True)

        if remaining == 0:
            print("\nTime's up!")
            return [
                dispatcher.dispatch(AlertRequest.bell(audio_file)),
                dispatcher.dispatch(AlertRequest.notification(source, "Timer Complete", message)),
            ]

        # последний шаг короче, чтобы не проскочить ноль
        step = min(tick_seconds, remaining)
        sleep(step)
        remaining -= step

    return []


def main(argv: Optional[List[str]] = None) -> int:
    prog = "notify-timer"
    if argv is None:
        argv = sys.argv[1:]

    if len(argv) < 2:
        print(usage(prog))
        return 1

    audio_file, time_arg, message = parse_args(argv)

    total_seconds = parse_time(time_arg)
    if total_seconds <= 0:
        print(f"Invalid time format: {time_arg}")
        print("Use format like: 1h30m, 90m, 3600s, etc.")
        return 1

    config = load_config()
    dispatcher = FallbackDispatcher(config=config)

    print(f"[INFO] Alert backend: {dispatcher.backend.name}")
    print(f"[INFO] Audio players: {list(dispatcher.backend.audio_players)}")
    print(f"[INFO] Notifiers: {list(dispatcher.backend.notifiers)}")
    print(f"[INFO] Tick: {config.tick_seconds} s")

    print(f"Starting timer for: {format_time(total_seconds)}")
    print(f"Message: {message}")

    try:
        countdown(
            total_seconds,
            message,
            dispatcher,
            audio_file,
            source=config.default_source,
            tick_seconds=config.tick_seconds,
        )
    except KeyboardInterrupt:
        print("\n[INFO] Stopped by Ctrl+C.")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())

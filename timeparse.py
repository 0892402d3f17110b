# timeparse.py

from typing import NamedTuple, Optional

# всё, что длиннее, просто отбрасываем (старый буфер на 64 байта с терминатором)
MAX_TIME_STR_LEN = 63

_UNITS = {
    "h": 3600,
    "m": 60,
    "s": 1,
}


class TimeComponents(NamedTuple):
    days: int
    hours: int
    minutes: int
    seconds: int


def is_digit(ch: str) -> bool:
    # str.isdigit() пропускает и не-ASCII цифры, нам нужны только 0-9
    return "0" <= ch <= "9"


def parse_time(time_str: Optional[str]) -> int:
    """
    Переводит строку вида "1h30m", "90m", "3600s", "2h15m10s" в секунды.

    Никогда не бросает исключений: читает числа слева направо, пока может,
    и возвращает то, что успело накопиться (для мусора — 0).
    Число без единицы измерения считается секундами.
    Ведущие пробелы и знак "+"/"-" пропускаются: "-5m" == 300.
    Повторы и порядок единиц не проверяются: "5h5h" == 36000.
    Всё, что длиннее MAX_TIME_STR_LEN символов, игнорируется.
    """
    if not time_str:
        return 0

    text = time_str[:MAX_TIME_STR_LEN].lstrip()

    # как и strtol: пробелы и один знак перед первым числом допустимы,
    # минус при этом просто отбрасывается
    if text[:1] in ("+", "-"):
        text = text[1:]

    total_seconds = 0
    pos = 0

    while pos < len(text):
        start = pos
        while pos < len(text) and is_digit(text[pos]):
            pos += 1

        if pos == start:
            # на текущей позиции нет числа — дальше не читаем
            break

        value = int(text[start:pos])
        unit = text[pos].lower() if pos < len(text) else ""

        if unit in _UNITS:
            total_seconds += value * _UNITS[unit]
            pos += 1
        else:
            total_seconds += value

        # пропускаем разделители и прочий мусор до следующего числа
        while pos < len(text) and not is_digit(text[pos]):
            pos += 1

    return total_seconds


def time_components(seconds: int) -> TimeComponents:
    """Раскладывает секунды на дни, часы, минуты и секунды."""
    seconds = max(0, seconds)

    days, seconds = divmod(seconds, 86400)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)

    return TimeComponents(days, hours, minutes, seconds)


def format_time(seconds: int) -> str:
    """
    Форматирует секунды в " Xd  Yh  Zm  Ws".

    Всегда четыре поля фиксированной ширины — строка обратного отсчёта
    перерисуется поверх себя без дёрганья.
    """
    days, hours, minutes, secs = time_components(seconds)
    return f"{days:2d}d {hours:2d}h {minutes:2d}m {secs:2d}s"

# config.py

from __future__ import annotations

from dataclasses import dataclass, asdict, field
from pathlib import Path
import json
import sys

# -------------------------------------------------
# БАЗОВЫЙ КАТАЛОГ ДЛЯ CONFIG.JSON
# -------------------------------------------------
# - при запуске из .exe (PyInstaller onefile) — каталог рядом с exe
# - при запуске из исходников — папка, где лежит config.py

if getattr(sys, "frozen", False):
    # режим собранного exe
    BASE_DIR = Path(sys.executable).resolve().parent
else:
    # обычный Python-скрипт
    BASE_DIR = Path(__file__).resolve().parent

CONFIG_PATH = BASE_DIR / "config.json"


@dataclass
class Config:
    # пауза между перерисовками обратного отсчёта (секунды)
    tick_seconds: int = 1

    # от чьего имени приходит уведомление
    default_source: str = "Notify"

    # порядок плееров и каналов уведомлений
    # пустой список — порядок по умолчанию для текущей ОС
    audio_players: list[str] = field(default_factory=list)
    notifiers: list[str] = field(default_factory=list)

    # сколько ждать, не упадёт ли плеер сразу после запуска (секунды)
    launch_grace_seconds: float = 0.2

    # сколько висит уведомление plyer (секунды)
    notification_timeout: int = 10

    # печатать неудачные попытки механизмов
    verbose: bool = False


def load_config(path: Path = CONFIG_PATH) -> Config:
    if path.exists():
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)

        return Config(
            tick_seconds=raw.get("tick_seconds", 1),
            default_source=raw.get("default_source", "Notify"),
            audio_players=list(raw.get("audio_players", [])),
            notifiers=list(raw.get("notifiers", [])),
            launch_grace_seconds=raw.get("launch_grace_seconds", 0.2),
            notification_timeout=raw.get("notification_timeout", 10),
            verbose=raw.get("verbose", False),
        )

    # если конфиг ещё не создан — создаём с настройками по умолчанию
    cfg = Config()
    try:
        save_config(cfg, path)
    except OSError as e:
        # например, пакет установлен в каталог только для чтения
        print(f"[INFO] Could not create {path}: {e}. Using default settings.")
    return cfg


def save_config(cfg: Config, path: Path = CONFIG_PATH) -> None:
    with path.open("w", encoding="utf-8") as f:
        json.dump(asdict(cfg), f, ensure_ascii=False, indent=2)

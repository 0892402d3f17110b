# alerts/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

DEFAULT_SOURCE = "Notify"
DEFAULT_TITLE = "Notification"


class AlertKind(Enum):
    BELL = "bell"
    NOTIFICATION = "notification"


@dataclass(frozen=True)
class BellPayload:
    # путь к звуковому файлу; None — просто системный сигнал
    audio_path: Optional[str] = None


@dataclass(frozen=True)
class NotificationPayload:
    source: str = DEFAULT_SOURCE
    title: str = DEFAULT_TITLE
    message: str = ""

    def __post_init__(self):
        # пустые значения заменяем значениями по умолчанию
        object.__setattr__(self, "source", self.source or DEFAULT_SOURCE)
        object.__setattr__(self, "title", self.title or DEFAULT_TITLE)
        object.__setattr__(self, "message", self.message or "")


@dataclass(frozen=True)
class AlertRequest:
    """
    Один запрос на оповещение: звук или уведомление.
    Создаётся в момент срабатывания таймера и используется один раз.
    """

    kind: AlertKind
    payload: Union[BellPayload, NotificationPayload]

    @classmethod
    def bell(cls, audio_path: Optional[str] = None) -> AlertRequest:
        return cls(AlertKind.BELL, BellPayload(audio_path or None))

    @classmethod
    def notification(
        cls,
        source: Optional[str] = None,
        title: Optional[str] = None,
        message: Optional[str] = None,
    ) -> AlertRequest:
        return cls(
            AlertKind.NOTIFICATION,
            NotificationPayload(source or "", title or "", message or ""),
        )


@dataclass(frozen=True)
class DispatchOutcome:
    kind: AlertKind
    mechanism: str                     # какой механизм сработал
    fallback: bool = False             # сработал последний, "вечный" вариант
    attempts: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return bool(self.mechanism)

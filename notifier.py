# notifier.py

import os
from functools import partial
from typing import Optional

from alerts.backends import AlertBackend, get_backend
from alerts.chain import Mechanism, MechanismChain
from alerts.errors import AlertError
from alerts.models import (
    AlertKind,
    AlertRequest,
    BellPayload,
    DispatchOutcome,
    NotificationPayload,
)
from config import Config


def _is_readable_file(path: Optional[str]) -> bool:
    return bool(path) and os.path.isfile(path) and os.access(path, os.R_OK)


def _print_to_console(payload: NotificationPayload) -> None:
    print(f"[{payload.source}] {payload.title}: {payload.message}", flush=True)


class FallbackDispatcher:
    """
    Доставляет оповещения через цепочку механизмов текущей ОС.

    Звук: заданный файл пробуем проиграть каждым плеером по очереди,
    если файла нет или все плееры отказали — обычный системный сигнал.
    Уведомление: каналы по очереди, в конце — печать в консоль.
    Последний вариант не падает, поэтому dispatch() всегда чем-то заканчивается.
    """

    def __init__(self, backend: Optional[AlertBackend] = None, config: Optional[Config] = None):
        self.config = config or Config()
        self.backend = backend or get_backend(
            audio_players=self.config.audio_players,
            notifiers=self.config.notifiers,
            launch_grace_seconds=self.config.launch_grace_seconds,
            notification_timeout=self.config.notification_timeout,
        )

    def dispatch(self, request: AlertRequest) -> DispatchOutcome:
        if request.kind is AlertKind.BELL:
            chain = self._bell_chain(request.payload)
        elif request.kind is AlertKind.NOTIFICATION:
            chain = self._notification_chain(request.payload)
        else:
            raise ValueError(f"Неизвестный тип оповещения: {request.kind!r}")

        result = chain.run(on_failure=self._report_failure)
        if self.config.verbose:
            print(f"[ALERT] {request.kind.value}: delivered via {result.mechanism}")

        return DispatchOutcome(
            kind=request.kind,
            mechanism=result.mechanism,
            fallback=result.fallback,
            attempts=result.attempts,
        )

    def _bell_chain(self, payload: BellPayload) -> MechanismChain:
        bell = Mechanism("bell", self.backend.play_bell)

        # нет файла — сразу системный сигнал
        if not _is_readable_file(payload.audio_path):
            return MechanismChain([], terminal=bell)

        players = [
            Mechanism(player, partial(self.backend.play_audio_file, payload.audio_path, player))
            for player in self.backend.audio_players
        ]
        return MechanismChain(players, terminal=bell)

    def _notification_chain(self, payload: NotificationPayload) -> MechanismChain:
        channels = [
            Mechanism(
                channel,
                partial(
                    self.backend.show_notification,
                    payload.source,
                    payload.title,
                    payload.message,
                    channel,
                ),
            )
            for channel in self.backend.notifiers
        ]
        return MechanismChain(channels, terminal=Mechanism("console", partial(_print_to_console, payload)))

    def _report_failure(self, name: str, error: AlertError) -> None:
        if self.config.verbose:
            print(f"[ALERT ERROR] {name}: {type(error).__name__}: {error.reason}")


def dispatch(request: AlertRequest, dispatcher: Optional[FallbackDispatcher] = None) -> DispatchOutcome:
    return (dispatcher or FallbackDispatcher()).dispatch(request)


def beep(audio_file: Optional[str] = None, dispatcher: Optional[FallbackDispatcher] = None) -> DispatchOutcome:
    """Звуковой сигнал: файл, если его удалось проиграть, иначе системный."""
    return dispatch(AlertRequest.bell(audio_file), dispatcher)


def send_notification(
    source: str,
    title: str,
    message: str,
    dispatcher: Optional[FallbackDispatcher] = None,
) -> DispatchOutcome:
    """
    Отправляет системное уведомление (если возможно), иначе печатает в консоль.
    """
    return dispatch(AlertRequest.notification(source, title, message), dispatcher)

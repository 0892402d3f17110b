# alerts/errors.py


class AlertError(Exception):
    """Базовая ошибка механизма оповещения (плеер, канал уведомлений)."""

    def __init__(self, mechanism: str, reason: str = ""):
        self.mechanism = mechanism
        self.reason = reason
        super().__init__(f"{mechanism}: {reason}" if reason else mechanism)


class MechanismUnavailable(AlertError):
    """Нужной программы или библиотеки нет в системе."""


class MechanismFailed(AlertError):
    """Механизм запустился, но сообщил об ошибке."""


class PlaybackFailed(MechanismFailed):
    pass


class NotificationFailed(MechanismFailed):
    pass

# alerts/chain.py

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from alerts.errors import AlertError


@dataclass(frozen=True)
class Mechanism:
    """Один способ оповестить: конкретный плеер или канал уведомлений."""

    name: str
    invoke: Callable[[], None]


@dataclass(frozen=True)
class ChainResult:
    mechanism: str
    fallback: bool
    attempts: Tuple[Tuple[str, str], ...]


class MechanismChain:
    """
    Упорядоченная цепочка механизмов.

    Механизмы пробуются строго по порядку, первый успешный завершает обход.
    Если не сработал ни один — вызывается terminal, который по договорённости
    не падает никогда (терминальный звонок, печать в консоль).
    """

    def __init__(self, mechanisms: Sequence[Mechanism], terminal: Mechanism):
        self.mechanisms = list(mechanisms)
        self.terminal = terminal

    def run(
        self,
        on_failure: Optional[Callable[[str, AlertError], None]] = None,
    ) -> ChainResult:
        attempts: List[Tuple[str, str]] = []

        for mechanism in self.mechanisms:
            try:
                mechanism.invoke()
            except AlertError as e:
                attempts.append((mechanism.name, str(e)))
                if on_failure is not None:
                    on_failure(mechanism.name, e)
                continue

            return ChainResult(mechanism.name, False, tuple(attempts))

        self.terminal.invoke()
        return ChainResult(self.terminal.name, True, tuple(attempts))

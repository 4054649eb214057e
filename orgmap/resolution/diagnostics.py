from typing import List

from loguru import logger

from orgmap.models.result import Diagnostic


class ErrorCollector:
    """Append-only sink for diagnostics produced during one resolution pass."""

    def __init__(self):
        self._diagnostics: List[Diagnostic] = []

    def add(self, message: str) -> Diagnostic:
        diagnostic = Diagnostic(message=message)
        self._diagnostics.append(diagnostic)
        logger.warning(message)
        return diagnostic

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    def __len__(self) -> int:
        return len(self._diagnostics)

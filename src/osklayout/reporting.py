import logging
import typing

from .commontypes import LoadError

logger = logging.getLogger(__name__)


class WarningHandler(typing.Protocol):
    def handle(self, warning: str) -> None:
        ...


class LayoutWarning(LoadError):
    pass


class LogWarnings:
    def __init__(self, log: logging.Logger = logger):
        self.log = log

    def handle(self, warning: str) -> None:
        self.log.warning("%s", warning)


class RaiseWarnings:
    "Treats every data anomaly as an error. Used for strict loading and in tests."

    def handle(self, warning: str) -> None:
        raise LayoutWarning(warning)


class CollectWarnings:
    warnings: list[str]

    def __init__(self):
        self.warnings = []

    def handle(self, warning: str) -> None:
        self.warnings.append(warning)

import sys

from smart_scribe.core.interfaces import Notifier


class ConsoleNotifier(Notifier):
    def __init__(self, stream=None) -> None:
        self.stream = stream

    def notify_status(self, message: str) -> None:
        print(message, file=self.stream or sys.stdout)

    def notify_summary(self, message: str) -> None:
        print(message, file=self.stream or sys.stdout)

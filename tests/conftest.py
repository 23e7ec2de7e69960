import pytest

from wirebox.descriptors import BeanEntry


class RecordingObserver:
    def __init__(self):
        self.registered: list[str] = []
        self.lookups: list[tuple[str, bool]] = []

    def on_register(self, entry: BeanEntry, took_ms: float):
        self.registered.append(entry.name)

    def on_lookup(self, name: str, found: bool):
        self.lookups.append((name, found))


@pytest.fixture
def observer():
    return RecordingObserver()

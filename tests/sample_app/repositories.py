from wirebox import component, repository


@component
class SystemClock:
    def now(self) -> int:
        return 42


@repository
class TodoRepository:
    def __init__(self) -> None:
        self._items = {}

    def save(self, item_id: int, title: str) -> None:
        self._items[item_id] = title

    def find(self, item_id: int):
        return self._items.get(item_id)

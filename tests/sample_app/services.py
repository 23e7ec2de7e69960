from wirebox import service

from .repositories import SystemClock, TodoRepository


# depends on a service declared after it
@service
class TodoService:
    def __init__(self, repository: TodoRepository, audit: "AuditService") -> None:
        self.repository = repository
        self.audit = audit

    def add(self, item_id: int, title: str) -> None:
        self.repository.save(item_id, title)
        self.audit.record(f"added {item_id}")


@service
class AuditService:
    def __init__(self, clock: SystemClock) -> None:
        self.clock = clock
        self.events = []

    def record(self, event: str) -> None:
        self.events.append((self.clock.now(), event))

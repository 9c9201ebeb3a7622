import threading
from datetime import datetime, timezone

from git_explorer.models import RepositoryRecord


class InMemoryRepositoryStore:
    """Process-local repository records, keyed by id with a URL index."""

    def __init__(self) -> None:
        self.repositories: dict[int, RepositoryRecord] = {}
        self.ids_by_url: dict[str, int] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    async def get_repository(self, repository_id: int) -> RepositoryRecord | None:
        return self.repositories.get(repository_id)

    async def get_repository_by_url(self, url: str) -> RepositoryRecord | None:
        repository_id = self.ids_by_url.get(url)
        if repository_id is None:
            return None
        return self.repositories.get(repository_id)

    async def create_repository(self, url: str, name: str) -> RepositoryRecord:
        with self._lock:
            existing_id = self.ids_by_url.get(url)
            if existing_id is not None:
                return self.repositories[existing_id]
            record = RepositoryRecord(
                id=self._next_id,
                url=url,
                name=name,
                last_analyzed=datetime.now(timezone.utc),
            )
            self._next_id += 1
            self.repositories[record.id] = record
            self.ids_by_url[url] = record.id
            return record

    async def update_repository(
        self, repository_id: int, last_analyzed: datetime | None = None
    ) -> RepositoryRecord | None:
        with self._lock:
            record = self.repositories.get(repository_id)
            if record is None:
                return None
            updated = record.model_copy(update={"last_analyzed": last_analyzed or datetime.now(timezone.utc)})
            self.repositories[repository_id] = updated
            return updated

    async def list_repositories(self) -> list[RepositoryRecord]:
        return list(self.repositories.values())

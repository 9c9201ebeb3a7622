from datetime import datetime
from typing import Protocol

from git_explorer.models import RepositoryRecord


class RepositoryStore(Protocol):
    async def get_repository(self, repository_id: int) -> RepositoryRecord | None: ...

    async def get_repository_by_url(self, url: str) -> RepositoryRecord | None: ...

    async def create_repository(self, url: str, name: str) -> RepositoryRecord: ...

    async def update_repository(
        self, repository_id: int, last_analyzed: datetime | None = None
    ) -> RepositoryRecord | None: ...

    async def list_repositories(self) -> list[RepositoryRecord]: ...

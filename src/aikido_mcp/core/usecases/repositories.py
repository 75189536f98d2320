from __future__ import annotations

from typing import Any, Optional

from ..domain.arguments import ListRepositoriesArgs, SearchRepositoryByNameArgs
from ..domain.models import Repository
from ..ports import AikidoApiPort, LoggerPort
from ..services.query import build_query
from .base import capture_outcome, parse_records


REPOSITORIES_ENDPOINT = "/repositories/code"


class ListRepositoriesUseCase:
    """List code repositories, one page at a time."""

    def __init__(self, *, api: AikidoApiPort) -> None:
        self._api = api

    @capture_outcome
    def execute(self, args: ListRepositoriesArgs) -> Any:
        return self.fetch_page(page=args.page, per_page=args.per_page)

    def fetch_page(self, *, page: int, per_page: int) -> Any:
        """Fetch one page.

        Returns:
            list[Repository] when the service answers with an array,
            otherwise the raw body unchanged
        """
        response = self._api.request(
            REPOSITORIES_ENDPOINT,
            params=build_query(page=page, per_page=per_page),
        )
        if isinstance(response, list):
            return parse_records(Repository, response, REPOSITORIES_ENDPOINT)
        return response


class SearchRepositoryByNameUseCase:
    """Find repositories whose name or external id contains a search term.

    The service has no name filter, so every page is fetched and matched locally.
    """

    PAGE_SIZE = 100

    def __init__(self, *, lister: ListRepositoriesUseCase, logger: LoggerPort) -> None:
        self._lister = lister
        self._logger = logger

    @capture_outcome
    def execute(self, args: SearchRepositoryByNameArgs) -> dict[str, object]:
        repositories = self._fetch_all()

        term = args.name.lower()
        matches = [
            repo
            for repo in repositories
            if _contains(repo.name, term) or _contains(repo.external_repo_id, term)
        ]

        self._logger.info(
            "repository_search",
            term=args.name,
            scanned=len(repositories),
            matched=len(matches),
        )
        return {
            "total": len(matches),
            "repositories": matches,
        }

    def _fetch_all(self) -> list[Repository]:
        collected: list[Repository] = []
        page = 0

        while True:
            batch = self._page_items(page)
            if not batch:
                break
            collected.extend(batch)
            # A short page is the last one
            if len(batch) < self.PAGE_SIZE:
                break
            page += 1

        return collected

    def _page_items(self, page: int) -> list[Repository]:
        response = self._lister.fetch_page(page=page, per_page=self.PAGE_SIZE)
        self._logger.debug("repository_page", page=page, shape=type(response).__name__)

        if isinstance(response, list):
            return response
        if isinstance(response, dict) and isinstance(response.get("repositories"), list):
            return parse_records(Repository, response["repositories"], REPOSITORIES_ENDPOINT)
        return []


def _contains(value: Optional[str], term: str) -> bool:
    return value is not None and term in value.lower()

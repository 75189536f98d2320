from __future__ import annotations

from typing import Iterator

import httpx
from dependency_injector import containers, providers

from .config import AppConfig
from ..core.ports import SystemClock
from ..core.services import ToolDispatcher
from ..core.usecases.issue_groups import GetIssueGroupDetailsUseCase, GetOpenIssueGroupsUseCase
from ..core.usecases.issues import GetIssueDetailsUseCase, GetIssuesUseCase
from ..core.usecases.repositories import ListRepositoriesUseCase, SearchRepositoryByNameUseCase
from ..infra.api_client import AikidoApiClient
from ..infra.auth import TokenManager
from ..infra.logging import AppLogger
from ..infra.mcp_server import MCPServer


def init_http_client() -> Iterator[httpx.Client]:
    """Shared HTTP client, closed on container shutdown."""
    client = httpx.Client()
    yield client
    client.close()


class Container(containers.DeclarativeContainer):
    """DI container with Pydantic BaseSettings support."""

    # Configuration - supports Pydantic models
    config = providers.Configuration(pydantic_settings=[AppConfig()])

    # Logger (Resource: manages lifecycle with init/shutdown)
    logger = providers.Resource(
        AppLogger,
        log_file=config.log_file,
        logger_name=config.logging.logger_name,
        console_output=config.logging.console_output,
        level=config.logging.level,
    )

    clock = providers.Singleton(SystemClock)

    http_client = providers.Resource(init_http_client)

    # Token cache lives as long as the container
    token_manager = providers.Singleton(
        TokenManager,
        base_url=config.api.resolved_base_url,
        client_id=config.credentials.client_id,
        client_secret=config.credentials.client_secret,
        http=http_client,
        clock=clock,
        logger=logger,
    )

    api_client = providers.Singleton(
        AikidoApiClient,
        base_url=config.api.resolved_base_url,
        tokens=token_manager,
        http=http_client,
        logger=logger,
    )

    # Tool handlers
    list_repositories_uc = providers.Factory(
        ListRepositoriesUseCase,
        api=api_client,
    )

    search_repository_by_name_uc = providers.Factory(
        SearchRepositoryByNameUseCase,
        lister=list_repositories_uc,
        logger=logger,
    )

    get_issues_uc = providers.Factory(
        GetIssuesUseCase,
        api=api_client,
        logger=logger,
    )

    get_issue_details_uc = providers.Factory(
        GetIssueDetailsUseCase,
        api=api_client,
    )

    get_open_issue_groups_uc = providers.Factory(
        GetOpenIssueGroupsUseCase,
        api=api_client,
        logger=logger,
    )

    get_issue_group_details_uc = providers.Factory(
        GetIssueGroupDetailsUseCase,
        api=api_client,
    )

    dispatcher = providers.Singleton(
        ToolDispatcher,
        list_repositories=list_repositories_uc,
        get_issues=get_issues_uc,
        get_issue_details=get_issue_details_uc,
        get_open_issue_groups=get_open_issue_groups_uc,
        get_issue_group_details=get_issue_group_details_uc,
        search_repository_by_name=search_repository_by_name_uc,
        logger=logger,
    )

    mcp_server = providers.Factory(
        MCPServer,
        dispatcher=dispatcher,
        logger=logger,
    )

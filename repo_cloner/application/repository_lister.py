import logging
from typing import List

import aiohttp
import click

from repo_cloner.domain.models import RepositoryRecord
from repo_cloner.infrastructure.acl import GitHubTranslator
from repo_cloner.infrastructure.github_client import GitHubRESTClient

logger = logging.getLogger(__name__)


class RepositoryLister:
    """Lists the repositories owned by a user, with their language still unresolved."""

    def __init__(self, github_client: GitHubRESTClient, protocol: str = "ssh"):
        self.github_client = github_client
        self.protocol = protocol

    async def list(self, session: aiohttp.ClientSession, user: str) -> List[RepositoryRecord]:
        click.echo(f"Getting repos {user}:")
        raw_repos = await self.github_client.list_repositories(session, user)
        records = GitHubTranslator.to_domain_list(
            raw_repos,
            protocol=self.protocol,
            source=self.github_client.repos_url(user),
        )
        logger.info(f"Found {len(records)} repositories for {user}.")
        return records

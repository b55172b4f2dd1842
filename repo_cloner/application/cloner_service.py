import asyncio
import logging
from functools import partial
from typing import Awaitable, Callable, Iterable, List, TypeVar

import aiohttp

from repo_cloner.application.clone_orchestrator import CloneOrchestrator
from repo_cloner.application.language_resolver import LanguageResolver
from repo_cloner.application.repository_lister import RepositoryLister
from repo_cloner.domain.models import CloneOutcome, RunSummary

logger = logging.getLogger(__name__)

# Limit concurrent connections to avoid overwhelming GitHub's servers
CONNECTOR_LIMIT = 10

T = TypeVar("T")
R = TypeVar("R")


async def parallel_map(func: Callable[[T], Awaitable[R]], items: Iterable[T]) -> List[R]:
    """
    Runs `func` concurrently on every item and returns the results in input order.

    The first exception raised by any call is propagated; the other calls are
    not cancelled and run to completion on their own.
    """
    return list(await asyncio.gather(*(func(item) for item in items)))


class ClonerService:
    """
    Service responsible for orchestrating a run: list the user's repositories,
    resolve every repository's language concurrently, then, if requested,
    clone every repository concurrently.
    """

    def __init__(
            self,
            lister: RepositoryLister,
            resolver: LanguageResolver,
            orchestrator: CloneOrchestrator,
            connector_limit: int = CONNECTOR_LIMIT
    ):
        self.lister = lister
        self.resolver = resolver
        self.orchestrator = orchestrator
        self.connector_limit = connector_limit

    async def run(self, user: str, clone: bool = False) -> RunSummary:
        """
        Resolves the languages of `user`'s repositories and clones them when `clone` is set.

        Without `clone` nothing is written to disk and git is never invoked.
        """
        async with aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(limit=self.connector_limit),
        ) as session:
            records = await self.lister.list(session, user)
            repositories = await parallel_map(partial(self.resolver.enrich, session), records)

        for repo in repositories:
            logger.info(f"Resolved {repo.path} ({repo.clone_url})")

        summary = RunSummary(repositories=repositories)
        if not clone:
            return summary

        summary.outcomes = await parallel_map(self.orchestrator.clone, repositories)
        logger.info(
            f"Cloning completed. cloned={summary.count(CloneOutcome.CLONED)} "
            f"failed={summary.count(CloneOutcome.FAILED)} "
            f"skipped={summary.count(CloneOutcome.SKIPPED)}."
        )
        return summary

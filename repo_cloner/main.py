import asyncio
import sys
import logging

import aiohttp
import click
from dotenv import find_dotenv, load_dotenv

from repo_cloner.application.clone_orchestrator import CloneOrchestrator
from repo_cloner.application.cloner_service import ClonerService
from repo_cloner.application.language_resolver import LanguageResolver
from repo_cloner.application.repository_lister import RepositoryLister
from repo_cloner.domain.exceptions import ClonerException, ConfigurationError
from repo_cloner.domain.models import RunSummary
from repo_cloner.infrastructure.config import Settings
from repo_cloner.infrastructure.github_client import GitHubRESTClient

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    # Progress notices own stdout, so diagnostics go to stderr.
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


async def run(settings: Settings, user: str, clone: bool, protocol: str = "ssh", dest: str = ".") -> RunSummary:
    # Initialize the GitHub client and the three stages of a run
    github_client = GitHubRESTClient(settings=settings)

    service = ClonerService(
        lister=RepositoryLister(github_client=github_client, protocol=protocol),
        resolver=LanguageResolver(github_client=github_client),
        orchestrator=CloneOrchestrator(base_dir=dest),
    )
    return await service.run(user, clone=clone)


@click.command(name="repo-cloner")
@click.option("--user", "-u", required=True, help="GitHub user whose repositories are listed")
@click.option("--clone", "-c", is_flag=True, help="Clone the repositories (otherwise only resolve languages)")
@click.option("--https", "use_https", is_flag=True, help="Clone over HTTPS instead of SSH")
@click.option("--dest", "-d", default=".", show_default=True,
              type=click.Path(file_okay=False), help="Directory holding the {language}/{repo} layout")
@click.option("--verbose", "-v", is_flag=True, help="Log progress details to stderr")
def cli(user: str, clone: bool, use_https: bool, dest: str, verbose: bool):
    """Github repo cloner: sorts a user's repositories into directories named after their language."""
    # Load environment variables from the .env file of the working directory
    load_dotenv(find_dotenv(usecwd=True))
    configure_logging(verbose)

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    protocol = "https" if use_https else "ssh"

    try:
        asyncio.run(run(settings, user, clone, protocol=protocol, dest=dest))
    except KeyboardInterrupt:
        logger.info("Run interrupted by user. Exiting.")
        sys.exit(130)
    except (ClonerException, aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
        logger.exception(f"Run aborted: {e}")
        sys.exit(1)


if __name__ == "__main__":
    cli()

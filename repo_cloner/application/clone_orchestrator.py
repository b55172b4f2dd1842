import asyncio
import logging
from pathlib import Path
from typing import Union

import click

from repo_cloner.domain.exceptions import CloneLaunchError
from repo_cloner.domain.models import CloneOutcome, RepositoryRecord

logger = logging.getLogger(__name__)


class CloneOrchestrator:
    """
    Clones repositories into `{base_dir}/{language}/{name}`.

    Existing targets are skipped, so re-running never clones a repository twice.
    A clone that exits non-zero is reported and does not fail the run; only a
    filesystem error or a git executable that cannot be started does.
    """

    def __init__(self, base_dir: Union[str, Path] = ".", git_executable: str = "git"):
        self.base_dir = Path(base_dir)
        self.git_executable = git_executable

    async def clone(self, repo: RepositoryRecord) -> CloneOutcome:
        if repo.language is None:
            raise ValueError(f"Cannot clone '{repo.name}' before its language is resolved.")

        language_dir = self.base_dir / repo.language
        if (language_dir / repo.name).is_dir():
            click.echo(f"skip existing: {repo.path}")
            return CloneOutcome.SKIPPED

        # Sibling tasks may create the same language directory concurrently.
        language_dir.mkdir(parents=True, exist_ok=True)

        command = [self.git_executable, "-C", str(language_dir), "clone", repo.clone_url]
        logger.debug(f"Running {' '.join(command)}")
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            raise CloneLaunchError(command=self.git_executable, reason=str(e)) from e

        returncode = await process.wait()
        if returncode == 0:
            click.echo(f"     clone OK: {repo.path} ({repo.clone_url})")
            return CloneOutcome.CLONED

        logger.info(f"git exited with status {returncode} for {repo.path}")
        click.echo(f" clone FAILED: {repo.path} ({repo.clone_url})")
        return CloneOutcome.FAILED

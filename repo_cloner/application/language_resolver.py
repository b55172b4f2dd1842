import asyncio
import logging
from typing import Dict, Optional

import aiohttp

from repo_cloner.domain.exceptions import GitHubAPIError, ResponseDecodeError
from repo_cloner.domain.models import LanguageLookup, RepositoryRecord
from repo_cloner.infrastructure.github_client import GitHubRESTClient

logger = logging.getLogger(__name__)

# Directory used for repositories whose language could not be determined
FALLBACK_LANGUAGE = "other"


def normalize_language(name: str) -> str:
    """Turns a GitHub language name into a directory token: "Jupyter Notebook" -> "jupyter_notebook"."""
    return name.lower().replace(" ", "_")


def dominant_language(counts: Dict[str, int]) -> Optional[str]:
    """
    Returns the language with the most bytes, or None for an empty mapping.
    Ties go to the lexicographically smallest name.
    """
    if not counts:
        return None
    language, _ = min(counts.items(), key=lambda item: (-item[1], item[0]))
    return language


class LanguageResolver:
    """
    Resolves the dominant language of a repository.
    A failed lookup never fails the run: the repository is filed under FALLBACK_LANGUAGE.
    """

    def __init__(self, github_client: GitHubRESTClient):
        self.github_client = github_client

    async def lookup(self, session: aiohttp.ClientSession, languages_url: str) -> LanguageLookup:
        try:
            counts = await self.github_client.fetch_languages(session, languages_url)
        except (GitHubAPIError, ResponseDecodeError) as e:
            return LanguageLookup.failed(str(e))
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            return LanguageLookup.failed(f"request to {languages_url} failed: {e!r}")

        language = dominant_language(counts)
        if language is None:
            return LanguageLookup.failed(f"no languages reported by {languages_url}")
        return LanguageLookup.found(language)

    async def resolve(self, session: aiohttp.ClientSession, languages_url: str) -> str:
        result = await self.lookup(session, languages_url)
        if not result.ok:
            logger.warning(f"Language lookup failed, using '{FALLBACK_LANGUAGE}': {result.error}")
            return FALLBACK_LANGUAGE
        return normalize_language(result.language)

    async def enrich(self, session: aiohttp.ClientSession, record: RepositoryRecord) -> RepositoryRecord:
        language = await self.resolve(session, record.languages_url)
        return record.with_language(language)

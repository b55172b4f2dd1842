from typing import Any, Dict, List

from pydantic import ValidationError

from repo_cloner.domain.exceptions import ResponseDecodeError
from repo_cloner.domain.models import RepositoryRecord

# Protocol name -> field of the GitHub repository object holding the clone address
CLONE_URL_FIELDS = {
    "ssh": "ssh_url",
    "https": "clone_url",
}


class GitHubTranslator:
    """
    Anti-corruption layer that translates raw GitHub REST JSON objects into RepositoryRecord instances.
    """

    @staticmethod
    def to_domain(raw_repo: Dict[str, Any], protocol: str = "ssh") -> RepositoryRecord:
        """
        Transforms one element of the repository listing into a RepositoryRecord.

        Args:
            raw_repo (Dict[str, Any]): The raw JSON object from GitHub's REST response.
            protocol (str): "ssh" to clone through `ssh_url`, "https" for `clone_url`.

        Returns:
            RepositoryRecord: The domain model instance, language left unset.
        """
        if protocol not in CLONE_URL_FIELDS:
            raise ValueError(f"Unknown clone protocol '{protocol}'.")
        url_field = CLONE_URL_FIELDS[protocol]

        for field in ("name", url_field, "languages_url"):
            if not raw_repo.get(field):
                raise ValueError(f"{field} is required to build RepositoryRecord.")

        return RepositoryRecord(
            name=raw_repo["name"],
            clone_url=raw_repo[url_field],
            languages_url=raw_repo["languages_url"],
        )

    @classmethod
    def to_domain_list(cls, raw_repos: List[Any], protocol: str = "ssh", source: str = "") -> List[RepositoryRecord]:
        """
        Transforms a whole repository listing.

        Raises:
            ResponseDecodeError: If any element cannot be decoded.
        """
        records = []
        for index, raw_repo in enumerate(raw_repos):
            if not isinstance(raw_repo, dict):
                raise ResponseDecodeError(url=source, reason=f"element {index} is not a JSON object")
            try:
                records.append(cls.to_domain(raw_repo, protocol))
            except (ValueError, ValidationError) as e:
                raise ResponseDecodeError(url=source, reason=f"element {index}: {e}") from e
        return records

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict

class RepositoryRecord(BaseModel):
    """
    Immutable domain model representing one repository of the listed user.
    The language is resolved after decoding and attached with `with_language`.
    """
    # Enforces immutability: once created, fields cannot be modified.
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Name of the repository")
    clone_url: str = Field(..., min_length=1, description="Address passed to git clone")
    languages_url: str = Field(..., min_length=1, description="Endpoint returning the language breakdown")
    language: Optional[str] = Field(
        default=None,
        description="Directory-safe language token, unset until resolved"
    )

    def with_language(self, language: str) -> "RepositoryRecord":
        """
        Returns a copy of this record carrying the resolved language.

        Raises:
            ValueError: If the language has already been resolved.
        """
        if self.language is not None:
            raise ValueError(f"Language of '{self.name}' is already resolved to '{self.language}'.")
        return self.model_copy(update={"language": language})

    @property
    def path(self) -> str:
        """Relative `{language}/{name}` path of the clone."""
        if self.language is None:
            raise ValueError(f"Language of '{self.name}' is not resolved yet.")
        return f"{self.language}/{self.name}"


class LanguageLookup(BaseModel):
    """Result of a language lookup: either a language name or the reason it failed."""
    model_config = ConfigDict(frozen=True)

    language: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.language is not None

    @classmethod
    def found(cls, language: str) -> "LanguageLookup":
        return cls(language=language)

    @classmethod
    def failed(cls, reason: str) -> "LanguageLookup":
        return cls(error=reason)


class CloneOutcome(str, Enum):
    SKIPPED = "skipped"
    CLONED = "cloned"
    FAILED = "failed"


class RunSummary(BaseModel):
    """What a run resolved and, when cloning, what happened to each repository."""
    repositories: List[RepositoryRecord] = Field(default_factory=list)
    outcomes: List[CloneOutcome] = Field(default_factory=list)

    def count(self, outcome: CloneOutcome) -> int:
        return sum(1 for item in self.outcomes if item == outcome)

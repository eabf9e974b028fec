"""Protocol for example-sentence providers."""

from typing import Protocol


class SentenceProvider(Protocol):
    """Interface for a source of example sentences for a vocabulary pair."""

    @property
    def name(self) -> str:
        """Human-readable name for this provider."""
        ...

    def generate(self, term: str, translation: str) -> list[str]:
        """Generate example sentences using ``term``.

        Args:
            term: Word the sentences should contain
            translation: Meaning of the word, as context

        Returns:
            List of sentences (may be empty if the provider has none)
        """
        ...

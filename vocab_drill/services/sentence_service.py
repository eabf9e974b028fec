"""Example-sentence generation: remote API with template fallback."""

import logging
import random
import time

import requests

from vocab_drill.config import VocabDrillConfig
from vocab_drill.interfaces import ProgressCallback, RandomSource, SentenceProvider
from vocab_drill.services.import_service import WordPair

logger = logging.getLogger(__name__)

FALLBACK_TEMPLATES = [
    "Eu preciso de WORD.",
    "WORD é muito importante.",
    "Onde está o WORD?",
    "Tu viste o WORD?",
    "Eu comprei um WORD novo.",
    "Eu gosto de WORD.",
    "Nós precisamos de WORD.",
    "Ela mencionou WORD.",
    "Eu aprendi sobre WORD.",
    "Tu conheces WORD?",
    "WORD está aqui.",
    "Eu lembro-me de WORD.",
]


class TemplateSentenceProvider:
    """Offline provider filling fixed templates with the term.

    Implements SentenceProvider protocol.
    """

    def __init__(self, count: int = 3, rng: RandomSource | None = None):
        """Initialize with the number of sentences per term.

        Args:
            count: Sentences to return per term.
            rng: Random source used to pick templates.
        """
        self._count = count
        self._rng = rng if rng is not None else random.Random()

    @property
    def name(self) -> str:
        return "Templates"

    def generate(self, term: str, translation: str) -> list[str]:
        templates = list(FALLBACK_TEMPLATES)
        picked = []
        for _ in range(min(self._count, len(templates))):
            picked.append(templates.pop(self._rng.randint(0, len(templates) - 1)))
        return [t.replace("WORD", term) for t in picked]


class RemoteSentenceProvider:
    """Online provider posting pairs to a sentence-generation endpoint.

    Implements SentenceProvider protocol. Expects a JSON response of
    the form ``{"sentences": [...]}``.
    """

    def __init__(
        self,
        api_url: str,
        timeout: float = 10.0,
        max_retries: int = 2,
        retry_delay: float = 3.0,
    ):
        """Initialize with endpoint and retry policy.

        Args:
            api_url: Endpoint URL.
            timeout: Request timeout in seconds.
            max_retries: Retries after an HTTP 429 response.
            retry_delay: Seconds to wait before retrying a 429.
        """
        self._api_url = api_url
        self._timeout = timeout
        self._max_retries = max_retries
        self._retry_delay = retry_delay

    @property
    def name(self) -> str:
        return "Sentence API"

    def generate(self, term: str, translation: str) -> list[str]:
        """Fetch sentences for a pair.

        Returns:
            Sentences from the API, or an empty list on any failure.
        """
        for attempt in range(self._max_retries + 1):
            try:
                response = requests.post(
                    self._api_url,
                    json={"term": term, "translation": translation},
                    timeout=self._timeout,
                )
            except requests.RequestException as e:
                logger.warning(f"Sentence API request failed for {term!r}: {e}")
                return []

            if response.status_code == 429 and attempt < self._max_retries:
                logger.warning(
                    f"Rate limited for {term!r}, retrying in {self._retry_delay}s "
                    f"(attempt {attempt + 1}/{self._max_retries})"
                )
                time.sleep(self._retry_delay)
                continue

            if response.status_code != 200:
                logger.warning(f"Sentence API error for {term!r}: HTTP {response.status_code}")
                return []

            try:
                sentences = response.json().get("sentences") or []
            except (ValueError, AttributeError):
                return []
            return [s for s in sentences if isinstance(s, str) and s.strip()]

        return []


class SentenceService:
    """Generate example sentences for imported pairs.

    Tries the configured API first and falls back to templates for any
    pair the API could not serve, so every pair gets sentences.
    """

    def __init__(
        self,
        config: VocabDrillConfig,
        provider: SentenceProvider | None = None,
        fallback: SentenceProvider | None = None,
    ):
        """Initialize the sentence service.

        Args:
            config: Configuration with API URL and retry settings
            provider: Primary provider (defaults to the API when configured)
            fallback: Provider used when the primary returns nothing
        """
        self.config = config
        if provider is None and config.sentence_api_url:
            provider = RemoteSentenceProvider(
                config.sentence_api_url,
                timeout=config.sentence_api_timeout,
                max_retries=config.sentence_max_retries,
                retry_delay=config.sentence_retry_delay,
            )
        self._provider = provider
        self._fallback = fallback or TemplateSentenceProvider(
            count=config.sentences_per_item, rng=random.Random(config.random_seed)
        )

    def generate(self, pair: WordPair) -> list[str]:
        """Generate sentences for one pair, falling back to templates."""
        sentences, _ = self._generate(pair)
        return sentences

    def _generate(self, pair: WordPair) -> tuple[list[str], bool]:
        # Second element is True when the API was configured but returned nothing
        if self._provider is not None:
            sentences = self._provider.generate(pair.term, pair.translation)
            if sentences:
                return sentences[: self.config.sentences_per_item], False
            logger.info(f"Using {self._fallback.name} for {pair.term!r}")
            return self._fallback.generate(pair.term, pair.translation), True
        return self._fallback.generate(pair.term, pair.translation), False

    def generate_batch(
        self,
        pairs: list[WordPair],
        progress_callback: ProgressCallback | None = None,
    ) -> dict[str, list[str]]:
        """Generate sentences for many pairs.

        Args:
            pairs: Pairs to generate for
            progress_callback: Optional progress reporting

        Returns:
            Mapping of term to sentences
        """
        results: dict[str, list[str]] = {}
        if progress_callback:
            progress_callback.on_start(len(pairs), "Generating example sentences")

        for i, pair in enumerate(pairs, 1):
            results[pair.term], used_fallback = self._generate(pair)
            if progress_callback:
                if used_fallback:
                    progress_callback.on_error(
                        pair.term, f"{self._provider.name} returned nothing; used {self._fallback.name}"
                    )
                progress_callback.on_progress(i, pair.term)
            if self._provider is not None and i < len(pairs) and self.config.sentence_batch_delay:
                time.sleep(self.config.sentence_batch_delay)

        if progress_callback:
            progress_callback.on_complete()
        return results

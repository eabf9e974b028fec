"""Tests for sentence generation providers and SentenceService."""

from dataclasses import replace
from unittest.mock import MagicMock, patch

import requests

from vocab_drill.services.import_service import WordPair
from vocab_drill.services.sentence_service import (
    FALLBACK_TEMPLATES,
    RemoteSentenceProvider,
    SentenceService,
    TemplateSentenceProvider,
)

POST = "vocab_drill.services.sentence_service.requests.post"
SLEEP = "vocab_drill.services.sentence_service.time.sleep"


def _response(status=200, payload=None):
    response = MagicMock()
    response.status_code = status
    response.json.return_value = payload if payload is not None else {}
    return response


class TestTemplateSentenceProvider:
    """Tests for TemplateSentenceProvider."""

    def test_fills_templates(self, fixed_rng):
        sentences = TemplateSentenceProvider(count=3, rng=fixed_rng).generate("casa", "house")
        assert len(sentences) == 3
        assert all("casa" in s for s in sentences)
        assert all("WORD" not in s for s in sentences)

    def test_no_repeats(self, fixed_rng):
        sentences = TemplateSentenceProvider(count=len(FALLBACK_TEMPLATES), rng=fixed_rng).generate("x", "y")
        assert len(set(sentences)) == len(FALLBACK_TEMPLATES)

    def test_count_capped_by_templates(self, fixed_rng):
        provider = TemplateSentenceProvider(count=100, rng=fixed_rng)
        assert len(provider.generate("x", "y")) == len(FALLBACK_TEMPLATES)


class TestRemoteSentenceProvider:
    """Tests for RemoteSentenceProvider."""

    def test_success(self):
        provider = RemoteSentenceProvider("http://api.test/sentences")
        payload = {"sentences": ["A casa é azul.", "", 3, "Moro numa casa."]}
        with patch(POST, return_value=_response(payload=payload)) as post:
            result = provider.generate("casa", "house")

        assert result == ["A casa é azul.", "Moro numa casa."]
        post.assert_called_once_with(
            "http://api.test/sentences",
            json={"term": "casa", "translation": "house"},
            timeout=10.0,
        )

    def test_rate_limit_retried(self):
        """HTTP 429 should be retried after a delay."""
        provider = RemoteSentenceProvider("http://api.test", max_retries=2, retry_delay=3.0)
        responses = [_response(429), _response(payload={"sentences": ["Olá casa."]})]
        with patch(POST, side_effect=responses) as post, patch(SLEEP) as sleep:
            result = provider.generate("casa", "house")

        assert result == ["Olá casa."]
        assert post.call_count == 2
        sleep.assert_called_once_with(3.0)

    def test_rate_limit_exhausted(self):
        provider = RemoteSentenceProvider("http://api.test", max_retries=2)
        with patch(POST, return_value=_response(429)) as post, patch(SLEEP):
            assert provider.generate("casa", "house") == []
        assert post.call_count == 3

    def test_server_error(self):
        provider = RemoteSentenceProvider("http://api.test")
        with patch(POST, return_value=_response(500)) as post:
            assert provider.generate("casa", "house") == []
        assert post.call_count == 1

    def test_network_error(self):
        provider = RemoteSentenceProvider("http://api.test")
        with patch(POST, side_effect=requests.ConnectionError("down")):
            assert provider.generate("casa", "house") == []

    def test_invalid_json(self):
        provider = RemoteSentenceProvider("http://api.test")
        response = _response()
        response.json.side_effect = ValueError("not json")
        with patch(POST, return_value=response):
            assert provider.generate("casa", "house") == []


class TestSentenceService:
    """Tests for SentenceService."""

    def test_templates_without_api(self, test_config):
        service = SentenceService(test_config)
        with patch(POST) as post:
            sentences = service.generate(WordPair("casa", "house"))
        post.assert_not_called()
        assert len(sentences) == test_config.sentences_per_item

    def test_api_configured(self, test_config):
        config = replace(test_config, sentence_api_url="http://api.test")
        service = SentenceService(config)
        payload = {"sentences": ["1 casa", "2 casa", "3 casa", "4 casa"]}
        with patch(POST, return_value=_response(payload=payload)):
            sentences = service.generate(WordPair("casa", "house"))
        assert sentences == ["1 casa", "2 casa", "3 casa"]

    def test_falls_back_on_empty(self, test_config):
        provider = MagicMock()
        provider.generate.return_value = []
        fallback = MagicMock()
        fallback.generate.return_value = ["fallback"]
        service = SentenceService(test_config, provider=provider, fallback=fallback)

        assert service.generate(WordPair("casa", "house")) == ["fallback"]
        fallback.generate.assert_called_once_with("casa", "house")

    def test_batch_reports_progress(self, test_config, recording_progress):
        service = SentenceService(test_config)
        pairs = [WordPair("casa", "house"), WordPair("cão", "dog")]

        results = service.generate_batch(pairs, recording_progress)

        assert set(results) == {"casa", "cão"}
        assert recording_progress.starts == [(2, "Generating example sentences")]
        assert recording_progress.progresses == [(1, "casa"), (2, "cão")]
        assert recording_progress.completes == 1

    def test_batch_reports_api_misses(self, test_config, recording_progress):
        """Pairs the API could not serve should be reported before falling back."""
        provider = MagicMock()
        provider.name = "Sentence API"
        provider.generate.side_effect = [["uma casa"], []]
        service = SentenceService(test_config, provider=provider)
        pairs = [WordPair("casa", "house"), WordPair("cão", "dog")]

        results = service.generate_batch(pairs, recording_progress)

        assert results["casa"] == ["uma casa"]
        assert all("cão" in s for s in results["cão"])
        assert recording_progress.errors == [("cão", "Sentence API returned nothing; used Templates")]
        assert recording_progress.progresses == [(1, "casa"), (2, "cão")]

    def test_batch_without_api_reports_no_misses(self, test_config, recording_progress):
        service = SentenceService(test_config)
        service.generate_batch([WordPair("casa", "house")], recording_progress)
        assert recording_progress.errors == []

    def test_batch_delays_between_api_calls(self, test_config):
        config = replace(test_config, sentence_batch_delay=1.0)
        provider = MagicMock()
        provider.generate.return_value = ["s"]
        service = SentenceService(config, provider=provider)
        pairs = [WordPair("a", "a"), WordPair("b", "b"), WordPair("c", "c")]

        with patch(SLEEP) as sleep:
            service.generate_batch(pairs)

        assert sleep.call_count == 2

    def test_batch_no_delay_for_templates(self, test_config):
        service = SentenceService(replace(test_config, sentence_batch_delay=1.0))
        with patch(SLEEP) as sleep:
            service.generate_batch([WordPair("a", "a"), WordPair("b", "b")])
        sleep.assert_not_called()

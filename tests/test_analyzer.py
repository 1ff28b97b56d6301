"""
Unit tests for the AI categorizers.
"""
import asyncio

import pytest
import requests
from unittest.mock import AsyncMock, MagicMock, Mock, patch

from triage_agent.analyzer import GeminiCategorizer, OllamaCategorizer, build_categorizer
from triage_agent.analyzer.parsing import (
    build_system_prompt,
    build_user_prompt,
    extract_json_object,
    parse_categorization,
)
from triage_agent.config import Config, ProviderConfig
from triage_agent.errors import AnalysisError, ConfigError
from triage_agent.rules.models import DEFAULT_CATEGORIES


CATEGORIES = list(DEFAULT_CATEGORIES)


class TestPromptConstruction:
    """Tests for AI prompt construction."""
    
    def test_system_prompt_lists_categories(self):
        """Test that every category is offered to the model."""
        prompt = build_system_prompt(CATEGORIES)
        
        for category in CATEGORIES:
            assert f"- {category}" in prompt
        assert '"category"' in prompt
    
    def test_user_prompt_includes_message(self):
        """Test that the message is part of the prompt."""
        prompt = build_user_prompt("My invoice is wrong")
        
        assert "My invoice is wrong" in prompt
    
    def test_user_prompt_truncation(self):
        """Test that long messages are truncated."""
        prompt = build_user_prompt("A" * 10000, max_chars=2000)
        
        assert "A" * 2000 in prompt
        assert "A" * 2001 not in prompt


class TestResponseParsing:
    """Tests for AI response parsing."""
    
    def test_parse_clean_json(self):
        """Test parsing a clean JSON response."""
        result = parse_categorization(
            '{"category": "Billing & Subscription", "reasoning": "Mentions invoice"}', CATEGORIES
        )
        
        assert result.category == "Billing & Subscription"
        assert result.reasoning == "Mentions invoice"
    
    def test_parse_json_in_markdown_block(self):
        """Test extracting JSON from a markdown code block."""
        response = '''Here is my analysis:

```json
{"category": "Technical Support", "reasoning": "- App crashes"}
```'''
        
        result = parse_categorization(response, CATEGORIES)
        
        assert result.category == "Technical Support"
        assert result.reasoning == "- App crashes"
    
    def test_case_normalized_to_known_label(self):
        """Test that a known label in other casing uses the configured spelling."""
        result = parse_categorization('{"category": "feature request", "reasoning": ""}', CATEGORIES)
        
        assert result.category == "Feature Request"
    
    def test_novel_label_kept(self):
        """Test that labels outside the list survive parsing."""
        result = parse_categorization('{"category": " Legal Inquiry ", "reasoning": "Subpoena"}', CATEGORIES)
        
        assert result.category == "Legal Inquiry"
    
    def test_reasoning_list_becomes_bullets(self):
        """Test that list reasoning is rendered as markdown bullets."""
        result = parse_categorization(
            '{"category": "Spam/Other", "reasoning": ["Unsolicited", "Contains link"]}', CATEGORIES
        )
        
        assert result.reasoning == "- Unsolicited\n- Contains link"
    
    def test_missing_reasoning(self):
        """Test that reasoning is optional."""
        result = parse_categorization('{"category": "Spam/Other"}', CATEGORIES)
        
        assert result.reasoning == ""
    
    def test_missing_category_rejected(self):
        """Test that a response without a category is an error."""
        with pytest.raises(ValueError):
            parse_categorization('{"reasoning": "unsure"}', CATEGORIES)
    
    def test_no_json_rejected(self):
        """Test handling a prose-only response."""
        with pytest.raises(ValueError):
            parse_categorization("I think this is billing.", CATEGORIES)
    
    def test_sanitize_trailing_comma_and_smart_quotes(self):
        """Test the common LLM JSON mistakes are repaired."""
        data = extract_json_object('Result: {“category”: “Spam/Other”,}')
        
        assert data == {"category": "Spam/Other"}
    
    def test_stray_braces_before_object_skipped(self):
        """Test that braces in leading prose do not hide the real object."""
        data = extract_json_object('Per {policy} I chose: {"category": "Spam/Other", "reasoning": "Ad"}')

        assert data == {"category": "Spam/Other", "reasoning": "Ad"}

    def test_first_object_wins(self):
        """Test that trailing objects after the answer are ignored."""
        data = extract_json_object('{"category": "Feature Request"}\n{"category": "Spam/Other"}')

        assert data == {"category": "Feature Request"}

    def test_invalid_json_rejected(self):
        """Test handling malformed JSON."""
        with pytest.raises(ValueError):
            extract_json_object('{"category": Spam}')


class TestOllamaCategorizer:
    """Tests for the Ollama categorizer (mocked HTTP)."""
    
    @pytest.fixture
    def categorizer(self):
        return OllamaCategorizer(
            "qwen3:14b", CATEGORIES, base_url="http://ollama.test", retry_backoff_sec=0
        )
    
    @staticmethod
    def _response(text):
        response = Mock()
        response.json.return_value = {"model": "qwen3:14b", "response": text, "done": True}
        return response
    
    def test_request_format(self, categorizer):
        """Test the /api/generate payload."""
        with patch("triage_agent.analyzer.ollama.requests.post") as post:
            post.return_value = self._response('{"category": "Product Question", "reasoning": ""}')
            asyncio.run(categorizer.categorize("How do I export?"))
        
        args, kwargs = post.call_args
        assert args[0] == "http://ollama.test/api/generate"
        assert kwargs["json"]["model"] == "qwen3:14b"
        assert kwargs["json"]["stream"] is False
        assert "How do I export?" in kwargs["json"]["prompt"]
    
    def test_successful_categorization(self, categorizer):
        """Test parsing the model response."""
        with patch("triage_agent.analyzer.ollama.requests.post") as post:
            post.return_value = self._response('{"category": "Product Question", "reasoning": "How-to"}')
            result = asyncio.run(categorizer.categorize("How do I export?"))
        
        assert result.category == "Product Question"
        assert result.reasoning == "How-to"
    
    def test_retries_on_empty_output(self, categorizer):
        """Test that a blank response is retried."""
        with patch("triage_agent.analyzer.ollama.requests.post") as post:
            post.side_effect = [
                self._response(""),
                self._response('{"category": "Spam/Other", "reasoning": ""}'),
            ]
            result = asyncio.run(categorizer.categorize("Buy cheap watches"))
        
        assert result.category == "Spam/Other"
        assert post.call_count == 2
    
    def test_connection_error_raises_after_retries(self, categorizer):
        """Test that a persistent network failure aborts with AnalysisError."""
        with patch("triage_agent.analyzer.ollama.requests.post") as post:
            post.side_effect = requests.ConnectionError("refused")
            with pytest.raises(AnalysisError):
                asyncio.run(categorizer.categorize("Hello"))
        
        assert post.call_count == categorizer.max_retries + 1


class TestGeminiCategorizer:
    """Tests for the Gemini categorizer (mocked SDK)."""
    
    @pytest.fixture
    def client(self):
        with patch("triage_agent.analyzer.gemini.genai.Client") as client_cls:
            client = MagicMock()
            client.aio.models.generate_content = AsyncMock()
            client_cls.return_value = client
            yield client
    
    def test_successful_categorization(self, client):
        """Test extracting the category from the SDK response."""
        client.aio.models.generate_content.return_value = Mock(
            text='{"category": "Account Management", "reasoning": "Password reset"}'
        )
        categorizer = GeminiCategorizer("key", CATEGORIES)
        
        result = asyncio.run(categorizer.categorize("Reset my password"))
        
        assert result.category == "Account Management"
        kwargs = client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.0-flash"
        assert "Reset my password" in kwargs["contents"]
    
    def test_api_error_raises(self, client):
        """Test that SDK failures become AnalysisError."""
        client.aio.models.generate_content.side_effect = RuntimeError("quota exceeded")
        categorizer = GeminiCategorizer("key", CATEGORIES)
        
        with pytest.raises(AnalysisError):
            asyncio.run(categorizer.categorize("Hello"))
    
    def test_unparseable_response_raises(self, client):
        """Test that a non-JSON answer becomes AnalysisError."""
        client.aio.models.generate_content.return_value = Mock(text="Sorry, I cannot help.")
        categorizer = GeminiCategorizer("key", CATEGORIES)
        
        with pytest.raises(AnalysisError):
            asyncio.run(categorizer.categorize("Hello"))


class TestBuildCategorizer:
    """Tests for provider selection."""
    
    def test_prefers_ollama(self):
        """Test that a configured Ollama model wins over Gemini."""
        config = Config(provider=ProviderConfig(gemini_api_key="key", ollama_model="qwen3:14b"))
        
        assert isinstance(build_categorizer(config), OllamaCategorizer)
    
    def test_falls_back_to_gemini(self):
        """Test Gemini selection when only an API key is set."""
        config = Config(provider=ProviderConfig(gemini_api_key="key"))
        
        with patch("triage_agent.analyzer.gemini.genai.Client"):
            categorizer = build_categorizer(config)
        
        assert isinstance(categorizer, GeminiCategorizer)
    
    def test_nothing_configured(self):
        """Test that missing provider settings raise ConfigError."""
        with pytest.raises(ConfigError):
            build_categorizer(Config())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

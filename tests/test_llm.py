"""Unit tests for the LLM provider module."""
from types import SimpleNamespace

import pytest

from eva.llm import ChatMessage, GeminiProvider, LLMProvider, LLMResponse, create_llm_provider
from eva.llm.providers.gemini import DEFAULT_SAFETY_SETTINGS, HARM_CATEGORIES


class TestLLMProviderInterface:

    def test_provider_is_abstract(self):
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore


class TestGeminiProvider:
    """Tests for GeminiProvider request shaping (no network)."""

    @pytest.fixture
    def provider(self):
        return GeminiProvider(api_key="fake-key")

    def test_default_model(self, provider):
        assert provider.model == "gemini-2.5-flash"

    def test_safety_settings_block_nothing(self):
        categories = {str(getattr(s.category, "value", s.category)) for s in DEFAULT_SAFETY_SETTINGS}
        thresholds = {str(getattr(s.threshold, "value", s.threshold)) for s in DEFAULT_SAFETY_SETTINGS}

        assert categories == set(HARM_CATEGORIES)
        assert thresholds == {"BLOCK_NONE"}

    def test_convert_messages(self, provider):
        system, contents = provider._convert_messages([
            ChatMessage(role="system", content="be kind"),
            ChatMessage(role="user", content="hi"),
            ChatMessage(role="assistant", content="hello"),
            ChatMessage(role="user", content="I feel low"),
        ])

        assert system == "be kind"
        assert [c.role for c in contents] == ["user", "model", "user"]
        assert [c.parts[0].text for c in contents] == ["hi", "hello", "I feel low"]

    def test_build_config_caps_output(self, provider):
        config = provider._build_config("be kind", 0.7, 300)
        assert config.max_output_tokens == 300

    def test_extract_content_joins_parts(self, provider):
        response = SimpleNamespace(
            candidates=[SimpleNamespace(content=SimpleNamespace(parts=[
                SimpleNamespace(text="Breathe "),
                SimpleNamespace(text="slowly."),
            ]))],
            text="ignored",
        )
        assert provider._extract_content(response) == "Breathe slowly."

    def test_extract_content_empty(self, provider):
        response = SimpleNamespace(candidates=[], text=None)
        assert provider._extract_content(response) == ""

    @pytest.mark.asyncio
    @pytest.mark.integration
    async def test_chat_completion_real_api(self, api_keys):
        """Integration test: one completion against the real API."""
        if not api_keys["gemini"]:
            pytest.skip("GEMINI_API_KEY not set")

        async with GeminiProvider(api_key=api_keys["gemini"]) as provider:
            response = await provider.chat_completion(
                [ChatMessage(role="user", content="Say hello in one word.")],
                max_tokens=20,
            )
        assert isinstance(response, LLMResponse)


class TestLLMFactory:

    def test_create_gemini(self):
        provider = create_llm_provider("Gemini", api_key="fake-key", model="gemini-2.5-pro")
        assert isinstance(provider, GeminiProvider)
        assert provider.model == "gemini-2.5-pro"

    def test_missing_api_key(self):
        with pytest.raises(TypeError, match="api_key"):
            create_llm_provider("gemini")

    def test_unsupported_provider(self):
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("openai", api_key="x")

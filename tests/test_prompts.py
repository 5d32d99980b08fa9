"""Tests for the prompt registry and the Premiere workflow prompts."""

import pytest

from premiere_mcp.prompts import PROMPTS, build_prompt_registry, social_media_specs
from premiere_mcp.registry.errors import ConfigurationError
from premiere_mcp.registry.prompts import (
    PromptArgument,
    PromptDefinition,
    PromptMessage,
    PromptRegistry,
    RenderedPrompt,
)
from premiere_mcp.registry.results import FailureKind, Success

GREETING = PromptDefinition(
    name="greeting",
    description="Say hello",
    arguments=(PromptArgument("who", "Who to greet", required=True), PromptArgument("tone", "Tone")),
)


def _greet(args):
    return RenderedPrompt("Greeting", (PromptMessage("user", f"Hello {args['who']} ({args.get('tone', 'plain')})"),))


class TestPromptRegistry:
    def test_listing(self):
        registry = PromptRegistry([(GREETING, _greet)])
        assert registry.list_prompts() == [{
            "name": "greeting",
            "description": "Say hello",
            "arguments": [
                {"name": "who", "description": "Who to greet", "required": True},
                {"name": "tone", "description": "Tone", "required": False},
            ],
        }]

    @pytest.mark.asyncio
    async def test_render(self):
        registry = PromptRegistry([(GREETING, _greet)])
        result = await registry.get("greeting", {"who": "editor", "ignored": "x"})
        assert isinstance(result, Success)
        wire = result.payload.to_wire()
        assert wire["messages"] == [{"role": "user", "content": {"type": "text", "text": "Hello editor (plain)"}}]

    @pytest.mark.asyncio
    async def test_missing_required_argument(self):
        result = await PromptRegistry([(GREETING, _greet)]).get("greeting", {})
        assert result.kind is FailureKind.VALIDATION_ERROR

    @pytest.mark.asyncio
    async def test_non_string_argument(self):
        result = await PromptRegistry([(GREETING, _greet)]).get("greeting", {"who": 3})
        assert result.kind is FailureKind.VALIDATION_ERROR

    @pytest.mark.asyncio
    async def test_unknown_prompt(self):
        result = await PromptRegistry([(GREETING, _greet)]).get("farewell", {})
        assert result.kind is FailureKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_renderer_must_return_rendered_prompt(self):
        result = await PromptRegistry([(GREETING, lambda args: "hello")]).get("greeting", {"who": "x"})
        assert result.kind is FailureKind.EXECUTION_ERROR
        assert "RenderedPrompt" in result.message

    @pytest.mark.asyncio
    async def test_renderer_exception(self):
        def broken(args):
            raise ValueError("template exploded")

        result = await PromptRegistry([(GREETING, broken)]).get("greeting", {"who": "x"})
        assert result.kind is FailureKind.EXECUTION_ERROR
        assert result.message == "template exploded"

    def test_duplicate_rejected(self):
        with pytest.raises(ConfigurationError):
            PromptRegistry([(GREETING, _greet), (GREETING, _greet)])

    def test_unknown_role_rejected(self):
        with pytest.raises(ValueError):
            PromptMessage("narrator", "Once upon a time")


class TestPremierePrompts:
    @pytest.fixture
    def registry(self):
        return build_prompt_registry()

    def test_ten_prompts(self, registry):
        names = [p["name"] for p in registry.list_prompts()]
        assert len(names) == 10
        assert names[0] == "create_video_project"
        assert "audio_cleanup" in names

    def test_every_prompt_has_a_required_argument(self):
        for definition, _ in PROMPTS:
            assert any(arg.required for arg in definition.arguments), definition.name

    @pytest.mark.asyncio
    async def test_every_prompt_renders_with_required_arguments(self, registry):
        for definition, _ in PROMPTS:
            args = {arg.name: "value" for arg in definition.arguments if arg.required}
            result = await registry.get(definition.name, args)
            assert isinstance(result, Success), definition.name
            roles = [m.role for m in result.payload.messages]
            assert roles == ["system", "user", "assistant"]

    @pytest.mark.asyncio
    async def test_create_video_project_description(self, registry):
        result = await registry.get("create_video_project", {"project_type": "documentary"})
        assert result.payload.description == "Guide for creating a documentary video project"
        assert "long" not in result.payload.messages[1].text

    @pytest.mark.asyncio
    async def test_optional_argument_is_used(self, registry):
        result = await registry.get("create_video_project", {"project_type": "social", "duration": "60 seconds"})
        assert "that's 60 seconds long" in result.payload.messages[1].text

    @pytest.mark.asyncio
    async def test_log_footage_tips(self, registry):
        log_result = await registry.get("color_grade_footage", {"footage_type": "log"})
        raw_result = await registry.get("color_grade_footage", {"footage_type": "raw"})
        assert "LOG Footage Specific Tips" in log_result.payload.messages[2].text
        assert "LOG Footage Specific Tips" not in raw_result.payload.messages[2].text

    @pytest.mark.asyncio
    async def test_unknown_mood_falls_back_to_natural(self, registry):
        result = await registry.get("color_grade_footage", {"footage_type": "raw", "target_mood": "whimsical"})
        assert "Maintain realistic color balance" in result.payload.messages[2].text

    @pytest.mark.asyncio
    async def test_social_media_description(self, registry):
        result = await registry.get("social_media_content", {"platform": "TikTok", "content_type": "video"})
        assert result.payload.description == "Create video content optimized for TikTok"
        assert "1080x1920" in result.payload.messages[2].text

    def test_social_media_specs_lookup(self):
        assert "1080x1350" in social_media_specs("Instagram", "post")
        assert "15-60 seconds" in social_media_specs("TikTok", "anything")
        assert social_media_specs("MySpace", "post") == "Standard HD specifications"

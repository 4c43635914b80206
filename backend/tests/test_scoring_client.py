import asyncio
import json

import httpx
import pytest

from maturity.pipeline import build_assessment_result
from maturity.prompts import DEFAULT_CATEGORIES, build_system_prompt, build_user_content, resolve_categories
from maturity.scoring_client import ModelOutputError, ScoringClient, ScoringServiceError, parse_model_json
from maturity.settings import Settings, validate_configuration


def make_client(handler):
    return ScoringClient(
        api_key="sk-test",
        base_url="https://llm.example/v1/chat/completions",
        model="test-model",
        transport=httpx.MockTransport(handler),
    )


def run(client, system="sys", user="{}"):
    async def _go():
        try:
            return await client.complete_json(system, user)
        finally:
            await client.aclose()
    return asyncio.run(_go())


def test_complete_json_posts_chat_request():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": '{"scores": {}}'}}]})

    assert run(make_client(handler), "system text", "user text") == '{"scores": {}}'
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"]["model"] == "test-model"
    assert seen["body"]["response_format"] == {"type": "json_object"}
    assert [m["role"] for m in seen["body"]["messages"]] == ["system", "user"]
    assert seen["body"]["messages"][1]["content"] == "user text"


def test_empty_content_reads_as_empty_object():
    def handler(request):
        return httpx.Response(200, json={"choices": [{"message": {"content": None}}]})

    assert run(make_client(handler)) == "{}"


def test_http_error_raises_scoring_service_error():
    def handler(request):
        return httpx.Response(429, json={"error": "rate limited"})

    with pytest.raises(ScoringServiceError, match="429"):
        run(make_client(handler))


def test_unexpected_payload_raises_scoring_service_error():
    def handler(request):
        return httpx.Response(200, json={"choices": []})

    with pytest.raises(ScoringServiceError):
        run(make_client(handler))


def test_transport_error_raises_scoring_service_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ScoringServiceError):
        run(make_client(handler))


def test_missing_api_key(monkeypatch):
    monkeypatch.setattr("maturity.scoring_client.settings.openai_api_key", None)
    with pytest.raises(ValueError):
        ScoringClient()


@pytest.mark.parametrize(
    "text",
    [
        '{"scores": {"data": 2}}',
        'Here you go:\n```json\n{"scores": {"data": 2}}\n```',
        'Result: {"scores": {"data": 2}} -- hope this helps',
    ],
)
def test_parse_model_json(text):
    assert parse_model_json(text) == {"scores": {"data": 2}}


@pytest.mark.parametrize("text", ["", "no json here", "[1, 2, 3]", "{broken"])
def test_parse_model_json_rejects_non_objects(text):
    with pytest.raises(ModelOutputError):
        parse_model_json(text)


def test_build_assessment_result_defaults_missing_sections():
    result = build_assessment_result({"scores": {"overall": 2, "content": 1}})
    assert result.analysis == {}
    assert result.options == {}
    assert result.benchmarks == {}
    assert [s.category for s in result.scores] == ["overall", "content"]
    assert result.growth_simulation_payload()["crawl"] == [
        {"category": "content", "currentScore": 1, "afterScore": 1.6, "benchmarkScore": 3}
    ]


def test_build_assessment_result_ignores_model_growth_simulation():
    result = build_assessment_result({"scores": [], "growthSimulation": {"crawl": {"data": 5}}})
    assert result.growth_simulation_payload() == {"crawl": [], "walk": [], "run": []}


def test_build_assessment_result_from_non_object():
    result = build_assessment_result(["not", "an", "object"])
    assert result.scores == []
    assert result.benchmarks == {}


def test_prompts():
    assert resolve_categories(None) == DEFAULT_CATEGORIES
    assert resolve_categories("data") == DEFAULT_CATEGORIES
    assert resolve_categories(["data", 3]) == ["data", "3"]
    prompt = build_system_prompt("B2C", ["data"])
    assert "SME, B2C" in prompt
    assert '["data"]' in prompt
    assert "B2B/B2C)" in build_system_prompt(None, ["data"])
    content = json.loads(build_user_content("B2C", ["data"], {"q": 1}))
    assert content == {"businessType": "B2C", "selectedCategories": ["data"], "answers": {"q": 1}}


def test_validate_configuration():
    cfg = Settings(OPENAI_API_KEY=None, DATABASE_URL=None)
    settings_named = {d.setting: d.severity for d in validate_configuration(cfg)}
    assert settings_named == {"OPENAI_API_KEY": "warning", "DATABASE_URL": "info"}

    cfg = Settings(OPENAI_API_KEY="sk-test", DATABASE_URL="sqlite://")
    assert validate_configuration(cfg) == []


def test_cors_origin_list():
    assert Settings(CORS_ORIGINS="https://a.example, https://b.example").cors_origin_list == [
        "https://a.example",
        "https://b.example",
    ]
    assert Settings(CORS_ORIGINS=" ").cors_origin_list == ["*"]

# flake8: noqa
import sys
from pathlib import Path

# Ensure project root is on sys.path so `recipe_finder` can be imported when tests are run
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))  # noqa: E402

import json

import httpx
import pytest

from recipe_finder import generation, schemas
from recipe_finder.errors import ConfigurationError, GatewayError
from recipe_finder.gateway import ChatClient


def make_recipe(name="Shakshuka", **fields):
    values = {
        "id": "r1",
        "name": name,
        "description": "Eggs in tomato sauce",
        "cuisine": "Middle Eastern",
        "ingredients": ["eggs", "tomatoes", "onion"],
        "dietary_tags": ["Vegetarian", "Gluten-Free"],
        "prep_time": 10,
        "cook_time": 20,
        "servings": 4,
        "calories": 210,
        "protein": 12.0,
        "carbs": 14.5,
        "fat": 12,
        "difficulty": "easy",
    }
    values.update(fields)
    return schemas.Recipe(**values)


class StubChat:
    def __init__(self, text="generated"):
        self.text = text
        self.calls = []

    def complete(self, messages):
        self.calls.append(messages)
        return self.text


def test_format_recipe_template():
    text = generation.format_recipe(make_recipe())
    assert text.splitlines() == [
        "Recipe: Shakshuka",
        "Ingredients: eggs, tomatoes, onion",
        "Difficulty: easy",
        "Cuisine: Middle Eastern",
        "Dietary Tags: Vegetarian, Gluten-Free",
        "Prep Time: 10 minutes",
        "Cook Time: 20 minutes",
        "Description: Eggs in tomato sauce",
        "Calories: 210",
        "Protein: 12g",
        "Carbs: 14.5g",
        "Fat: 12g",
    ]


def test_format_recipe_without_tags_or_cuisine():
    text = generation.format_recipe(make_recipe(dietary_tags=[], cuisine=None))
    assert "Dietary Tags: none" in text
    assert "Cuisine: none" in text


def test_recipe_context_separator():
    context = generation.build_recipe_context([make_recipe("A"), make_recipe("B")])
    first, second = context.split("\n\n---\n\n")
    assert first.startswith("Recipe: A")
    assert second.startswith("Recipe: B")
    assert generation.build_recipe_context([]) == ""


def test_system_prompt_embeds_context_and_rules():
    prompt = generation.build_system_prompt("CONTEXT BLOCK")
    assert "Available recipes in database:\nCONTEXT BLOCK" in prompt
    assert "1. Prioritize recipes from the database" in prompt
    assert "5. Include clear step-by-step instructions" in prompt


def test_user_prompt_without_preferences_or_filters():
    request = schemas.GenerateRequest(ingredients=["egg", "rice"])
    lines = generation.build_user_prompt(request).split("\n")
    assert lines[0] == "I have these ingredients: egg, rice"
    assert lines[1] == ""
    assert lines[2] == ""
    assert lines[4].startswith("Please suggest 3-5 recipes")


def test_user_prompt_filters_default_to_any():
    request = schemas.GenerateRequest.model_validate(
        {"ingredients": ["egg"], "dietaryPreferences": ["Vegan", "Keto"], "filters": {}}
    )
    prompt = generation.build_user_prompt(request)
    assert "Dietary preferences: Vegan, Keto" in prompt
    assert "Filters: Difficulty=any, Max Time=any minutes" in prompt


@pytest.mark.parametrize("value, expected", [("", None), ("extreme", None), (None, None), ("hard", "hard")])
def test_filters_difficulty_outside_levels_means_any(value, expected):
    filters = schemas.GenerateFilters.model_validate({"difficulty": value})
    assert filters.difficulty == expected


def test_generate_counts_whole_catalog():
    chat = StubChat("three recipes")
    catalog = [make_recipe("A"), make_recipe("B")]
    request = schemas.GenerateRequest(ingredients=["egg"])

    result = generation.generate(request, lambda: catalog, chat)

    assert result.recipes == "three recipes"
    assert result.matched_from_database == 2
    assert len(chat.calls) == 1
    system, user = chat.calls[0]
    assert system["role"] == "system" and "Recipe: B" in system["content"]
    assert user["role"] == "user"


def test_generate_propagates_store_failure():
    chat = StubChat()

    def failing_store():
        raise RuntimeError("store unavailable")

    with pytest.raises(RuntimeError):
        generation.generate(schemas.GenerateRequest(ingredients=["egg"]), failing_store, chat)
    assert chat.calls == []


@pytest.mark.parametrize(
    "exc, expected",
    [
        (GatewayError(429), (429, generation.RATE_LIMIT_MESSAGE)),
        (GatewayError(402), (402, generation.PAYMENT_REQUIRED_MESSAGE)),
        (GatewayError(500), (500, "AI Gateway error: 500")),
        (ConfigurationError("AI_GATEWAY_API_KEY is not configured"),
         (500, "AI_GATEWAY_API_KEY is not configured")),
        (RuntimeError(), (500, "Unknown error occurred")),
    ],
)
def test_describe_failure(exc, expected):
    assert generation.describe_failure(exc) == expected


def test_chat_client_posts_bearer_request():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers["authorization"]
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "hello"}}]})

    chat = ChatClient(
        api_key="secret",
        url="https://gateway.test/v1/chat/completions",
        model="google/gemini-2.5-flash",
        transport=httpx.MockTransport(handler),
    )
    messages = [{"role": "user", "content": "hi"}]

    assert chat.complete(messages) == "hello"
    assert seen["auth"] == "Bearer secret"
    assert seen["url"] == "https://gateway.test/v1/chat/completions"
    assert seen["body"] == {"model": "google/gemini-2.5-flash", "messages": messages}


def test_chat_client_raises_on_error_status():
    chat = ChatClient(
        api_key="secret",
        url="https://gateway.test/v1/chat/completions",
        model="m",
        transport=httpx.MockTransport(lambda request: httpx.Response(402, text="pay up")),
    )
    with pytest.raises(GatewayError) as info:
        chat.complete([{"role": "user", "content": "hi"}])
    assert info.value.status_code == 402
    assert info.value.body == "pay up"


def test_chat_client_requires_api_key():
    calls = []
    chat = ChatClient(
        api_key=None,
        url="https://gateway.test/v1/chat/completions",
        model="m",
        transport=httpx.MockTransport(lambda request: calls.append(request)),
    )
    with pytest.raises(ConfigurationError):
        chat.complete([{"role": "user", "content": "hi"}])
    assert calls == []

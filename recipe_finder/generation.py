"""Recipe generation: catalog context, prompts and the gateway round trip.

The whole catalog is rendered as text and handed to the model together with
the user's ingredients. Matching against the catalog is left to the model.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Protocol, Sequence, Tuple

from . import schemas
from .errors import GatewayError

logger = logging.getLogger(__name__)

RECORD_SEPARATOR = "\n\n---\n\n"

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again in a moment."
PAYMENT_REQUIRED_MESSAGE = "AI service requires payment. Please contact support."
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"

SYSTEM_PROMPT = """You are a culinary AI assistant with access to a recipe database. \
Analyze the available ingredients and dietary preferences, then suggest suitable \
recipes from the database or create new recipes inspired by them.

Available recipes in database:
{context}

When suggesting recipes:
1. Prioritize recipes from the database that match the ingredients
2. Consider dietary preferences and filters
3. If no exact match, suggest creative recipes inspired by the database
4. Always provide detailed nutritional information
5. Include clear step-by-step instructions"""

RESPONSE_FIELDS = """Please suggest 3-5 recipes that I can make with these ingredients. \
For each recipe, provide:
- Name
- Brief description
- List of ingredients needed
- Step-by-step instructions
- Prep and cook time
- Difficulty level
- Nutritional information (calories, protein, carbs, fat)
- Cuisine type
- Relevant dietary tags"""


class ChatCompleter(Protocol):
    def complete(self, messages: List[dict]) -> str:
        ...


@dataclass
class GenerationResult:
    recipes: str
    # total catalog size, not a relevance count
    matched_from_database: int


def _num(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_recipe(recipe: schemas.Recipe) -> str:
    tags = ", ".join(recipe.dietary_tags) or "none"
    return "\n".join([
        f"Recipe: {recipe.name}",
        f"Ingredients: {', '.join(recipe.ingredients)}",
        f"Difficulty: {recipe.difficulty}",
        f"Cuisine: {recipe.cuisine or 'none'}",
        f"Dietary Tags: {tags}",
        f"Prep Time: {_num(recipe.prep_time)} minutes",
        f"Cook Time: {_num(recipe.cook_time)} minutes",
        f"Description: {recipe.description}",
        f"Calories: {_num(recipe.calories)}",
        f"Protein: {_num(recipe.protein)}g",
        f"Carbs: {_num(recipe.carbs)}g",
        f"Fat: {_num(recipe.fat)}g",
    ])


def build_recipe_context(recipes: Sequence[schemas.Recipe]) -> str:
    return RECORD_SEPARATOR.join(format_recipe(r) for r in recipes)


def build_system_prompt(context: str) -> str:
    return SYSTEM_PROMPT.format(context=context)


def build_user_prompt(request: schemas.GenerateRequest) -> str:
    dietary_line = ""
    if request.dietary_preferences:
        dietary_line = f"Dietary preferences: {', '.join(request.dietary_preferences)}"

    filters_line = ""
    if request.filters is not None:
        difficulty = request.filters.difficulty or "any"
        max_time = _num(request.filters.max_time) if request.filters.max_time else "any"
        filters_line = f"Filters: Difficulty={difficulty}, Max Time={max_time} minutes"

    return "\n".join([
        f"I have these ingredients: {', '.join(request.ingredients)}",
        dietary_line,
        filters_line,
        "",
        RESPONSE_FIELDS,
    ])


def build_messages(
    request: schemas.GenerateRequest, recipes: Sequence[schemas.Recipe]
) -> List[dict]:
    return [
        {"role": "system", "content": build_system_prompt(build_recipe_context(recipes))},
        {"role": "user", "content": build_user_prompt(request)},
    ]


def generate(
    request: schemas.GenerateRequest,
    fetch_recipes: Callable[[], List[schemas.Recipe]],
    chat: ChatCompleter,
) -> GenerationResult:
    """Read the catalog, ask the model once and return its text unchanged.

    Any failure propagates; there is no partial result and no retry.
    """
    logger.info(
        "Generating recipes for: ingredients=%s dietary=%s filters=%s",
        request.ingredients,
        request.dietary_preferences,
        request.filters.model_dump(by_alias=True) if request.filters else None,
    )
    recipes = fetch_recipes()
    logger.info("Loaded %d recipes as context", len(recipes))

    text = chat.complete(build_messages(request, recipes))
    logger.debug("Generated recipes: %s", text)
    return GenerationResult(recipes=text, matched_from_database=len(recipes))


def describe_failure(exc: Exception) -> Tuple[int, str]:
    """Map a generation failure to an HTTP status and a user-facing message."""
    if isinstance(exc, GatewayError):
        if exc.status_code == 429:
            return 429, RATE_LIMIT_MESSAGE
        if exc.status_code == 402:
            return 402, PAYMENT_REQUIRED_MESSAGE
        return 500, str(exc)
    return 500, str(exc) or UNKNOWN_ERROR_MESSAGE

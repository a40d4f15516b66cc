from typing import List

from . import schemas

DIFFICULTY_STYLES = {
    "easy": "badge-secondary",
    "medium": "badge-accent",
    "hard": "badge-destructive",
}
DEFAULT_DIFFICULTY_STYLE = "badge-muted"


def difficulty_style(difficulty: str) -> str:
    return DIFFICULTY_STYLES.get(difficulty, DEFAULT_DIFFICULTY_STYLE)


def recipe_card(recipe: schemas.Recipe) -> dict:
    return {
        "id": recipe.id,
        "name": recipe.name,
        "description": recipe.description,
        "image_url": recipe.image_url,
        "difficulty": recipe.difficulty,
        "difficulty_style": difficulty_style(recipe.difficulty),
        "cuisine": recipe.cuisine,
        # only the first two tags fit on a card
        "tags": recipe.dietary_tags[:2],
        "total_time": recipe.prep_time + recipe.cook_time,
        "servings": recipe.servings,
        "calories": recipe.calories,
    }


def recipe_cards(recipes: List[schemas.Recipe]) -> List[dict]:
    return [recipe_card(r) for r in recipes]

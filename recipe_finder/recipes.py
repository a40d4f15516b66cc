import json
from pathlib import Path
from typing import List

from . import schemas


def load_recipes(path) -> List[schemas.RecipeCreate]:
    """Load seed recipes from a JSON file.

    Args:
        path (str or Path): Path to a JSON file holding a list of recipe objects.

    Returns:
        list: validated ``RecipeCreate`` objects, empty when the file is missing.

    Raises:
        pydantic.ValidationError: an entry is missing a name or has a bad
            difficulty or a negative number.
    """
    p = Path(path)
    if not p.exists():
        return []
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    return [schemas.RecipeCreate.model_validate(item) for item in data]

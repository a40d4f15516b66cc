"""State of the generator form.

The page is server-rendered, so the whole form state travels in hidden
fields and every button press is one action applied to it.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from . import schemas

DIETARY_OPTIONS = [
    "Vegetarian", "Vegan", "Gluten-Free", "Dairy-Free",
    "Keto", "Paleo", "Low-Carb", "Nut-Free",
]

DIFFICULTY_LEVELS = ["easy", "medium", "hard"]

EMPTY_INGREDIENTS_MESSAGE = "Please add at least one ingredient"


class EmptyIngredientsError(ValueError):
    pass


@dataclass
class GeneratorForm:
    ingredients: List[str] = field(default_factory=list)
    dietary: List[str] = field(default_factory=list)
    difficulty: str = ""
    max_time: str = ""
    current_ingredient: str = ""

    @classmethod
    def from_form(
        cls,
        ingredients: str = "",
        dietary: Optional[List[str]] = None,
        difficulty: str = "",
        max_time: str = "",
        current_ingredient: str = "",
    ) -> "GeneratorForm":
        # ingredients arrive newline-separated from a hidden textarea
        items = [x for x in ingredients.split("\n") if x.strip()]
        chosen = [d for d in (dietary or []) if d in DIETARY_OPTIONS]
        return cls(
            ingredients=[x.strip() for x in items],
            dietary=chosen,
            difficulty=difficulty if difficulty in DIFFICULTY_LEVELS else "",
            max_time=max_time.strip(),
            current_ingredient=current_ingredient,
        )

    @property
    def ingredients_text(self) -> str:
        return "\n".join(self.ingredients)

    def add_ingredient(self, text: Optional[str] = None):
        value = (self.current_ingredient if text is None else text).strip()
        if value:
            self.ingredients.append(value)
            self.current_ingredient = ""

    def remove_ingredient(self, index: int):
        if 0 <= index < len(self.ingredients):
            self.ingredients = [x for i, x in enumerate(self.ingredients) if i != index]

    def toggle_dietary(self, option: str):
        if option in self.dietary:
            self.dietary = [d for d in self.dietary if d != option]
        elif option in DIETARY_OPTIONS:
            self.dietary = self.dietary + [option]

    def apply(self, action: str) -> bool:
        """Apply one form action. Returns True when generation was requested."""
        name, _, arg = action.partition(":")
        if name == "add":
            self.add_ingredient()
        elif name == "remove":
            try:
                self.remove_ingredient(int(arg))
            except ValueError:
                pass
        elif name == "toggle":
            self.toggle_dietary(arg)
        elif name == "generate":
            return True
        return False

    def parsed_max_time(self) -> Optional[int]:
        try:
            value = int(float(self.max_time))
        except (ValueError, OverflowError):
            return None
        return value if value >= 0 else None

    def to_request(self) -> schemas.GenerateRequest:
        if not self.ingredients:
            raise EmptyIngredientsError(EMPTY_INGREDIENTS_MESSAGE)
        return schemas.GenerateRequest(
            ingredients=list(self.ingredients),
            dietary_preferences=list(self.dietary),
            filters=schemas.GenerateFilters(
                difficulty=self.difficulty or None,
                max_time=self.parsed_max_time(),
            ),
        )

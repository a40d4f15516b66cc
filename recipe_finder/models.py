import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Float, Integer, String, Text

from .db import Base


def _new_id():
    return str(uuid.uuid4())


def _utcnow():
    return datetime.now(timezone.utc)


class Recipe(Base):
    __tablename__ = "recipes"
    __table_args__ = (
        CheckConstraint(
            "difficulty IN ('easy', 'medium', 'hard')", name="ck_recipes_difficulty"
        ),
        CheckConstraint(
            "prep_time >= 0 AND cook_time >= 0 AND servings >= 0 AND calories >= 0"
            " AND protein >= 0 AND carbs >= 0 AND fat >= 0",
            name="ck_recipes_non_negative",
        ),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(200), index=True, nullable=False)
    description = Column(Text, nullable=False, default="")
    cuisine = Column(String(100), nullable=True)
    ingredients = Column(Text, nullable=False, default="[]")  # JSON-encoded list
    dietary_tags = Column(Text, nullable=False, default="[]")  # JSON-encoded list
    prep_time = Column(Integer, nullable=False, default=0)
    cook_time = Column(Integer, nullable=False, default=0)
    servings = Column(Integer, nullable=False, default=1)
    calories = Column(Integer, nullable=False, default=0)
    protein = Column(Float, nullable=False, default=0)
    carbs = Column(Float, nullable=False, default=0)
    fat = Column(Float, nullable=False, default=0)
    difficulty = Column(String(10), nullable=False, default="easy")
    image_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

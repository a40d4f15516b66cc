from typing import List

from sqlalchemy.orm import Session

from . import models, schemas


def get_recipe_by_name(db: Session, name: str):
    return db.query(models.Recipe).filter(models.Recipe.name == name).first()


def get_all_recipes(db: Session, newest_first: bool = False) -> List[schemas.Recipe]:
    """Return every recipe row. There is no filter and no limit."""
    query = db.query(models.Recipe)
    if newest_first:
        query = query.order_by(models.Recipe.created_at.desc())
    return [schemas.Recipe.model_validate(r) for r in query.all()]

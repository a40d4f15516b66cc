import json
import logging
from pathlib import Path

from recipe_finder import crud, models
from recipe_finder.config import configure_logging
from recipe_finder.db import SessionLocal, init_db
from recipe_finder.recipes import load_recipes

logger = logging.getLogger("import_data")


def main():
    configure_logging()
    init_db()
    p = Path(__file__).resolve().parents[1] / 'data' / 'recipes.json'
    if not p.exists():
        logger.warning('%s not found', p)
        return
    db = SessionLocal()
    added = 0
    try:
        for r in load_recipes(p):
            if crud.get_recipe_by_name(db, r.name):
                continue
            fields = r.model_dump()
            fields['ingredients'] = json.dumps(r.ingredients)
            fields['dietary_tags'] = json.dumps(r.dietary_tags)
            db.add(models.Recipe(**fields))
            added += 1
        db.commit()
    finally:
        db.close()
    logger.info('Imported %d recipes', added)


if __name__ == '__main__':
    main()

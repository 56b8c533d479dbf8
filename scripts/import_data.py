from pathlib import Path

from cookbook.db import SessionLocal, init_db
from cookbook.recipes import import_recipes, load_recipes


def main():
    init_db()
    p = Path(__file__).resolve().parents[1] / 'data' / 'recipes.json'
    if not p.exists():
        print('data/recipes.json not found')
        return
    db = SessionLocal()
    try:
        added = import_recipes(db, load_recipes(p))
    finally:
        db.close()
    print(f'Imported {added} recipes')


if __name__ == '__main__':
    main()

"""
Sandbox script for testing the Edamam pool builder against the live API.

This script builds a recipe pool for one query, prints a summary of what came back,
then picks a few random recipes the same way the Streamlit page does.

Prerequisites:
- EDAMAM_APP_ID and EDAMAM_APP_KEY must be set in .env file
- EDAMAM_ACCOUNT_USER if your Edamam app has Active User tracking enabled
- Required packages: requests, pydantic, python-dotenv

Run:
    python -m sandbox.sandbox_edamam [query]
"""

import sys
from pprint import pprint

from recipe_roulette.config import EdamamConfig
from recipe_roulette.presenter import RandomPresenter
from recipe_roulette.search import build_pool


def run():
    """Build a pool for one query and shuffle through it."""
    try:
        query = sys.argv[1] if len(sys.argv) > 1 else "salad"
        config = EdamamConfig.from_env()

        print("=" * 80)
        print("Testing Edamam Pool Builder")
        print("=" * 80)
        print(f"\nQuery: '{query}'")
        print(f"Account user header: {'set' if config.account_user else 'not set'}")
        print(f"Health filters: {', '.join(config.health) or '-'}")
        print(f"Diet filters: {', '.join(config.diet) or '-'}")
        print("\nBuilding pool...\n")

        pool = build_pool(query, config)
        print(f"Pool size: {len(pool)}")

        if pool:
            print("\n=== Breakdown by Source ===")
            by_source = {}
            for recipe in pool:
                source = recipe.source or "unknown"
                by_source[source] = by_source.get(source, 0) + 1
            for source, count in sorted(by_source.items(), key=lambda kv: -kv[1])[:10]:
                print(f"  {source}: {count} recipes")

            missing_images = sum(1 for recipe in pool if not recipe.image)
            print(f"\nRecipes without image: {missing_images}")

            print("\n=== Three Random Picks ===")
            presenter = RandomPresenter(pool_builder=lambda _q: pool)
            presenter.search(query)
            for _ in range(3):
                print(f"  [{presenter.index:3d}] {presenter.current.title}")
                presenter.shuffle()

            print("\n=== Full Details (First Recipe) ===")
            pprint(pool[0].model_dump())
        else:
            print("\n⚠️  No recipes found. This might indicate:")
            print("  - A query with no public recipes")
            print("  - Health/diet filters that exclude everything")

        print("\n" + "=" * 80)

    except Exception as exc:
        print(f"\n❌ Error while building pool: {exc}")
        import traceback
        traceback.print_exc()


if __name__ == "__main__":
    run()

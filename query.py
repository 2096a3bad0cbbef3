#!/usr/bin/env python3
"""Ad hoc runner for SmartChef.

Generate a recipe or build a grocery list without any server.

Usage:
    python query.py generate "mushroom, onion"
    python query.py generate --servings 8 --max-time 20 --difficulty hard "mushroom"
    python query.py generate --cuisine italian --diet vegetarian "chicken, tomato"
    python query.py grocery recipes.json
    python query.py --debug grocery recipes.json  # Show full JSON result

recipes.json holds a JSON list of recipes ({"title", "ingredients": [{"name",
"amount", "category"}], ...}); missing ids and owners are filled in.

Features:
- Recipe generation through the Gemini -> local template chain
- Grocery list aggregation grouped by shopping section
- Debug mode to display the full JSON result
"""

import asyncio
import json
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.markdown import Markdown

from src.generation.generator import RecipeGenerator
from src.grocery.categories import group_by_category
from src.grocery.repository import InMemoryRepository
from src.grocery.service import GroceryListService
from src.models.models import GeneratedRecipe, GroceryItem, Recipe
from src.utils.errors import SmartChefError
from src.utils.logger import logger

console = Console()

CLI_OWNER = "cli"

GENERATE_FLAGS = {
    "--servings": "servings",
    "--max-time": "maxCookTime",
    "--difficulty": "difficulty",
    "--cuisine": "cuisineType",
    "--diet": "dietaryPreferences",
}


def recipe_markdown(recipe: GeneratedRecipe) -> str:
    """Render a generated recipe as markdown."""
    lines = [
        f"# {recipe.title}",
        "",
        f"**Cuisine:** {recipe.cuisine} | **Difficulty:** {recipe.difficulty} | "
        f"**Cook time:** {recipe.cook_time} | **Servings:** {recipe.servings} | "
        f"**Calories:** {recipe.estimated_calories}",
    ]
    if recipe.dietary_tags:
        lines.append(f"**Tags:** {', '.join(recipe.dietary_tags)}")
    lines += ["", "## Ingredients", ""]
    lines += [f"- {' '.join(filter(None, [i.amount, i.name]))} ({i.category.value})" for i in recipe.ingredients]
    lines += ["", "## Instructions", ""]
    lines += [f"{n}. {step}" for n, step in enumerate(recipe.instructions, start=1)]
    return "\n".join(lines)


def grocery_markdown(items: list[GroceryItem]) -> str:
    """Render grocery items as markdown sections in shopping order."""
    lines = ["# Grocery List"]
    for category, members in group_by_category(items).items():
        lines += ["", f"## {category}", ""]
        lines += [f"- [ ] {item.name}" + (f" ({item.amount})" if item.amount else "") for item in members]
    return "\n".join(lines)


def parse_generate_args(args: list[str]) -> dict:
    """Turn `generate` arguments into a GenerationRequest payload."""
    payload: dict = {}
    index = 0
    while index < len(args) and args[index].startswith("--"):
        flag = args[index]
        if flag not in GENERATE_FLAGS:
            raise ValueError(f"Unknown flag: {flag}")
        if index + 1 >= len(args):
            raise ValueError(f"{flag} flag requires a value")
        value = args[index + 1]
        key = GENERATE_FLAGS[flag]
        if key in ("servings", "maxCookTime"):
            payload[key] = int(value)
        elif key == "dietaryPreferences":
            payload[key] = [value]
        else:
            payload[key] = value
        index += 2

    text = " ".join(args[index:])
    payload["ingredients"] = [part.strip() for part in text.split(",") if part.strip()]
    return payload


def load_recipes(path: str) -> list[Recipe]:
    """Read a JSON list of recipes, filling in ids and the CLI owner."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    recipes = []
    for index, raw in enumerate(data, start=1):
        raw = {"id": f"recipe-{index}", **raw, "ownerId": CLI_OWNER}
        raw.pop("owner_id", None)
        recipes.append(Recipe.model_validate(raw))
    return recipes


def run_generate(args: list[str], debug: bool = False) -> None:
    payload = parse_generate_args(args)
    logger.info(f"Generating recipe: {payload}")
    recipe = asyncio.run(RecipeGenerator().generate(payload))

    console.print()
    if debug:
        console.print("[bold cyan]Debug Mode: Full Recipe[/bold cyan]")
        console.print_json(data=recipe.model_dump(mode="json", by_alias=True))
        console.print()
    console.print(Markdown(recipe_markdown(recipe)))


def run_grocery(args: list[str], debug: bool = False) -> None:
    if not args:
        raise ValueError("grocery requires a recipes JSON file")
    recipe_file = Path(args[0])
    if not recipe_file.exists():
        console.print(f"[red]✗ Error: Recipe file not found: {recipe_file}[/red]")
        sys.exit(1)

    recipes = load_recipes(str(recipe_file))
    service = GroceryListService(InMemoryRepository(recipes))
    result = service.from_recipes([recipe.id for recipe in recipes], owner_id=CLI_OWNER)

    console.print()
    if debug:
        console.print("[bold cyan]Debug Mode: Full Result[/bold cyan]")
        console.print_json(data=result.model_dump(mode="json"))
        console.print()
    console.print(Markdown(grocery_markdown(result.items)))


def main(argv: list[str]) -> None:
    debug = False
    if argv and argv[0] == "--debug":
        debug = True
        argv = argv[1:]

    if not argv or argv[0] not in ("generate", "grocery"):
        print('Usage: python query.py [--debug] generate [--servings N] [--max-time N] '
              '[--difficulty D] [--cuisine C] [--diet D] "<ingredients, comma separated>"')
        print("       python query.py [--debug] grocery <recipes.json>")
        sys.exit(1)

    command, args = argv[0], argv[1:]
    try:
        if command == "generate":
            run_generate(args, debug=debug)
        else:
            run_grocery(args, debug=debug)
    except KeyboardInterrupt:
        logger.info("\nQuery interrupted by user.")
        sys.exit(0)
    except (ValidationError, ValueError, SmartChefError) as e:
        console.print(f"[red]✗ Error: {e}[/red]")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Query execution failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main(sys.argv[1:])

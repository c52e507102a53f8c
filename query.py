#!/usr/bin/env python3
"""Ad hoc query runner for Recipe Finder service.

Sends one request to a running service and renders the answer.

Usage:
    python query.py ideas "paneer dinner"
    python query.py ideas --category quick-curries --ingredient paneer --ingredient spinach
    python query.py recipe "Palak Paneer" --category quick-curries
    python query.py categories
    python query.py --debug ideas "paneer dinner"   # Show full JSON response
    python query.py --url http://localhost:3000 categories

Features:
- Ideas rendered as a table with image links
- Recipe detail rendered as markdown
- Debug mode to display the raw JSON body
- Exit status 1 on error responses or connection failures
"""

import sys
from typing import Any, Optional

import httpx
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from src.utils.config import config

console = Console()

REQUEST_TIMEOUT = 60  # Seconds; covers the upstream LLM call plus image lookups
COMMANDS = ("ideas", "recipe", "categories")

USAGE = 'Usage: python query.py [--debug] [--url URL] (ideas|recipe|categories) [--category ID] [--ingredient NAME]... ["<text>"]'


def build_request(command: str, text: str, category_id: Optional[str], ingredients: list[str]) -> tuple[str, str, Optional[dict]]:
    """Map a command to (method, path, JSON body)."""
    if command == "categories":
        return "GET", "/api/categories", None

    body: dict[str, Any] = {}
    if command == "ideas" and text:
        body["query"] = text
    if command == "recipe":
        body["title"] = text
    if category_id:
        body["categoryId"] = category_id
    if ingredients:
        body["ingredients"] = ingredients
    return "POST", f"/api/{'ideas' if command == 'ideas' else 'recipe'}", body


def render_ideas(data: dict) -> None:
    ideas = data.get("ideas") or []
    if not ideas:
        console.print("[yellow]No ideas returned[/yellow]")
        return
    table = Table(title=f"{len(ideas)} recipe ideas")
    table.add_column("id", style="cyan")
    table.add_column("title", style="bold")
    table.add_column("blurb")
    table.add_column("image", overflow="fold")
    for idea in ideas:
        table.add_row(idea.get("id", ""), idea.get("title", ""), idea.get("blurb", ""), idea.get("imageUrl", ""))
    console.print(table)


def recipe_to_markdown(recipe: dict) -> str:
    """Format a recipe detail body as markdown."""
    lines = [f"# {recipe.get('title', '')}", ""]
    meta = [f"Serves {recipe.get('servings')}", f"{recipe.get('totalTimeMinutes')} min"]
    if recipe.get("category"):
        meta.insert(0, recipe["category"])
    lines += [" · ".join(meta), ""]

    lines += ["## Ingredients", ""] + [f"- {item}" for item in recipe.get("ingredients", [])] + [""]
    lines += ["## Steps", ""] + [f"{i}. {step}" for i, step in enumerate(recipe.get("steps", []), 1)] + [""]
    if recipe.get("tips"):
        lines += ["## Tips", ""] + [f"- {tip}" for tip in recipe["tips"]] + [""]
    if recipe.get("imageUrl"):
        lines.append(f"Image: {recipe['imageUrl']}")
    return "\n".join(lines)


def render_recipe(data: dict) -> None:
    recipe = data.get("recipe")
    if not recipe:
        console.print("[yellow]The model returned no recipe[/yellow]")
        return
    console.print(Markdown(recipe_to_markdown(recipe)))


def render_categories(data: dict) -> None:
    table = Table(title="Categories")
    table.add_column("id", style="cyan")
    table.add_column("title", style="bold")
    table.add_column("summary")
    for category in data.get("categories", []):
        table.add_row(category["id"], category["title"], category["summary"])
    console.print(table)


RENDERERS = {"ideas": render_ideas, "recipe": render_recipe, "categories": render_categories}


def run_query(
    command: str,
    text: str = "",
    category_id: Optional[str] = None,
    ingredients: Optional[list[str]] = None,
    base_url: Optional[str] = None,
    debug: bool = False,
    client: Optional[httpx.Client] = None,
) -> int:
    """Execute a single request against the service and print the response.

    Returns:
        Process exit status (0 on success, 1 on error response or connection failure).
    """
    method, path, body = build_request(command, text, category_id, ingredients or [])
    base_url = base_url or f"http://{config.HOST}:{config.PORT}"

    try:
        if client is None:
            with httpx.Client(base_url=base_url, timeout=REQUEST_TIMEOUT) as own_client:
                response = own_client.request(method, path, json=body)
        else:
            response = client.request(method, path, json=body)
    except httpx.HTTPError as e:
        console.print(f"[red]✗ Cannot reach {base_url}: {e}[/red]")
        return 1

    try:
        data = response.json()
    except ValueError:
        data = {"error": response.text}
    if debug:
        console.print("[bold cyan]Debug Mode: Full Response[/bold cyan]")
        console.print_json(data=data)
        console.print()

    if response.status_code != 200:
        console.print(f"[red]✗ {response.status_code}: {data.get('error', 'unknown error')}[/red]")
        return 1

    RENDERERS[command](data)
    return 0


def parse_args(argv: list[str]) -> dict[str, Any]:
    """Parse flags and positional arguments.

    Raises:
        ValueError: On unknown flags, missing flag values or a missing command.
    """
    options: dict[str, Any] = {"debug": False, "base_url": None, "category_id": None, "ingredients": []}
    positional: list[str] = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--debug":
            options["debug"] = True
        elif arg in ("--url", "--category", "--ingredient"):
            if i + 1 >= len(argv):
                raise ValueError(f"{arg} flag requires a value")
            value = argv[i + 1]
            if arg == "--url":
                options["base_url"] = value
            elif arg == "--category":
                options["category_id"] = value
            else:
                options["ingredients"].append(value)
            i += 1
        elif arg.startswith("--"):
            raise ValueError(f"Unknown flag: {arg}")
        else:
            positional.append(arg)
        i += 1

    if not positional or positional[0] not in COMMANDS:
        raise ValueError(f"Command must be one of: {', '.join(COMMANDS)}")
    options["command"] = positional[0]
    # Join remaining arguments as the text (handles unquoted queries with spaces)
    options["text"] = " ".join(positional[1:])
    return options


if __name__ == "__main__":
    try:
        parsed = parse_args(sys.argv[1:])
    except ValueError as e:
        print(f"Error: {e}")
        print(USAGE)
        sys.exit(1)

    sys.exit(run_query(**parsed))

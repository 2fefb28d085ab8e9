"""Category CLI commands.

Categories carry an experience ledger; completing a categorized subtask
adds XP to it.
"""

import typer

from devfocus.application import (
    apply_xp,
    create_category,
    delete_category,
    get_all_category_stats,
    get_category_experience,
    list_categories,
)
from devfocus.interfaces.cli.common import (
    DbOption,
    JsonOption,
    open_store,
    print_header,
    print_info,
    print_json,
    print_success,
    unwrap,
)

app = typer.Typer(help="Category and experience commands")

PROGRESS_WIDTH = 20


def _progress_bar(percent: float) -> str:
    filled = int(round(percent / 100 * PROGRESS_WIDTH))
    return "#" * filled + "-" * (PROGRESS_WIDTH - filled)


@app.command("create")
def create(
    name: str = typer.Argument(..., help="Category name (stored lower-case)"),
    color: str = typer.Argument(..., help="Display colour as #rrggbb"),
    db: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Create a category with an empty experience ledger."""
    with open_store(db) as store:
        category = unwrap(create_category(store, name, color))
    if as_json:
        print_json(category)
        return
    print_success(f"Created category {category.name} ({category.id})")


@app.command("list")
def list_all(
    db: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """List categories by name."""
    with open_store(db) as store:
        categories = unwrap(list_categories(store))
    if as_json:
        print_json(categories)
        return
    for category in categories:
        typer.echo(f"{category.id}  {category.color}  {category.name}")


@app.command("stats")
def stats(
    db: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Show XP, level and progress for every category."""
    with open_store(db) as store:
        all_stats = unwrap(get_all_category_stats(store))
    if as_json:
        print_json(all_stats)
        return
    print_header("CATEGORIES")
    for entry in all_stats:
        typer.echo(
            f"{entry.category.name:<14} lvl {entry.level:<3} "
            f"[{_progress_bar(entry.progress_percent)}] "
            f"{entry.total_xp}/{entry.xp_for_next_level} XP"
        )


@app.command("xp")
def experience(
    category_id: str = typer.Argument(..., help="Category ID"),
    db: DbOption = None,
    as_json: JsonOption = False,
) -> None:
    """Show a category's experience ledger."""
    with open_store(db) as store:
        ledger = unwrap(get_category_experience(store, category_id))
    if as_json:
        print_json(ledger)
        return
    typer.echo(f"level {ledger.level}, {ledger.total_xp} XP (updated {ledger.updated_at})")


@app.command("grant")
def grant(
    category_id: str = typer.Argument(..., help="Category ID"),
    amount: int = typer.Argument(..., help="XP to add", min=0),
    db: DbOption = None,
) -> None:
    """Add XP to a category by hand."""
    with open_store(db) as store:
        ledger = unwrap(apply_xp(store, category_id, amount))
    print_info(f"{ledger.total_xp} XP, level {ledger.level}")


@app.command("delete")
def delete(
    category_id: str = typer.Argument(..., help="Category ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    db: DbOption = None,
) -> None:
    """Delete a category; its subtasks become uncategorized."""
    if not yes:
        typer.confirm(f"Delete category {category_id} and its XP?", abort=True)
    with open_store(db) as store:
        unwrap(delete_category(store, category_id))
    print_success(f"Deleted category {category_id}")

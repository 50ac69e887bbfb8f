#!/usr/bin/env python3
"""River restoration database CLI for setup and maintenance."""

import argparse
from pathlib import Path

import questionary
from rich.console import Console
from rich.table import Table

from riverdb import db
from riverdb.factor.categories import CATEGORIES

console = Console()

MIGRATIONS_DIR = Path(__file__).parent.parent.parent / "migrations"


def init_db():
    """Apply every SQL migration in name order."""
    migrations = sorted(MIGRATIONS_DIR.glob("*.sql"))
    if not migrations:
        console.print(f"[red]No migrations found in {MIGRATIONS_DIR}.[/]")
        return

    console.print(f"[yellow]Will apply {len(migrations)} migration(s):[/]")
    for path in migrations:
        console.print(f"  {path.name}")

    if not questionary.confirm("Proceed with these changes?").ask():
        console.print("[dim]Cancelled.[/]")
        return

    for path in migrations:
        db.execute(path.read_text())
        console.print(f"[green]Applied {path.name}.[/]")


def seed_factors():
    """Insert the bundled reference factors."""
    from riverdb.factor.seed import SEED_FACTORS, seed_factors as run_seed

    total = sum(len(factors) for factors in SEED_FACTORS.values())
    console.print(
        f"[yellow]Will seed up to [bold]{total}[/] factors across "
        f"{len(SEED_FACTORS)} categories (existing names are skipped).[/]"
    )

    if not questionary.confirm("Proceed with these changes?").ask():
        console.print("[dim]Cancelled.[/]")
        return

    created = run_seed()
    for category, count in created.items():
        console.print(f"  {category}: {count} created")
    console.print(f"[green]Seeded {sum(created.values())} factors.[/]")


def show_stats():
    """Print project totals and per-category factor usage."""
    from riverdb.statistics import StatisticsService

    service = StatisticsService()
    footer = service.footer_stats()
    console.print(
        f"[bold]{footer['totalProjects']}[/] projects in "
        f"[bold]{footer['totalCountries']}[/] countries"
    )

    for category in CATEGORIES:
        table = Table(title=category.table.replace("_", " ").title())
        table.add_column("Name")
        table.add_column("Projects", justify="right")
        for row in service.usage_counts(category.key):
            table.add_row(row["name"], str(row["project_count"]))
        console.print(table)


def classify_point(latitude: float, longitude: float):
    from riverdb.country import classify

    console.print(classify(latitude, longitude))


def main():
    parser = argparse.ArgumentParser(description="River restoration database CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Apply database migrations")
    subparsers.add_parser("seed-factors", help="Seed reference factors")
    subparsers.add_parser("stats", help="Show project and factor statistics")
    classify_parser = subparsers.add_parser("classify", help="Country label for a point")
    classify_parser.add_argument("latitude", type=float)
    classify_parser.add_argument("longitude", type=float)

    args = parser.parse_args()

    if args.command == "init-db":
        init_db()
    elif args.command == "seed-factors":
        seed_factors()
    elif args.command == "stats":
        show_stats()
    elif args.command == "classify":
        classify_point(args.latitude, args.longitude)


if __name__ == "__main__":
    main()

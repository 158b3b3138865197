# paydesk/extensions.py
from __future__ import annotations
import click

from .services.storage_service import MemStorage, init_storage, get_storage
from .services.seed_service import seed_demo_data


def init_extensions(app, storage: MemStorage | None = None):
    store = init_storage(app, storage)
    if app.config.get("SEED_DEMO_DATA"):
        seed_demo_data(store)
    return store


def register_cli(app):
    @app.cli.command("seed-demo")
    def seed_demo_cmd():
        """Load the demo developers and their pending test-project payments."""
        created = seed_demo_data(get_storage())
        click.echo(f"Seeded {created} demo payment(s).")

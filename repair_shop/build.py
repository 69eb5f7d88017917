"""
Database build for the repair shop order system.

Creates the tables of every registered model and optionally loads the input
catalog from a JSON file (a list of objects with name, price, quantity,
input_type and an optional description).
"""

import json
from pathlib import Path

from repair_shop import db
from repair_shop.logger import get_logger

logger = get_logger("repair_shop.build")


def build_database(drop_existing=False):
    """
    Create all tables.

    Args:
        drop_existing (bool): Drop every table first (destroys data)
    """
    if drop_existing:
        logger.warning("Dropping all tables")
        db.drop_all()
    db.create_all()
    logger.info("Database tables created")


def load_input_catalog(catalog_path):
    """
    Insert catalog inputs from a JSON file, skipping names that already exist.

    Args:
        catalog_path (str | Path): Path to the JSON catalog

    Returns:
        list: The newly created Input instances
    """
    from repair_shop.data.inventory.input import Input

    entries = json.loads(Path(catalog_path).read_text(encoding='utf-8'))
    existing_names = {name for (name,) in db.session.query(Input.name).all()}
    new_entries = [entry for entry in entries if entry.get('name') not in existing_names]

    skipped = len(entries) - len(new_entries)
    if skipped:
        logger.info(f"Skipping {skipped} catalog inputs that already exist")

    created = Input.bulk_create_from_dicts(new_entries)
    logger.info(f"Loaded {len(created)} catalog inputs from {catalog_path}")
    return created

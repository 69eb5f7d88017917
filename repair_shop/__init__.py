from flask import Flask
from flask_sqlalchemy import SQLAlchemy
import os
from repair_shop.logger import get_logger

# Initialize extensions
db = SQLAlchemy()


def _env_flag(name, default='False'):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def create_app(config_overrides=None):
    from pathlib import Path

    app = Flask(__name__)

    # Get singleton logger
    logger = get_logger("repair_shop")
    logger.info("Initializing repair shop application")

    # Prefer an explicit DATABASE_URL env var; if not provided, store the
    # SQLite database inside the project's `instance/` directory.
    db_env = os.environ.get('DATABASE_URL')
    if db_env:
        app.config['SQLALCHEMY_DATABASE_URI'] = db_env
    else:
        base_dir = Path(__file__).parent.parent
        instance_dir = base_dir / 'instance'
        instance_dir.mkdir(parents=True, exist_ok=True)
        default_db_path = instance_dir / 'repair_shop.db'
        app.config['SQLALCHEMY_DATABASE_URI'] = f"sqlite:///{str(default_db_path.resolve())}"

    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['SQLALCHEMY_ECHO'] = _env_flag('SQLALCHEMY_ECHO')

    if config_overrides:
        app.config.update(config_overrides)

    logger.debug(f"Database configured: {app.config['SQLALCHEMY_DATABASE_URI'].split(':', 1)[0]}")

    db.init_app(app)

    # Import models to ensure they're registered with SQLAlchemy
    from repair_shop.data.core.customer import Customer
    from repair_shop.data.core.vehicle import Vehicle
    from repair_shop.data.inventory.input import Input
    from repair_shop.data.orders.order import Order
    from repair_shop.data.orders.order_input import OrderInput
    from repair_shop.data.orders.order_status_history import OrderStatusHistory

    logger.debug("Models imported and registered")
    logger.info("Repair shop application initialization complete")

    return app

from repair_shop import db
from datetime import datetime, timezone
from sqlalchemy.orm import declared_attr
from repair_shop.business.core.data_insertion_mixin import DataInsertionMixin


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in DateTime columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampedBase(db.Model, DataInsertionMixin):
    """Abstract base class for all repair shop records with audit timestamps"""

    __abstract__ = True

    @declared_attr
    def __tablename__(cls):
        return cls.__name__.lower() + 's'

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

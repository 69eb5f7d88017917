"""
Generic data insertion mixin for SQLAlchemy models
Provides from_dict and to_dict methods for automatic data insertion

Mixed into the shared model base so every record (orders, inputs, line items,
status history) serializes the same way for the overview read model and for
catalog seeding.
"""

from repair_shop import db
from datetime import datetime
from sqlalchemy import inspect
from repair_shop.logger import get_logger

logger = get_logger("repair_shop.business.core.data_insertion")


class DataInsertionMixin:
    """
    Mixin that provides generic data insertion capabilities for SQLAlchemy models

    This mixin adds:
    - from_dict(): Create model instance from dictionary
    - to_dict(): Convert model instance to dictionary
    - create_from_dict(): Create and add a model instance from dictionary
    - bulk_create_from_dicts(): Create multiple instances from list of dictionaries
    """

    @classmethod
    def from_dict(cls, data_dict, skip_fields=None):
        """
        Create a model instance from a dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            skip_fields (list, optional): Fields to skip during creation

        Returns:
            Model instance (not saved to database)
        """
        if skip_fields is None:
            skip_fields = []

        mapper = inspect(cls)
        columns = {c.key: c for c in mapper.columns}

        # Filter data to only include valid columns
        filtered_data = {}
        for key, value in data_dict.items():
            if key in columns and key not in skip_fields:
                if key in ['created_at', 'updated_at'] and value is None:
                    # Skip timestamp fields if None
                    continue
                filtered_data[key] = value

        return cls(**filtered_data)

    def to_dict(self, include_audit_fields=True):
        """
        Convert model instance to dictionary

        Args:
            include_audit_fields (bool): Whether to include created_at/updated_at

        Returns:
            dict: Dictionary representation of the model
        """
        result = {}

        mapper = inspect(self.__class__)

        for column in mapper.columns:
            value = getattr(self, column.key)

            if not include_audit_fields and column.key in ['created_at', 'updated_at']:
                continue

            # Handle datetime serialization
            if isinstance(value, datetime):
                result[column.key] = value.isoformat()
            else:
                result[column.key] = value

        return result

    @classmethod
    def create_from_dict(cls, data_dict, skip_fields=None, commit=True):
        """
        Create and save a model instance from dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            skip_fields (list, optional): Fields to skip during creation
            commit (bool): Whether to commit the transaction

        Returns:
            Model instance (saved to database, or flushed when commit is False)
        """
        instance = cls.from_dict(data_dict, skip_fields)

        try:
            db.session.add(instance)
            if commit:
                db.session.commit()
                logger.info(f"Created {cls.__name__}: {instance}")
            else:
                db.session.flush()
            return instance
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error creating {cls.__name__}: {e}")
            raise

    @classmethod
    def bulk_create_from_dicts(cls, data_list, skip_fields=None, commit=True):
        """
        Create multiple model instances from list of dictionaries

        Args:
            data_list (list): List of dictionaries containing model data
            skip_fields (list, optional): Fields to skip during creation
            commit (bool): Whether to commit the transaction

        Returns:
            list: List of created model instances
        """
        instances = []

        for data_dict in data_list:
            instance = cls.from_dict(data_dict, skip_fields)
            instances.append(instance)
            db.session.add(instance)

        try:
            if commit:
                db.session.commit()
                logger.info(f"Created {len(instances)} {cls.__name__} instances")
            return instances
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error bulk creating {cls.__name__}: {e}")
            raise

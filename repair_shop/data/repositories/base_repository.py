"""
Storage adapters used by the order fulfillment components.

Repositories work on the Flask-SQLAlchemy scoped session. They flush so
generated ids and constraint violations surface immediately, but they never
commit: the enclosing ``atomic`` block owns the transaction.
"""

from typing import Generic, Optional, Type, TypeVar

from repair_shop import db

ModelT = TypeVar('ModelT')


class BaseRepository(Generic[ModelT]):
    """Create/find/update/delete over a single model"""

    model: Type[ModelT] = None

    def _query(self, for_update: bool = False):
        query = self.model.query
        if for_update:
            # Re-read current column values and hold the row lock until commit
            query = query.populate_existing().with_for_update()
        return query

    def create(self, instance: ModelT) -> ModelT:
        db.session.add(instance)
        db.session.flush()
        return instance

    def find_by_id(self, record_id, for_update: bool = False) -> Optional[ModelT]:
        return self._query(for_update).filter_by(id=record_id).first()

    def update(self, instance: ModelT) -> ModelT:
        db.session.add(instance)
        db.session.flush()
        return instance

    def delete(self, instance: ModelT) -> None:
        db.session.delete(instance)
        db.session.flush()

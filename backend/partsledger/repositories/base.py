"""
Generic repository. Methods flush but never commit: the calling service owns
the transaction boundary.
"""
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from partsledger.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):

    def __init__(self, model: Type[ModelT], db: Session):
        self.model = model
        self.db = db

    def get_by_id(self, entity_id: int) -> Optional[ModelT]:
        return self.db.get(self.model, entity_id)

    def list_all(self) -> List[ModelT]:
        return self.db.query(self.model).order_by(self.model.id).all()

    def add(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        self.db.flush()
        return entity

    def update(self, entity: ModelT, updates: dict) -> ModelT:
        for key, value in updates.items():
            setattr(entity, key, value)
        self.db.flush()
        return entity

    def delete(self, entity: ModelT) -> None:
        self.db.delete(entity)
        self.db.flush()

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

T = TypeVar("T", bound=SQLModel)

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Custom exception for repository errors."""

    pass


class BaseRepository(Generic[T]):
    model: Type[T]
    # Fields that are set once at insert and never overwritten
    immutable_fields = ("id", "created_at")

    def __init__(
        self,
        get_session: Callable[..., AsyncSession],
        get_now: Optional[Callable[[], datetime]] = None,
    ):
        self.get_session = get_session
        self.get_now = get_now

    def _handle_db_error(self, error: SQLAlchemyError, operation: str) -> None:
        """Handle database errors and raise appropriate exceptions."""
        logger.error("%s.%s failed: %s", self.model.__name__, operation, error)
        if isinstance(error, IntegrityError):
            raise RepositoryError(
                f"Database integrity error during {operation}: {error}"
            ) from error
        else:
            raise RepositoryError(
                f"Database error during {operation}: {error}"
            ) from error

    def _build_select_stmt(self, **filters) -> Any:
        """Build select statement with optional equality filters."""
        stmt = select(self.model)

        for field, value in filters.items():
            if hasattr(self.model, field):
                stmt = stmt.where(getattr(self.model, field) == value)

        return stmt.order_by(self.model.id)  # type: ignore

    def _stamp(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Set created_at from the injected clock when the caller left it out."""
        if self.get_now is not None and data.get("created_at") is None:
            data["created_at"] = self.get_now()
        return data

    @staticmethod
    def _as_dict(obj_in: Union[Dict[str, Any], BaseModel]) -> Dict[str, Any]:
        if isinstance(obj_in, BaseModel):
            return obj_in.model_dump(exclude_unset=True)
        return dict(obj_in)

    # ----------------- READ ----------------- #
    async def get(self, item_id: Any) -> Optional[T]:
        """Get a single item by ID."""
        async with self.get_session() as db:
            try:
                return await db.get(self.model, item_id)
            except SQLAlchemyError as e:
                self._handle_db_error(e, "get")

    async def get_one(self, **filters) -> Optional[T]:
        """Get the first item matching the filters."""
        async with self.get_session() as db:
            try:
                result = await db.exec(self._build_select_stmt(**filters))
                return result.first()
            except SQLAlchemyError as e:
                self._handle_db_error(e, "get_one")

    async def get_many(self, **filters) -> List[T]:  # type:ignore
        """Get every item matching the filters, ordered by ID."""
        async with self.get_session() as db:
            try:
                result = await db.exec(self._build_select_stmt(**filters))
                return list(result.all())
            except SQLAlchemyError as e:
                self._handle_db_error(e, "get_many")

    async def count(self, **filters) -> int:  # type:ignore
        """Count items matching optional filters."""
        async with self.get_session() as db:
            try:
                stmt = self._build_select_stmt(**filters).order_by(None)
                count_stmt = select(func.count()).select_from(stmt.subquery())
                result = await db.exec(count_stmt)
                return result.one()
            except SQLAlchemyError as e:
                self._handle_db_error(e, "count")

    # ----------------- WRITE ----------------- #
    async def create(
        self, obj_in: Union[Dict[str, Any], BaseModel]
    ) -> T:  # type:ignore
        """Create a new item."""
        data = self._stamp(self._as_dict(obj_in))

        async with self.get_session() as db:
            try:
                obj = self.model(**data)  # type: ignore
                db.add(obj)
                await db.commit()
                await db.refresh(obj)
                return obj
            except SQLAlchemyError as e:
                await db.rollback()
                self._handle_db_error(e, "create")

    async def create_many(
        self, objects_in: List[Union[Dict[str, Any], BaseModel]]
    ) -> List[T]:  # type:ignore
        """Create multiple items at once."""
        objects_data = [self._stamp(self._as_dict(obj)) for obj in objects_in]

        async with self.get_session() as db:
            try:
                objects = [self.model(**data) for data in objects_data]  # type: ignore
                db.add_all(objects)
                await db.commit()

                for obj in objects:
                    await db.refresh(obj)

                return objects
            except SQLAlchemyError as e:
                await db.rollback()
                self._handle_db_error(e, "create_many")

    async def replace(
        self, item_id: Any, obj_in: Union[Dict[str, Any], BaseModel]
    ) -> Optional[T]:
        """Overwrite the mutable fields of an existing item."""
        data = self._as_dict(obj_in)
        for field in self.immutable_fields:
            data.pop(field, None)

        if not data:
            raise RepositoryError("No data provided for replace")

        async with self.get_session() as db:
            try:
                db_obj = await db.get(self.model, item_id)
                if not db_obj:
                    return None

                for key, value in data.items():
                    if hasattr(db_obj, key):
                        setattr(db_obj, key, value)

                await db.commit()
                await db.refresh(db_obj)
                return db_obj
            except SQLAlchemyError as e:
                await db.rollback()
                self._handle_db_error(e, "replace")

    async def delete(self, item_id: Any) -> bool:  # type:ignore
        """Permanently delete the item from DB."""
        async with self.get_session() as db:
            try:
                db_obj = await db.get(self.model, item_id)
                if not db_obj:
                    return False

                await db.delete(db_obj)
                await db.commit()
                return True
            except SQLAlchemyError as e:
                await db.rollback()
                self._handle_db_error(e, "delete")

import logging
from datetime import tzinfo
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlmodel import SQLModel

from blog_api.core import exceptions
from blog_api.core.bases.base_repository import BaseRepository, RepositoryError
from blog_api.core.response.schemas import ErrorDetail

T = TypeVar("T", bound=SQLModel)

logger = logging.getLogger(__name__)


class BaseService(Generic[T]):
    """Base service translating repository results into service exceptions."""

    # Must provide ``from_document(item, tz=...)``
    response_schema: Type[Any]

    def __init__(self, repository: BaseRepository[T], tz: Optional[tzinfo] = None):
        self.repository = repository
        self.tz = tz

    @property
    def model_name(self) -> str:
        return self.repository.model.__name__

    # ----------------- Mapping hooks ----------------- #
    def _to_document(self, data: BaseModel) -> Dict[str, Any]:
        """Convert an incoming schema into stored fields."""
        return data.to_document()  # type: ignore[attr-defined]

    def _to_response(self, item: T) -> Any:
        """Convert a stored item into its API representation."""
        return self.response_schema.from_document(item, tz=self.tz)

    # ----------------- Validation hooks ----------------- #
    async def _validate_create(self, create_data: Dict[str, Any]) -> None:
        pass

    async def _validate_update(
        self, item_id: Any, update_data: BaseModel, existing_item: T
    ) -> None:
        body_id = getattr(update_data, "id", item_id)
        if body_id != item_id:
            raise exceptions.ValidationException(
                f"Path id {item_id} does not match body id {body_id}",
                error_details=[
                    ErrorDetail(
                        field="id",
                        code="ID_MISMATCH",
                        message="Body id must match the path id",
                        target="body",
                    )
                ],
            )

    async def _validate_delete(self, item_id: Any, existing_item: T) -> None:
        pass

    # ----------------- Operations ----------------- #
    async def _get_existing(self, item_id: Any) -> T:
        item = await self.repository.get(item_id)
        if item is None:
            raise exceptions.NotFoundException(
                f"{self.model_name} with id {item_id} not found"
            )
        return item

    async def get_all(self) -> List[Any]:
        try:
            items = await self.repository.get_many()
        except RepositoryError as e:
            raise exceptions.ServiceException(str(e)) from e
        return [self._to_response(item) for item in items]

    async def get_by_id(self, item_id: Any) -> Any:
        try:
            item = await self._get_existing(item_id)
        except RepositoryError as e:
            raise exceptions.ServiceException(str(e)) from e
        return self._to_response(item)

    async def create(self, data: BaseModel) -> Any:
        document = self._to_document(data)
        await self._validate_create(document)
        try:
            item = await self.repository.create(document)
        except RepositoryError as e:
            raise exceptions.ServiceException(str(e)) from e
        logger.info("Created %s %s", self.model_name, item.id)  # type: ignore
        return self._to_response(item)

    async def replace(self, item_id: Any, data: BaseModel) -> None:
        try:
            existing = await self._get_existing(item_id)
            await self._validate_update(item_id, data, existing)
            item = await self.repository.replace(item_id, self._to_document(data))
        except RepositoryError as e:
            raise exceptions.ServiceException(str(e)) from e
        if item is None:
            # Removed between the lookup and the write
            raise exceptions.NotFoundException(
                f"{self.model_name} with id {item_id} not found"
            )
        logger.info("Replaced %s %s", self.model_name, item_id)

    async def delete(self, item_id: Any) -> None:
        try:
            existing = await self._get_existing(item_id)
            await self._validate_delete(item_id, existing)
            deleted = await self.repository.delete(item_id)
        except RepositoryError as e:
            raise exceptions.ServiceException(str(e)) from e
        if not deleted:
            raise exceptions.NotFoundException(
                f"{self.model_name} with id {item_id} not found"
            )
        logger.info("Deleted %s %s", self.model_name, item_id)

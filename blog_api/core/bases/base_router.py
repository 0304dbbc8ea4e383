import logging
from typing import Callable, List, Optional, Type

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from blog_api.core import exceptions
from blog_api.core.bases.base_service import BaseService
from blog_api.core.response.handlers import error_response

logger = logging.getLogger(__name__)


class BaseRouter:
    """Base router class with automatic CRUD endpoints."""

    def __init__(
        self,
        get_service: Callable[..., BaseService],
        tags: Optional[List[str]] = None,
        prefix: str = "",
        create_schema: Optional[Type[BaseModel]] = None,
        update_schema: Optional[Type[BaseModel]] = None,
        response_schema: Optional[Type[BaseModel]] = None,
    ):
        self.get_service = get_service
        self.tags = tags or [self.__class__.__name__.replace("Router", "")]
        self.prefix = prefix
        self.create_schema = create_schema
        self.update_schema = update_schema
        self.response_schema = response_schema

        self.router = APIRouter(
            prefix=self.prefix,
            tags=self.tags, #type:ignore
        )

        self._register_routes()

    def _register_routes(self) -> None:
        """Register all CRUD routes."""
        self._register_list()
        self._register_get_by_id()
        self._register_create()
        self._register_update()
        self._register_delete()

    @staticmethod
    def _not_found(e: exceptions.NotFoundException):
        return error_response(
            error_code="NOT_FOUND",
            message=str(e.detail),
            status_code=status.HTTP_404_NOT_FOUND
        )

    @staticmethod
    def _service_error(e: exceptions.ServiceException):
        # Store errors carry SQL text; keep it in the log only
        logger.error("Service error: %s", e.detail)
        return error_response(
            error_code="SERVICE_ERROR",
            message="The request could not be completed",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    def _register_list(self) -> None:
        """Register GET / route."""
        get_service = self.get_service
        response_model = List[self.response_schema] if self.response_schema else None  # type: ignore

        @self.router.get(
            "",
            response_model=response_model,
            summary="List items",
            responses={
                200: {"description": "Items retrieved successfully"},
                500: {"description": "Internal server error"}
            }
        )
        async def list_items(service: BaseService = Depends(get_service)):
            try:
                return await service.get_all()
            except exceptions.ServiceException as e:
                return self._service_error(e)

    def _register_get_by_id(self) -> None:
        """Register GET /{item_id} route."""
        get_service = self.get_service

        @self.router.get(
            "/{item_id}",
            response_model=self.response_schema,
            summary="Get item by ID",
            responses={
                200: {"description": "Item retrieved successfully"},
                404: {"description": "Item not found"},
                422: {"description": "Malformed identifier"},
                500: {"description": "Internal server error"}
            }
        )
        async def get_by_id(item_id: int, service: BaseService = Depends(get_service)):
            try:
                return await service.get_by_id(item_id)
            except exceptions.NotFoundException as e:
                return self._not_found(e)
            except exceptions.ServiceException as e:
                return self._service_error(e)

    def _register_create(self) -> None:
        """Register POST / route."""
        if not self.create_schema:
            return
        get_service = self.get_service

        @self.router.post(
            "",
            response_model=self.response_schema,
            status_code=status.HTTP_201_CREATED,
            summary="Create new item",
            responses={
                201: {"description": "Item created successfully"},
                422: {"description": "Validation error"},
                500: {"description": "Internal server error"}
            }
        )
        async def create_item(
            item_data: self.create_schema,  # type: ignore
            service: BaseService = Depends(get_service)
        ):
            try:
                return await service.create(item_data)
            except exceptions.ValidationException as e:
                return error_response(
                    error_code="VALIDATION_ERROR",
                    message=str(e.detail),
                    status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                    details=[detail.model_dump() for detail in e.error_details]
                )
            except exceptions.ServiceException as e:
                return self._service_error(e)

    def _register_update(self) -> None:
        """Register PUT /{item_id} route."""
        if not self.update_schema:
            return
        get_service = self.get_service

        @self.router.put(
            "/{item_id}",
            status_code=status.HTTP_204_NO_CONTENT,
            response_class=Response,
            summary="Replace item",
            responses={
                204: {"description": "Item replaced successfully"},
                400: {"description": "Body id does not match path id"},
                404: {"description": "Item not found"},
                422: {"description": "Validation error"},
                500: {"description": "Internal server error"}
            }
        )
        async def update_item(
            item_id: int,
            item_data: self.update_schema,  # type: ignore
            service: BaseService = Depends(get_service)
        ):
            try:
                await service.replace(item_id, item_data)
            except exceptions.NotFoundException as e:
                return self._not_found(e)
            except exceptions.ValidationException as e:
                return error_response(
                    error_code="VALIDATION_ERROR",
                    message=str(e.detail),
                    status_code=status.HTTP_400_BAD_REQUEST,
                    details=[detail.model_dump() for detail in e.error_details]
                )
            except exceptions.ServiceException as e:
                return self._service_error(e)
            return Response(status_code=status.HTTP_204_NO_CONTENT)

    def _register_delete(self) -> None:
        """Register DELETE /{item_id} route."""
        get_service = self.get_service

        @self.router.delete(
            "/{item_id}",
            status_code=status.HTTP_204_NO_CONTENT,
            response_class=Response,
            summary="Delete item",
            responses={
                204: {"description": "Item deleted successfully"},
                404: {"description": "Item not found"},
                500: {"description": "Internal server error"}
            }
        )
        async def delete_item(item_id: int, service: BaseService = Depends(get_service)):
            try:
                await service.delete(item_id)
            except exceptions.NotFoundException as e:
                return self._not_found(e)
            except exceptions.ServiceException as e:
                return self._service_error(e)
            return Response(status_code=status.HTTP_204_NO_CONTENT)

    def get_router(self) -> APIRouter:
        """Get the FastAPI router instance."""
        return self.router

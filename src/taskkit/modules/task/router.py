"""Task CRUD router producing enveloped JSON responses."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from fastapi import Body, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from taskkit.core.api.responses import ErrorResponse, SuccessResponse, describe_exception, json_error, json_success
from taskkit.core.api.router import Router
from taskkit.core.api.utilities import build_location_url
from taskkit.core.logging import get_logger

from .manager import TaskManager
from .schemas import TaskIn, TaskList, TaskOut, TaskUpdate

logger = get_logger(__name__)

# Largest primary key SQLite (and BIGINT columns) can hold
_MAX_ID = 2**63 - 1

_ERRORS: dict[int | str, dict[str, Any]] = {
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse, "description": "Server error"},
}
_ID_ERRORS: dict[int | str, dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Invalid task ID"},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Task not found"},
    **_ERRORS,
}


def parse_task_id(raw: str | None) -> int | None:
    """Parse a path identifier, returning None when it is missing or not an integer."""
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    if abs(value) > _MAX_ID:
        return None
    return value


class TaskRouter(Router):
    """Router exposing list, get, create, update and delete for tasks."""

    def __init__(
        self,
        prefix: str,
        tags: Sequence[str],
        manager_factory: Callable[..., Any],
        expose_errors: bool = False,
        **kwargs: Any,
    ) -> None:
        """Initialize task router with a manager dependency factory."""
        self.manager_factory = manager_factory
        self.expose_errors = expose_errors
        super().__init__(prefix=prefix, tags=tags, **kwargs)

    def _server_error(self, event: str, exc: Exception, **fields: Any) -> JSONResponse:
        logger.exception(event, error=str(exc), **fields)
        return json_error(
            "Server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error=describe_exception(exc) if self.expose_errors else None,
        )

    def _register_routes(self) -> None:
        """Register the task CRUD endpoints."""
        manager_dependency = Depends(self.manager_factory)
        prefix = self.router.prefix

        @self.router.get(
            "",
            summary="List tasks",
            response_model=SuccessResponse[TaskList],
            responses=_ERRORS,
        )
        async def list_tasks(manager: TaskManager = manager_dependency) -> JSONResponse:
            try:
                result = await manager.list_with_counts()
            except Exception as e:
                return self._server_error("task.list_failed", e)
            return json_success(result, "Tasks fetched successfully")

        @self.router.get(
            "/{task_id}",
            summary="Get task by ID",
            response_model=SuccessResponse[TaskOut],
            responses=_ID_ERRORS,
        )
        async def get_task(task_id: str, manager: TaskManager = manager_dependency) -> JSONResponse:
            id_ = parse_task_id(task_id)
            if id_ is None:
                return json_error("Invalid task ID", status_code=status.HTTP_400_BAD_REQUEST)
            try:
                task = await manager.find_by_id(id_)
            except Exception as e:
                return self._server_error("task.get_failed", e, task_id=id_)
            if task is None:
                return json_error("Task not found", status_code=status.HTTP_404_NOT_FOUND)
            return json_success(task, "Task fetched successfully")

        @self.router.post(
            "",
            summary="Create task",
            status_code=status.HTTP_201_CREATED,
            response_model=SuccessResponse[TaskOut],
            responses={
                status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Title is required"},
                **_ERRORS,
            },
        )
        async def create_task(
            request: Request,
            data: TaskIn | None = Body(default=None),
            manager: TaskManager = manager_dependency,
        ) -> JSONResponse:
            if data is None or not data.title:
                return json_error("Title is required", status_code=status.HTTP_400_BAD_REQUEST)
            try:
                task = await manager.create(data)
            except Exception as e:
                return self._server_error("task.create_failed", e)
            return json_success(
                task,
                "Task created successfully",
                status_code=status.HTTP_201_CREATED,
                headers={"Location": build_location_url(request, f"{prefix}/{task.id}")},
            )

        @self.router.put(
            "/{task_id}",
            summary="Update task",
            response_model=SuccessResponse[TaskOut],
            responses=_ID_ERRORS,
        )
        async def update_task(
            task_id: str,
            data: TaskUpdate | None = Body(default=None),
            manager: TaskManager = manager_dependency,
        ) -> JSONResponse:
            id_ = parse_task_id(task_id)
            if id_ is None:
                return json_error("Invalid task ID", status_code=status.HTTP_400_BAD_REQUEST)
            try:
                task = await manager.update(id_, data or TaskUpdate())
            except Exception as e:
                return self._server_error("task.update_failed", e, task_id=id_)
            if task is None:
                return json_error("Task not found", status_code=status.HTTP_404_NOT_FOUND)
            return json_success(task, "Task updated successfully")

        @self.router.delete(
            "/{task_id}",
            summary="Delete task",
            status_code=status.HTTP_204_NO_CONTENT,
            response_class=Response,
            responses=_ID_ERRORS,
        )
        async def delete_task(task_id: str, manager: TaskManager = manager_dependency) -> Response:
            id_ = parse_task_id(task_id)
            if id_ is None:
                return json_error("Invalid task ID", status_code=status.HTTP_400_BAD_REQUEST)
            try:
                deleted = await manager.delete(id_)
            except Exception as e:
                return self._server_error("task.delete_failed", e, task_id=id_)
            if not deleted:
                return json_error("Task not found", status_code=status.HTTP_404_NOT_FOUND)
            # 204 carries no body
            return Response(status_code=status.HTTP_204_NO_CONTENT)

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, status

from app.errors import APIError, StorageError, TaskNotFoundError
from app.models import Task
from app.schemas import Envelope, TaskEnvelope, TaskListEnvelope, TaskPayload, TaskResponse
from app.store import TaskStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

# ids outside the SQLite integer range cannot name a task
TaskId = Annotated[int, Path(ge=1, le=2**63 - 1)]


def get_store(request: Request) -> TaskStore:
    return request.app.state.store


def _find_or_404(store: TaskStore, task_id: int) -> Task:
    try:
        task = store.find_by_id(task_id)
    except StorageError:
        raise APIError("Error retrieving task", status.HTTP_500_INTERNAL_SERVER_ERROR)
    if task is None:
        raise TaskNotFoundError()
    return task


@router.get("", response_model=TaskListEnvelope)
def get_tasks(store: TaskStore = Depends(get_store)):
    try:
        tasks = store.list_all()
    except StorageError:
        raise APIError("Error retrieving tasks", status.HTTP_500_INTERNAL_SERVER_ERROR)
    return TaskListEnvelope(
        status=status.HTTP_200_OK,
        message="Tasks retrieved successfully",
        data=[TaskResponse.model_validate(t) for t in tasks],
    )


@router.get("/{task_id}", response_model=TaskEnvelope)
def get_task(task_id: TaskId, store: TaskStore = Depends(get_store)):
    task = _find_or_404(store, task_id)
    return TaskEnvelope(
        status=status.HTTP_200_OK,
        message="Task retrieved successfully",
        data=TaskResponse.model_validate(task),
    )


@router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
def create_task(payload: TaskPayload, store: TaskStore = Depends(get_store)):
    try:
        task = store.insert(Task(**payload.model_dump()))
    except StorageError:
        raise APIError("Error creating task", status.HTTP_500_INTERNAL_SERVER_ERROR)
    return TaskEnvelope(
        status=status.HTTP_201_CREATED,
        message="Task created successfully",
        data=TaskResponse.model_validate(task),
    )


@router.put("/{task_id}", response_model=TaskEnvelope)
def update_task(task_id: TaskId, payload: TaskPayload, store: TaskStore = Depends(get_store)):
    task = _find_or_404(store, task_id)
    task.title = payload.title
    task.description = payload.description
    task.status = payload.status
    try:
        task = store.update(task)
    except StorageError:
        raise APIError("Error updating task", status.HTTP_500_INTERNAL_SERVER_ERROR)
    if task is None:
        raise TaskNotFoundError()
    return TaskEnvelope(
        status=status.HTTP_200_OK,
        message="Task updated successfully",
        data=TaskResponse.model_validate(task),
    )


@router.delete("/{task_id}", response_model=Envelope)
def delete_task(task_id: TaskId, store: TaskStore = Depends(get_store)):
    task = _find_or_404(store, task_id)
    try:
        store.delete(task)
    except StorageError:
        raise APIError("Error deleting task", status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Envelope(status=status.HTTP_200_OK, message="Task deleted successfully")

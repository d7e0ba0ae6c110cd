"""Exceptions shared by the storage layer and the HTTP handlers."""


class StorageError(Exception):
    """The persistence layer failed (I/O, constraint, schema)."""


class APIError(Exception):
    """An error that is rendered to the client as a response envelope."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class TaskNotFoundError(APIError):
    status_code = 404
    message = "Task not found"


class InvalidPayloadError(APIError):
    status_code = 400
    message = "Invalid request payload"

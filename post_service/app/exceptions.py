from __future__ import annotations


class PostServiceError(Exception):
    """Base exception for all post-service errors."""


class PostNotFoundError(PostServiceError):
    """No post matches the requested id."""


class InvalidPostIdError(PostServiceError):
    """The id is not a valid MongoDB ObjectId."""


class InvalidPostPayloadError(PostServiceError):
    """The request body is not an object or has fields of the wrong type."""


class StorageError(PostServiceError):
    """Failures raised by the MongoDB driver (connection, write rejection, etc.)."""

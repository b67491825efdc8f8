class MoodAPIError(Exception):
    """Base class for errors that map onto an HTTP status and ``{"error": ...}`` body."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(MoodAPIError):
    status_code = 400


class NotFound(MoodAPIError):
    status_code = 404


class Conflict(MoodAPIError):
    status_code = 409


class TooManyRequests(MoodAPIError):
    status_code = 429


class StorageFailure(MoodAPIError):
    status_code = 500

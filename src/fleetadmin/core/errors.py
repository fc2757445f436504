"""Error kinds raised by the control plane and rendered by the API."""

from __future__ import annotations

from fastapi import status


class FleetAdminError(Exception):
    """Base error carrying the HTTP status and the client-facing message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def payload(self) -> dict[str, object]:
        return {"error": self.message}


class InvalidName(FleetAdminError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, name: str) -> None:
        super().__init__("invalid name")
        self.name = name


class Unauthorized(FleetAdminError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "unauthorized") -> None:
        super().__init__(message)


class ProjectNotFound(FleetAdminError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, name: str) -> None:
        super().__init__("not found")
        self.name = name


class BackupLogMissing(FleetAdminError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, name: str) -> None:
        super().__init__("no log")
        self.name = name


class CommandFailed(FleetAdminError):
    """An external command exited nonzero; stderr is passed through verbatim."""

    def __init__(self, operation: str, exit_code: int, stderr: str) -> None:
        super().__init__(f"{operation} failed")
        self.operation = operation
        self.exit_code = exit_code
        self.stderr = stderr

    def payload(self) -> dict[str, object]:
        return {"error": self.message, "detail": self.stderr, "exitCode": self.exit_code}


class ServerMisconfigured(FleetAdminError):
    def __init__(self, setting: str) -> None:
        super().__init__("server not configured")
        self.setting = setting


class ProjectPathMissing(FleetAdminError):
    """The project record has no working directory for the platform CLI."""

    def __init__(self, operation: str, name: str) -> None:
        super().__init__(f"{operation} failed")
        self.operation = operation
        self.name = name
        self.detail = f"project {name} has no path"

    def payload(self) -> dict[str, object]:
        return {"error": self.message, "detail": self.detail}

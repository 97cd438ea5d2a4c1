"""Domain errors raised by the executor, the stores and the workspace manager.

Every error carries a taxonomy ``kind`` and a human-readable ``detail``.
Components raise these and never HTTP exceptions -- translating them into
responses is the job of the handler registered in ``app.py``::

    {"error": "<kind>", "details": "<detail>"}
"""

from __future__ import annotations

from typing import ClassVar

from fastapi import status


class BathttpError(Exception):
    """Base class for all structured backend errors."""

    kind: ClassVar[str] = "Error"
    status_code: ClassVar[int] = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def to_payload(self) -> dict[str, str]:
        return {"error": self.kind, "details": self.detail}


# -- Network / transport -------------------------------------------------------


class UnsupportedMethodError(BathttpError):
    """Raised for any method outside GET/POST/PUT/DELETE/PATCH.  Nothing is sent."""

    kind = "UnsupportedMethod"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, method: str) -> None:
        super().__init__(f"Method: {method}")
        self.method = method


class BodyReadError(BathttpError):
    """Raised when the response body cannot be read or decoded as text."""

    kind = "BodyReadError"
    status_code = status.HTTP_502_BAD_GATEWAY


class SendError(BathttpError):
    """Raised on connection, DNS, TLS, timeout or URL failures."""

    kind = "SendError"
    status_code = status.HTTP_502_BAD_GATEWAY


# -- Persistence -----------------------------------------------------------------


class DirectoryUnavailableError(BathttpError):
    kind = "DirectoryUnavailable"


class DirectoryCreateError(BathttpError):
    kind = "DirectoryCreateError"


class SerializationError(BathttpError):
    kind = "SerializationError"


class DeserializationError(BathttpError):
    kind = "DeserializationError"
    status_code = status.HTTP_400_BAD_REQUEST


class WriteError(BathttpError):
    kind = "WriteError"


class ReadError(BathttpError):
    kind = "ReadError"


# -- Workspaces ------------------------------------------------------------------


class WorkspaceNotFoundError(BathttpError, LookupError):
    """Raised when no ``workspace.json`` exists at the given path."""

    kind = "WorkspaceNotFound"
    status_code = status.HTTP_404_NOT_FOUND


class CannotDeleteDefaultError(BathttpError, ValueError):
    """Raised when deleting the reserved ``default`` workspace."""

    kind = "CannotDeleteDefault"
    status_code = status.HTTP_409_CONFLICT

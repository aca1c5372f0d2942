"""Failure taxonomy shared by the rbac rules and the services.

Each error is an ``HTTPException`` so route handlers can let it propagate and
FastAPI renders ``{"detail": ...}`` with the matching status code.
"""
from fastapi import HTTPException

class TrackerError(HTTPException):
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(status_code=self.status_code, detail=detail)

# project or task absent
class NotFound(TrackerError):
    status_code = 404

# caller has no relationship to the project
class Unauthorized(TrackerError):
    status_code = 401

# recognized member without the capability
class Forbidden(TrackerError):
    status_code = 403

# invalid role, assignee outside the project, owner membership mutation
class BadRequest(TrackerError):
    status_code = 400

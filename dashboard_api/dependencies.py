from fastapi import Request

from .database import DatabaseClient
from .revalidation import ViewRevalidator


def get_db(request: Request) -> DatabaseClient:
    """Store client the app was created with"""
    return request.app.state.db


def get_revalidator(request: Request) -> ViewRevalidator:
    return request.app.state.revalidator

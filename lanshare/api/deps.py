"""Reusable FastAPI dependencies."""

from fastapi import Depends, Request

from lanshare.core.container import ApplicationContainer
from lanshare.domain.content import ContentFactory, ContentService


def get_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


def get_content_service(container: ApplicationContainer = Depends(get_container)) -> ContentService:
    return container.service


def get_content_factory(container: ApplicationContainer = Depends(get_container)) -> ContentFactory:
    return container.factory


__all__ = [
    "get_container",
    "get_content_service",
    "get_content_factory",
]

# This project was developed with assistance from AI tools.
"""
Runtime wiring for the case repository, the delivery client and the
conversation engine.

The lifespan in ``main`` builds each of these once and stores it on
``app.state``; routes receive them through the dependencies below, which
tests replace with ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends, Request

from .core.config import Settings
from .services.conversation import ConversationEngine
from .services.delivery import DeliveryClient
from .services.memory_repository import InMemoryCaseRepository
from .services.repository import CaseRepository
from .services.sql_repository import SqlCaseRepository


def build_repository(settings: Settings) -> CaseRepository:
    """Return the storage adapter selected by REPOSITORY_BACKEND."""
    if settings.REPOSITORY_BACKEND == "memory":
        return InMemoryCaseRepository()
    return SqlCaseRepository()


def build_engine(
    settings: Settings, repository: CaseRepository, delivery: DeliveryClient
) -> ConversationEngine:
    return ConversationEngine(
        repository,
        delivery,
        bank_name=settings.DEFAULT_BANK_NAME,
        case_id_attempts=settings.CASE_ID_MAX_ATTEMPTS,
    )


def get_repository(request: Request) -> CaseRepository:
    return request.app.state.repository


def get_delivery(request: Request) -> DeliveryClient:
    return request.app.state.delivery


def get_engine(request: Request) -> ConversationEngine:
    return request.app.state.engine


Repository = Annotated[CaseRepository, Depends(get_repository)]
Delivery = Annotated[DeliveryClient, Depends(get_delivery)]
Engine = Annotated[ConversationEngine, Depends(get_engine)]

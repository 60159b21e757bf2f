"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated, AsyncIterator

from fastapi import Depends, Request

from registration_service.application.ports.storage import AvatarStorage
from registration_service.context import AppContext
from registration_service.infrastructure.db.uow import SqlAlchemyUoW


def get_context(request: Request) -> AppContext:
    return request.app.state.context


ContextDep = Annotated[AppContext, Depends(get_context)]


async def get_uow(context: ContextDep) -> AsyncIterator[SqlAlchemyUoW]:
    async with context.session_factory() as session:
        uow = SqlAlchemyUoW(session)
        try:
            yield uow
        finally:
            await session.close()


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]


def get_storage(context: ContextDep) -> AvatarStorage:
    return context.storage


StorageDep = Annotated[AvatarStorage, Depends(get_storage)]

"""HTTP adapter exposing the task service over FastAPI.

Authentication happens upstream; the authenticated user's id arrives in
the ``X-User-Id`` header and is resolved to a Requester here.
"""

import logging
from collections.abc import Generator
from typing import Any

from fastapi import Body, Depends, FastAPI, Header, Query, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlmodel import Session

from .config import TaskboardSettings, get_settings
from .database import create_db_and_tables, get_engine
from .errors import AuthenticationError, TaskboardError
from .logging_setup import configure_logging
from .repositories import UserRepository
from .schemas.models import Requester, TaskPage, TaskRead
from .services import TaskService


logger = logging.getLogger(__name__)


def get_session(request: Request) -> Generator[Session, None, None]:
    with Session(request.app.state.engine) as session:
        yield session


def get_task_service(
    request: Request, session: Session = Depends(get_session)
) -> TaskService:
    return TaskService(session=session, settings=request.app.state.settings)


def get_requester(
    x_user_id: int | None = Header(default=None),
    session: Session = Depends(get_session),
) -> Requester:
    """Resolve the authenticated user, or answer 401."""
    if x_user_id is None:
        raise AuthenticationError("Unauthenticated.")
    user = UserRepository(session).get_by_id(x_user_id)
    if user is None:
        raise AuthenticationError("Unauthenticated.")
    return user.to_requester()


def create_app(
    settings: TaskboardSettings | None = None,
    engine: Engine | None = None,
    create_tables: bool = True,
) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or get_settings()
    engine = engine or get_engine()
    configure_logging(settings.effective_log_level)
    if create_tables:
        create_db_and_tables(engine)

    app = FastAPI(title="taskboard")
    app.state.settings = settings
    app.state.engine = engine

    @app.exception_handler(TaskboardError)
    async def taskboard_error_handler(request: Request, exc: TaskboardError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    @app.get("/tasks", response_model=TaskPage)
    def list_tasks(
        page: int = Query(default=1),
        requester: Requester = Depends(get_requester),
        service: TaskService = Depends(get_task_service),
    ):
        return service.list(requester, page)

    @app.get("/tasks/status/{status}", response_model=TaskPage)
    def filter_tasks(
        status: str,
        page: int = Query(default=1),
        requester: Requester = Depends(get_requester),
        service: TaskService = Depends(get_task_service),
    ):
        return service.filter(requester, status, page)

    @app.post("/tasks", status_code=201, response_model=TaskRead)
    def store_task(
        payload: dict[str, Any] = Body(...),
        requester: Requester = Depends(get_requester),
        service: TaskService = Depends(get_task_service),
    ):
        return service.create(requester, payload)

    @app.get("/tasks/{task_id}", response_model=TaskRead)
    def show_task(
        task_id: int,
        requester: Requester = Depends(get_requester),
        service: TaskService = Depends(get_task_service),
    ):
        return service.show(task_id, requester)

    @app.api_route("/tasks/{task_id}", methods=["PUT", "PATCH"], response_model=TaskRead)
    def update_task(
        task_id: int,
        payload: dict[str, Any] = Body(...),
        requester: Requester = Depends(get_requester),
        service: TaskService = Depends(get_task_service),
    ):
        return service.update(requester, task_id, payload)

    @app.delete("/tasks/{task_id}", status_code=204)
    def destroy_task(
        task_id: int,
        requester: Requester = Depends(get_requester),
        service: TaskService = Depends(get_task_service),
    ):
        service.destroy(requester, task_id)
        return Response(status_code=204)

    logger.debug(f"Application created with database {engine.url}")
    return app

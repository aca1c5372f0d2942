import logging

from fastapi import FastAPI

from tracker.config import settings
from tracker.routes.analytics import router as analytics_router
from tracker.routes.auth import router as auth_router
from tracker.routes.health import router as health_router
from tracker.routes.projects import router as projects_router
from tracker.routes.tasks import router as tasks_router
from tracker.routes.team import router as team_router

def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app = FastAPI(title="project-tracker-api", version="0.1.0")
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(projects_router)
    app.include_router(team_router)
    app.include_router(tasks_router)
    app.include_router(analytics_router)
    return app

app = create_app()

# community_hub/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from community_hub.common.common import init_admin
from community_hub.common.db import init_models, AsyncSessionLocal
from community_hub.common.handlers import register_exception_handlers
from community_hub.core.config import get_settings

# API-роутеры
from community_hub.users.routers import router as user_router
from community_hub.users.routers import admin_router as volunteers_router
from community_hub.admins.routers import router as admin_router
from community_hub.reports.routers import router as reports_router
from community_hub.submissions.routers import router as submission_router
from community_hub.comments.routers import router as comment_router
from community_hub.media.routers import router as preview_router
from community_hub.validation_queue.routers import router as queue_router
from community_hub.notifications.routers import router as notification_router

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

# API
app.include_router(user_router)
app.include_router(volunteers_router)
app.include_router(admin_router)
app.include_router(reports_router)
app.include_router(submission_router)
app.include_router(comment_router)
app.include_router(preview_router)
app.include_router(queue_router)
app.include_router(notification_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app_state_started = False  # защита от двойного запуска


@app.on_event("startup")
async def startup_event():
    global app_state_started
    if app_state_started:
        return
    app_state_started = True

    # БД/сиды
    await init_models()
    logger.info("Database schema ready (%s)", settings.APP_ENV)
    await seed_super_admin()


async def seed_super_admin():
    if not (settings.SUPER_ADMIN_EMAIL and settings.SUPER_ADMIN_NAME and settings.SUPER_ADMIN_PASSWORD):
        logger.info("SUPER_ADMIN_* not set, skipping admin seed")
        return
    async with AsyncSessionLocal() as session:
        await init_admin(
            session=session,
            email=settings.SUPER_ADMIN_EMAIL,
            name=settings.SUPER_ADMIN_NAME,
            password=settings.SUPER_ADMIN_PASSWORD,
        )


@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.APP_NAME}"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "community_hub.main:app",
        host=settings.HOST,
        port=settings.PORT,
        workers=settings.WORKERS,
    )

from contextlib import asynccontextmanager
from pathlib import Path
import logging

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .db import init_db
from .logging_setup import configure_logging
from .record_store import UPLOADS_URL_PREFIX
from .settings import settings
from .routers import health
from .routers import answers
from .routers import analysis
from .routers import worksheet
from .routers import curriculum
from .routers import categorize

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
	configure_logging()
	if settings.store_backend == "sql":
		init_db()
		Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
	elif not settings.store_url:
		logger.warning("STORE_URL is not set; listings will be empty and saves will fail")
	logger.info("wrong-answer notebook API started (store=%s)", settings.store_backend)
	yield


app = FastAPI(title="Wrong Answer Notebook API", lifespan=lifespan)
app.include_router(health.router)
app.include_router(answers.router)
app.include_router(analysis.router)
app.include_router(worksheet.router)
app.include_router(curriculum.router)
app.include_router(categorize.router)

# Images saved by the sql backend
app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")

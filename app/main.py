import logging
from contextlib import asynccontextmanager
from pathlib import Path

import fastapi
from fastapi import FastAPI, HTTPException
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles

from app.config import LOG_LEVEL
from app.errors import TaskFlowError
from app.logging_setup import setup_logging
from app.routers import auth, tasks
from app.workspace import set_workspace_cookie, workspaces

setup_logging(LOG_LEVEL)
logger = logging.getLogger(__name__)

FRONTEND_DIR = Path(__file__).resolve().parent / "frontend"


@asynccontextmanager
async def lifespan(app: FastAPI):
	yield
	# cancels any credential form still waiting on its simulated delay
	workspaces.clear()


app = FastAPI(title="TaskFlow", lifespan=lifespan)

# API routers
app.include_router(auth.router)
app.include_router(tasks.router)

# Serve the single page UI from / (index.html in app/frontend)
app.mount("/", StaticFiles(directory=FRONTEND_DIR, html=True), name="frontend")


def _keep_new_workspace(request, response):
	# error responses are built from scratch; a workspace made for this
	# request must still reach the browser
	new_id = getattr(request.state, "new_workspace_id", None)
	if new_id is not None and new_id in workspaces:
		set_workspace_cookie(response, new_id)
	return response


@app.exception_handler(TaskFlowError)
async def taskflow_error_handler(request, exc: TaskFlowError):
	response = fastapi.responses.JSONResponse(
		status_code=exc.status_code,
		content={
			"detail": str(exc),
			"notification": {"title": exc.title, "description": str(exc), "variant": "destructive"},
		},
	)
	return _keep_new_workspace(request, response)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request, exc: RequestValidationError):
	response = await request_validation_exception_handler(request, exc)
	return _keep_new_workspace(request, response)


# Generic error handler to return JSON errors for unexpected exceptions
@app.exception_handler(Exception)
async def generic_exception_handler(request, exc):
	if isinstance(exc, HTTPException):
		raise exc
	logger.exception("unhandled error on %s %s", request.method, request.url.path)
	return fastapi.responses.JSONResponse(status_code=500, content={"detail": "Internal server error"})

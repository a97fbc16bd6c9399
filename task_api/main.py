import logging
import threading
from contextlib import asynccontextmanager
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import crud, schemas
from .database import get_db, init_db

logger = logging.getLogger(__name__)

NOT_FOUND = "Task not found"
WRITE_FAILURES = {
    "POST": ("POST /tasks", "Failed to add task"),
    "PUT": ("PUT /tasks/:id", "Failed to update task"),
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fire and forget: requests are accepted while the table is being created.
    threading.Thread(target=init_db, name="init-db", daemon=True).start()
    yield


app = FastAPI(title="Task Store API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # An unreadable write body answers like a rejected write.
    operation, message = WRITE_FAILURES.get(request.method, (request.method, "Internal server error"))
    logger.error("%s error: %s", operation, exc.errors())
    return JSONResponse(status_code=500, content={"error": message})


def _backend_error(db: Session, operation: str, message: str) -> HTTPException:
    db.rollback()
    logger.exception("%s error", operation)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@app.get("/tasks", response_model=List[schemas.TaskOut], responses={500: {"model": schemas.ErrorOut}})
def list_tasks(db: Session = Depends(get_db)):
    try:
        return crud.get_tasks(db)
    except SQLAlchemyError:
        raise _backend_error(db, "GET /tasks", "Internal server error")


@app.post(
    "/tasks",
    response_model=schemas.TaskOut,
    status_code=status.HTTP_201_CREATED,
    responses={500: {"model": schemas.ErrorOut}},
)
def create_task(task_in: schemas.TaskCreate, db: Session = Depends(get_db)):
    try:
        return crud.create_task(db, task_in)
    except SQLAlchemyError:
        raise _backend_error(db, "POST /tasks", "Failed to add task")


@app.put(
    "/tasks/{task_id}",
    response_model=schemas.TaskOut,
    responses={404: {"model": schemas.ErrorOut}, 500: {"model": schemas.ErrorOut}},
)
def update_task(task_id: str, task_in: schemas.TaskUpdate, db: Session = Depends(get_db)):
    try:
        task = crud.update_task(db, task_id, task_in)
    except SQLAlchemyError:
        raise _backend_error(db, "PUT /tasks/:id", "Failed to update task")
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return task


@app.delete(
    "/tasks/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": schemas.ErrorOut}, 500: {"model": schemas.ErrorOut}},
)
def delete_task(task_id: str, db: Session = Depends(get_db)):
    try:
        deleted = crud.delete_task(db, task_id)
    except SQLAlchemyError:
        raise _backend_error(db, "DELETE /tasks/:id", "Failed to delete task")
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

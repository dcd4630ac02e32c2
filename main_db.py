import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Depends, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse
from pydantic import BaseModel, Field, ValidationError, field_validator
from sqlalchemy.orm import Session

from database import DATABASE_URL, get_db, make_engine, make_session_factory
from errors import TodoAppError
from todo_store import delete_by_id, ensure_schema, insert, list_all
from views import render

logger = logging.getLogger(__name__)

MAX_TODO_ID = 2**32 - 1

router = APIRouter()


class AddParams(BaseModel):
    text: str


class DeleteParams(BaseModel):
    id: int = Field(..., ge=0, le=MAX_TODO_ID)

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v):
        # Plain ASCII digits only: no sign, whitespace, underscores or decimals
        if not isinstance(v, str) or not v.isascii() or not v.isdigit():
            raise ValueError("id must be an unsigned integer")
        return v


async def _parse_form(request: Request, model):
    form = await request.form()
    repeated = [key for key in form.keys() if len(form.getlist(key)) > 1]
    if repeated:
        raise RequestValidationError([
            {"type": "duplicate_field", "loc": ("body", key), "msg": "Field given more than once"}
            for key in repeated
        ])
    try:
        return model.model_validate(dict(form))
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))


async def add_params(request: Request) -> AddParams:
    return await _parse_form(request, AddParams)


async def delete_params(request: Request) -> DeleteParams:
    return await _parse_form(request, DeleteParams)


def redirect_to_index():
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/", response_class=HTMLResponse)
def index(db: Session = Depends(get_db)):
    entries = list_all(db)
    return HTMLResponse(content=render(entries))


@router.post("/add")
def add_todo(params: AddParams = Depends(add_params), db: Session = Depends(get_db)):
    insert(db, params.text)
    return redirect_to_index()


@router.post("/delete")
def delete_todo(params: DeleteParams = Depends(delete_params), db: Session = Depends(get_db)):
    delete_by_id(db, params.id)
    return redirect_to_index()


@router.get("/health")
async def health_check():
    return {"status": "healthy", "service": "Todo", "database": "SQLite"}


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def todo_error_handler(request: Request, exc: TodoAppError):
    # Every app error looks the same to the client
    logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return PlainTextResponse("Internal Server Error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # A failure here aborts startup before any request is served
    ensure_schema(app.state.engine)
    yield
    app.state.engine.dispose()


def create_app(database_url: str = DATABASE_URL) -> FastAPI:
    engine = make_engine(database_url)

    app = FastAPI(
        title="Todo",
        description="Server-rendered todo list with SQLite storage",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    app.include_router(router)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(TodoAppError, todo_error_handler)
    return app


app = create_app()

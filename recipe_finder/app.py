import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List

from fastapi import Depends, FastAPI, Form, HTTPException, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import browse, crud, generation, schemas
from .config import configure_logging, get_settings
from .db import SessionLocal, init_db
from .gateway import ChatClient
from .generator import (
    DIETARY_OPTIONS,
    DIFFICULTY_LEVELS,
    EmptyIngredientsError,
    GeneratorForm,
)

logger = logging.getLogger(__name__)

GENERATE_PATH = "/functions/generate-recipes"

# Sent on every generation response, including errors
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    init_db()
    yield


app = FastAPI(title="Recipe Finder", lifespan=lifespan)

package_dir = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(package_dir / "templates"))
app.mount("/static", StaticFiles(directory=str(package_dir / "static")), name="static")


class EmptyPreflightCORSMiddleware(CORSMiddleware):
    """CORSMiddleware whose accepted preflights carry an empty body."""

    def preflight_response(self, request_headers):
        response = super().preflight_response(request_headers)
        if response.status_code != 200:
            return response
        headers = {
            k: v for k, v in response.headers.items()
            if k not in ("content-length", "content-type")
        }
        return Response(status_code=200, headers=headers)


app.add_middleware(
    EmptyPreflightCORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_chat_client() -> ChatClient:
    return ChatClient.from_settings(get_settings())


@app.get("/", response_class=HTMLResponse)
def landing(request: Request):
    return templates.TemplateResponse(request, "index.html", {})


@app.get("/browse", response_class=HTMLResponse)
def browse_recipes(request: Request, db: Session = Depends(get_db)):
    error = None
    try:
        recipes = crud.get_all_recipes(db, newest_first=True)
    except SQLAlchemyError:
        logger.exception("Error loading recipes")
        recipes = []
        error = "Failed to load recipes"
    return templates.TemplateResponse(
        request,
        "browse.html",
        {"cards": browse.recipe_cards(recipes), "error": error},
    )


@app.get("/recipe/{recipe_id}")
def recipe_detail(recipe_id: str):
    raise HTTPException(status_code=501, detail="Not implemented")


@app.get("/favorites")
def favorites():
    raise HTTPException(status_code=501, detail="Not implemented")


def _render_generator(request: Request, form: GeneratorForm, **extra):
    context = {
        "form": form,
        "dietary_options": DIETARY_OPTIONS,
        "difficulty_levels": DIFFICULTY_LEVELS,
        "recipes": "",
        "notice": None,
    }
    context.update(extra)
    return templates.TemplateResponse(request, "generator.html", context)


@app.get("/generator", response_class=HTMLResponse)
def generator_page(request: Request):
    return _render_generator(request, GeneratorForm())


@app.post("/generator", response_class=HTMLResponse)
def generator_action(
    request: Request,
    action: str = Form(...),
    ingredients: str = Form(""),
    dietary: List[str] = Form([]),
    difficulty: str = Form(""),
    max_time: str = Form(""),
    current_ingredient: str = Form(""),
    db: Session = Depends(get_db),
    chat: ChatClient = Depends(get_chat_client),
):
    form = GeneratorForm.from_form(
        ingredients=ingredients,
        dietary=dietary,
        difficulty=difficulty,
        max_time=max_time,
        current_ingredient=current_ingredient,
    )
    if not form.apply(action):
        return _render_generator(request, form)

    try:
        payload = form.to_request()
    except EmptyIngredientsError as exc:
        notice = {"title": "Add ingredients", "message": str(exc), "variant": "destructive"}
        return _render_generator(request, form, notice=notice)

    try:
        result = generation.generate(payload, lambda: crud.get_all_recipes(db), chat)
    except Exception as exc:
        logger.exception("Error generating recipes")
        _, message = generation.describe_failure(exc)
        notice = {"title": "Generation failed", "message": message, "variant": "destructive"}
        return _render_generator(request, form, notice=notice)

    notice = {
        "title": "Recipes generated!",
        "message": f"Found {result.matched_from_database} recipes in database",
        "variant": "default",
    }
    return _render_generator(request, form, recipes=result.recipes, notice=notice)


def _error_response(status: int, message: str) -> JSONResponse:
    body = schemas.ErrorResponse(error=message)
    return JSONResponse(status_code=status, content=body.model_dump(), headers=CORS_HEADERS)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "Invalid request: " + "; ".join(parts)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # generation failures are always {error}; other routes keep FastAPI's 422
    if request.url.path != GENERATE_PATH:
        return await request_validation_exception_handler(request, exc)
    message = _validation_message(exc)
    logger.error("Error in generate-recipes: %s", message)
    return _error_response(500, message)


@app.options(GENERATE_PATH)
def generate_recipes_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@app.post(GENERATE_PATH)
def generate_recipes(
    payload: schemas.GenerateRequest,
    db: Session = Depends(get_db),
    chat: ChatClient = Depends(get_chat_client),
):
    try:
        result = generation.generate(payload, lambda: crud.get_all_recipes(db), chat)
    except Exception as exc:
        logger.exception("Error in generate-recipes")
        return _error_response(*generation.describe_failure(exc))

    body = schemas.GenerateResponse(
        recipes=result.recipes, matched_from_database=result.matched_from_database
    )
    return JSONResponse(content=body.model_dump(by_alias=True), headers=CORS_HEADERS)

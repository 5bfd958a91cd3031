# mood_trainer/main.py
from fastapi import APIRouter, FastAPI, HTTPException, Request
import json, logging
from pathlib import Path
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import List, Optional

from .config import Settings, configure_logging, get_settings
from .errors import DatasetUnavailableError, ModelNotTrainedError
from .loader import load_movies
from .schemas import Features, FeedbackRequest, MovieRecord, Prediction
from .store import FeedbackStore
from .trainer import PreferenceModel, TorchPreferenceNetwork

logger = logging.getLogger(__name__)

DATA_PLACEHOLDER = "<!-- Backend will populate this JSON -->"
DEBUG_SAMPLE_SIZE = 5


class AppContext:
    """Process-wide state shared by the request handlers."""

    def __init__(self, settings: Settings, dataset: Optional[List[MovieRecord]],
                 store: FeedbackStore, model: PreferenceModel):
        self.settings = settings
        self.dataset = dataset
        self.store = store
        self.model = model

    def require_dataset(self) -> List[MovieRecord]:
        if self.dataset is None:
            raise DatasetUnavailableError("Dataset not loaded.")
        return self.dataset


class PublicStaticFiles(StaticFiles):
    """StaticFiles that answers 404 for dotfiles and dot-directories (.env, .git)."""

    async def get_response(self, path: str, scope):
        if any(part.startswith(".") for part in Path(path).parts):
            raise StarletteHTTPException(status_code=404)
        return await super().get_response(path, scope)


router = APIRouter()


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def load_dataset(settings: Settings) -> Optional[List[MovieRecord]]:
    try:
        dataset = load_movies(settings.csv_path)
    except (OSError, ValueError):
        logger.exception("Error loading CSV %s", settings.csv_path)
        return None
    logger.info("Movies data loaded: %d records from %s", len(dataset), settings.csv_path)
    logger.debug("First records: %s", [r.model_dump() for r in dataset[:DEBUG_SAMPLE_SIZE]])
    return dataset


@router.get("/", response_class=HTMLResponse)
async def serve_frontend(request: Request):
    context = get_context(request)
    dataset = context.require_dataset()
    index_path = Path(context.settings.index_path)
    if not index_path.is_file():
        raise HTTPException(status_code=404, detail=f"{index_path.name} not found")

    template = index_path.read_text(encoding="utf-8")
    # keep "</" in overviews from closing the script tag
    payload = json.dumps([r.model_dump() for r in dataset]).replace("</", "<\\/")
    return HTMLResponse(template.replace(DATA_PLACEHOLDER, payload, 1))


@router.get("/test")
async def debug_sample(request: Request):
    dataset = get_context(request).require_dataset()
    return [r.model_dump() for r in dataset[:DEBUG_SAMPLE_SIZE]]


@router.post("/add-feedback")
async def add_feedback(request: Request, feedback: Optional[FeedbackRequest] = None):
    if feedback is None or feedback.preferred is None or feedback.not_preferred is None:
        return PlainTextResponse("Both preferredText and notPreferredText are required.", status_code=400)

    size = get_context(request).store.add_pair(feedback.preferred, feedback.not_preferred)
    logger.info("Feedback added to training data (%d examples).", size)
    return {"message": "Feedback added successfully."}


@router.post("/train")
async def train(request: Request):
    context = get_context(request)
    if not len(context.store):
        return PlainTextResponse("No training data available.", status_code=400)

    # blocks the event loop until the library call returns
    logger.info("Training the network on %d examples...", len(context.store))
    result = context.model.train(context.store.examples())
    logger.info("Network trained: error=%.6f after %d iterations.", result.error, result.iterations)

    return [layer.model_dump() for layer in result.layers]


@router.post("/predict", response_model=Prediction)
async def predict(features: Features, request: Request):
    score = get_context(request).model.predict(features)
    return Prediction(liked=score)


@router.get("/health")
async def health(request: Request):
    context = get_context(request)
    return {
        "status": "healthy",
        "records": len(context.dataset) if context.dataset is not None else None,
        "feedback": context.store.stats(),
        "trained": context.model.trained,
    }


async def dataset_unavailable_handler(request: Request, exc: DatasetUnavailableError):
    return JSONResponse(status_code=503, content={"detail": str(exc)})


async def model_not_trained_handler(request: Request, exc: ModelNotTrainedError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


def create_app(settings: Optional[Settings] = None, model: Optional[PreferenceModel] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    context = AppContext(
        settings=settings,
        dataset=load_dataset(settings),
        store=FeedbackStore(),
        model=model if model is not None else TorchPreferenceNetwork.from_settings(settings),
    )

    app = FastAPI(title="Mood Preference Trainer")
    app.state.context = context
    app.include_router(router)
    app.add_exception_handler(DatasetUnavailableError, dataset_unavailable_handler)
    app.add_exception_handler(ModelNotTrainedError, model_not_trained_handler)

    # lowest priority: anything no route matched is looked up on disk
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", PublicStaticFiles(directory=static_dir), name="static")
    else:
        logger.warning("Static directory %s does not exist; static files disabled", static_dir)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = app.state.context.settings
    uvicorn.run(app, host=settings.host, port=settings.port)

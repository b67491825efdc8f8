import logging
from typing import Any, Dict, List, Optional

from bson.errors import BSONError
from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from moodapi.errors import MoodAPIError
from moodapi.schemas import MoodCreate, MoodUpdate
from moodapi.service import MoodService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/moods")


def get_service(request: Request) -> MoodService:
    return request.app.state.moods


@router.get("")
def list_moods(
    user_id: Optional[str] = Query(None, alias="userId"), service: MoodService = Depends(get_service)
) -> List[Dict[str, Any]]:
    return service.list_moods(user_id)


@router.get("/{mood_id}")
def get_mood(mood_id: str, service: MoodService = Depends(get_service)) -> Dict[str, Any]:
    return service.get_mood(mood_id)


@router.post("", status_code=201)
def create_mood(entry: MoodCreate, service: MoodService = Depends(get_service)) -> Dict[str, Any]:
    return service.create_mood(entry)


@router.put("/{mood_id}")
def update_mood(mood_id: str, entry: MoodUpdate, service: MoodService = Depends(get_service)) -> Dict[str, str]:
    return service.update_mood(mood_id, entry)


@router.delete("/{mood_id}")
def delete_mood(mood_id: str, service: MoodService = Depends(get_service)) -> Dict[str, str]:
    return service.delete_mood(mood_id)


async def handle_mood_error(request: Request, exc: MoodAPIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ())[1:])
        messages.append(f"{field}: {err['msg']}" if field else err["msg"])
    return JSONResponse(status_code=400, content={"error": "; ".join(messages) or "Invalid request"})


async def handle_storage_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Storage error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc)})


def create_app(collection: Collection) -> FastAPI:
    """Build the API around a collection that is already connected."""
    app = FastAPI(title="Mood Log API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.moods = MoodService(collection)

    app.add_exception_handler(MoodAPIError, handle_mood_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(PyMongoError, handle_storage_error)
    app.add_exception_handler(BSONError, handle_storage_error)

    @app.get("/", response_class=PlainTextResponse)
    def read_root():
        return "Mood Log API is running"

    app.include_router(router)
    return app

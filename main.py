import logging
import os
from contextlib import asynccontextmanager

import firebase_admin
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from firebase_admin import credentials
from pydantic import ValidationError
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from models.post import TextRequest
from routes.posts import router as posts_router
from services.firestore import FirestoreDB

load_dotenv()

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"),
                    format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS", "./firebase.json")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize Firebase Admin SDK
    cred = credentials.Certificate(FIREBASE_CREDENTIALS)
    firebase_app = firebase_admin.initialize_app(cred)

    app.state.firestore = FirestoreDB(firebase_app)

    yield
    firebase_admin.delete_app(firebase_app)


app = FastAPI(lifespan=lifespan)


# Added before CORS so it sits inside it and 500 responses keep the CORS headers
@app.middleware("http")
async def catch_unhandled_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"[SERVER] Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"detail": "Server Error"})


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _format_error(error, location="body"):
    ctx_error = error.get("ctx", {}).get("error")
    loc = error.get("loc", ())
    return {
        "msg": str(ctx_error) if ctx_error else error.get("msg"),
        "param": loc[-1] if loc else None,
        "location": location,
    }


def _empty_body_errors():
    """Errors for a request sent without a body, same as for an empty object"""
    try:
        TextRequest.model_validate({})
    except ValidationError as exc:
        return [_format_error(error) for error in exc.errors()]
    return []


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report body validation failures as 400 with one entry per failing field"""
    errors = []
    for error in exc.errors():
        loc = tuple(error.get("loc", ()))
        if loc == ("body",) and error.get("type") == "missing":
            errors.extend(_empty_body_errors())
        else:
            errors.append(_format_error(error, loc[0] if loc else None))
    return JSONResponse(status_code=400, content={"errors": errors})


# Include routers
app.include_router(posts_router, prefix="/posts", tags=["posts"])

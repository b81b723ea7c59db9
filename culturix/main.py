# culturix/main.py

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from culturix import config
from culturix.api import auth, chat, logs
from culturix.core.errors import CulturixError, ValidationError
from culturix.database import init_db


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database initialized.")
    logger.info("OpenRouter API Key loaded: %s", "Yes" if config.OPENROUTER_API_KEY else "No")
    if config.SESSION_SECRET_IS_DEFAULT:
        logger.warning("SESSION_SECRET is not set; using the development default.")
    yield


app = FastAPI(title="Culturix", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CulturixError)
async def culturix_error_handler(request: Request, exc: CulturixError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    error = ValidationError("Invalid request body")
    return JSONResponse(status_code=error.status_code, content=error.to_content())


app.include_router(auth.router)
app.include_router(logs.router)
app.include_router(chat.router)


def run():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)


if __name__ == "__main__":
    run()

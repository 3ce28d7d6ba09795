# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ssx.config.loader import get_bool_env, get_str_env
from ssx.server.assistant.router import router as assistant_router
from ssx.server.session.dependencies import initialise_controller
from ssx.server.session.router import router as session_router


def _configure_logging() -> None:
    level_name = "DEBUG" if get_bool_env("DEBUG", False) else get_str_env("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


_configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    controller = initialise_controller()
    logger.info("Active session on startup: %s", controller.store.state.active_id)
    try:
        yield
    finally:
        await controller.join()


app = FastAPI(
    title="SSx API",
    description="Instrument-led conversational shell",
    version="0.1.0",
    lifespan=lifespan,
)

allowed_origins_str = get_str_env("ALLOWED_ORIGINS", "http://localhost:3000")
allowed_origins = [origin.strip() for origin in allowed_origins_str.split(",")]

logger.info("Allowed origins: %s", allowed_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(session_router)
app.include_router(assistant_router)

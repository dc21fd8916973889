from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from employee_manager.api.v1.router import api_router
from employee_manager.core.config import settings
from employee_manager.services.auth_service import auth_service
from employee_manager.services.document_store import document_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    try:
        await document_store.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize CosmosDocumentStore — continuing without DB")
    try:
        await auth_service.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize FirebaseAuthService — continuing without sign-in")
    yield
    await document_store.close()
    await auth_service.close()


app = FastAPI(
    title="Employee Manager API",
    description="Employee records with validated, duplicate-checked creation",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:8081",
        "http://localhost:19006",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Employee Manager API"}

# riskmap/main.py
from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware

# Load <repo>/.env (main.py is <repo>/riskmap/main.py)
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

from riskmap.api import api_router

logger = logging.getLogger(__name__)

app = FastAPI(title="SafeAirspace Risk Map", version="1.0.0")

# ── Compression (must be added before CORS) ── KML country polygons are large
app.add_middleware(GZipMiddleware, minimum_size=1000)

# Static viewer may be hosted anywhere; it only reads
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(api_router)

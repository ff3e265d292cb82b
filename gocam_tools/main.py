"""FastAPI application entrypoint for the GO-CAM analysis service."""

from __future__ import annotations

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import configure_services, router as api_router
from .config import DEFAULT_ANALYSIS_CONFIG


API_DESCRIPTION = """
Stateless analyses over GO-CAM causal-activity models.  Each endpoint takes
one or more GO-CAM JSON documents in the request body and:

* counts genes, complexes, connected activities and holes (`/models/stats`)
* lists under-specified activities (`/models/holes`)
* groups genes by connected activity count (`/models/connected-genes`)
* finds nodes shared between models (`/models/overlaps`)
* merges models into Cytoscape elements or GraphViz DOT (`/models/merge`, `/models/dot`)
"""


app = FastAPI(title="GO-CAM Analysis API", description=API_DESCRIPTION, version=__version__)


origins = [origin for origin in os.environ.get("CORS_ORIGINS", "").split(",") if origin]
if origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


configure_services(config=DEFAULT_ANALYSIS_CONFIG)

app.include_router(api_router)


@app.get("/health")
def health() -> dict[str, str]:
    """Basic health check used by uptime monitors."""

    return {"status": "ok", "version": __version__}


__all__ = ["app"]

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Routers
from routers.admin import router as admin_router
from routers.analysis import router as analysis_router
from routers.health import router as health_router
from routers.keys import router as keys_router
from routers.scoring import router as scoring_router
from routers.sheets import router as sheets_router
from routers.submissions import router as submissions_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("jee-analyzer")

app = FastAPI(title="JEE Main – Response Sheet Analyzer")

# Allow calls from the local frontend dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "x-admin-token"],
)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(sheets_router)  # /validate, /parse, /extract
app.include_router(scoring_router)  # /score, /percentile
app.include_router(analysis_router)  # /analyze
app.include_router(keys_router)  # /keys/...
app.include_router(submissions_router)  # /submissions/...
app.include_router(admin_router)  # /admin/...
app.include_router(health_router)  # /health/...

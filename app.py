import logging
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config import LOG_LEVEL
from services.db import init_db
from routes.root import router as root_router
from routes.campuses import router as campuses_router
from routes.imports import router as imports_router
from routes.entities import router as entities_router

load_dotenv()

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Campus Map API")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.on_event("startup")
def _startup():
    init_db()
    logger.info("Database ready")


# Register routers (routes live in /routes).
# Order matters: the generic /{kind} routes go last so /health and /campuses match first.
app.include_router(root_router)
app.include_router(campuses_router)
app.include_router(imports_router)
app.include_router(entities_router)

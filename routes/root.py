from fastapi import APIRouter
from services.db import list_campuses

router = APIRouter()


@router.get("/")
def root():
    return {
        "message": "Campus Map API - GeoJSON import of buildings, open spaces, POIs, paths and boundaries",
        "status": "active",
        "docs": "/docs"
    }


@router.get("/health")
def health():
    try:
        list_campuses(limit=1)
        return {"status": "ok"}
    except Exception as e:
        return {"status": "error", "detail": str(e)}

from fastapi import APIRouter, HTTPException
from schemas.campus_models import CampusCreate, Campus, CampusListResponse
from services.db import insert_campus, get_campus, list_campuses, campus_slug_exists
from utils_pkg import slugify, unique_slug
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post('/campuses', response_model=Campus, status_code=201)
def create_campus(req: CampusCreate):
    try:
        if req.slug:
            slug = slugify(req.slug)
            if campus_slug_exists(slug):
                raise HTTPException(status_code=409, detail=f"slug '{slug}' already in use")
        else:
            slug = unique_slug(req.name, campus_slug_exists)
        campus = insert_campus(req.name.strip(), slug, description=req.description, is_active=req.is_active)
        logger.info("Created campus %s (%s)", campus['id'], slug)
        return campus
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get('/campuses', response_model=CampusListResponse)
def get_campuses(active_only: bool = False, limit: int = 100):
    try:
        results = list_campuses(active_only=active_only, limit=limit)
        return {'count': len(results), 'campuses': results}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get('/campuses/{campus_id}', response_model=Campus)
def get_campus_detail(campus_id: str):
    try:
        c = get_campus(campus_id)
        if not c:
            raise HTTPException(status_code=404, detail='campus not found')
        return c
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

from fastapi import APIRouter, HTTPException, Query
from typing import Optional
from schemas.entity_models import EntityKind, EntityListResponse, ENTITY_TABLES
from services.db import list_entities, get_entity
from utils_pkg import page_offset, total_pages

router = APIRouter()


@router.get('/{kind}', response_model=EntityListResponse)
def entities_list(
    kind: EntityKind,
    campus_id: Optional[str] = Query(None, description="Campus to filter by"),
    search: Optional[str] = Query(None, description="Case-insensitive name search"),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=500),
    active_only: bool = False,
):
    try:
        rows, total = list_entities(
            ENTITY_TABLES[kind],
            campus_id=campus_id,
            search=search,
            limit=limit,
            offset=page_offset(page, limit),
            active_only=active_only,
        )
        return {
            'data': rows,
            'pagination': {'page': page, 'limit': limit, 'total': total, 'totalPages': total_pages(total, limit)},
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get('/{kind}/{entity_id}')
def entity_get(kind: EntityKind, entity_id: str):
    try:
        e = get_entity(ENTITY_TABLES[kind], entity_id)
        if not e:
            raise HTTPException(status_code=404, detail=f'{kind.value} item not found')
        return e
    except HTTPException:
        raise
    except Exception as ex:
        raise HTTPException(status_code=500, detail=str(ex))

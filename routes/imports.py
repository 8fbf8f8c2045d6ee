from fastapi import APIRouter, HTTPException, UploadFile, File, Form
from fastapi.concurrency import run_in_threadpool
from config import ALLOWED_IMPORT_EXTENSIONS
from schemas.entity_models import EntityKind
from schemas.import_models import ImportResponse
from services.importer import ImportReconciler, get_adapter, GeoJSONFormatError, CampusNotFoundError
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/{kind}/import", response_model=ImportResponse)
async def import_geojson(kind: EntityKind, file: UploadFile = File(...), campus_id: str = Form(...)):
    """Import the features of an uploaded GeoJSON FeatureCollection into a campus.

    Features whose name already exists in the campus (case-insensitive) are
    reported as duplicates; features that cannot be read or stored are
    reported as errors. Neither aborts the import.
    """
    try:
        if not (file.filename or '').lower().endswith(ALLOWED_IMPORT_EXTENSIONS):
            raise HTTPException(status_code=400, detail="File must have a .json or .geojson extension")
        if not campus_id.strip():
            raise HTTPException(status_code=400, detail="campus_id is required")
        content = await file.read()
        reconciler = ImportReconciler(get_adapter(kind.value))
        return await run_in_threadpool(reconciler.run, content, campus_id.strip())
    except HTTPException:
        raise
    except GeoJSONFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CampusNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception("Import of %s failed", kind.value)
        raise HTTPException(status_code=500, detail=f"Error importing {kind.value}: {str(e)}")

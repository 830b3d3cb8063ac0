from fastapi import APIRouter, Depends, status

from course_access.domain.catalog import Catalog
from course_access.depends import get_catalog

router = APIRouter(tags=["Catalog"])


@router.get("/catalog", status_code=status.HTTP_200_OK)
async def get_catalog_listing(catalog: Catalog = Depends(get_catalog)):
    """Courses, blocks and prices. Read-only."""
    return {"courses": catalog.to_dict()}

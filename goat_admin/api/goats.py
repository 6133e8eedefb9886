import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from goat_admin.errors import NotFoundError
from goat_admin.schemas.request import GoatInput
from goat_admin.schemas.response import GoatDeleteResponse, GoatRead
from goat_admin.services import listings
from goat_admin.services.storage import ImageFileStore, get_image_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[GoatRead])
def get_goats():
    """Get all goats, newest first."""
    logger.info("GET /products")
    return listings.list_goats()


@router.post("", response_model=GoatRead, status_code=status.HTTP_201_CREATED)
def create_goat(goat_data: GoatInput):
    logger.info(f"POST /products - Creating goat {goat_data.name!r}")
    return listings.create_goat(goat_data)


@router.get("/{goat_id}", response_model=GoatRead)
def get_goat(goat_id: int):
    logger.info(f"GET /products/{goat_id}")
    return listings.get_goat(goat_id)


@router.put("/{goat_id}", response_model=GoatRead)
def update_goat(
    goat_id: int,
    goat_data: GoatInput,
    store: ImageFileStore = Depends(get_image_store),
):
    """
    Replace a goat. Image files referenced before the update but missing from
    the submitted image list are deleted once the update is saved.
    """
    logger.info(f"PUT /products/{goat_id}")
    return listings.update_goat(goat_id, goat_data, store)


@router.delete("/{goat_id}", response_model=GoatDeleteResponse)
def delete_goat(goat_id: int, store: ImageFileStore = Depends(get_image_store)):
    logger.info(f"DELETE /products/{goat_id}")
    try:
        deleted_files = listings.delete_goat(goat_id, store)
    except NotFoundError as e:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": str(e), "deletedFiles": 0},
        )

    return GoatDeleteResponse(
        message="Goat deleted successfully", deleted_files=deleted_files
    )

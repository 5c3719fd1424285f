from fastapi import APIRouter, Depends, File, UploadFile

from storefront.schemas.image_schemas import ImageUploadResponse
from storefront.services.image_service import upload_image
from storefront.utils.check_roles import admin_only
from storefront.utils.get_user import get_current_user

router = APIRouter(prefix="/images", tags=["Images"])


@router.post("/upload", response_model=ImageUploadResponse)
@admin_only
async def upload_image_route(file: UploadFile = File(...), _user = Depends(get_current_user)):
    """Upload a product photo to Sirv and return its public URL."""
    return await upload_image(file)

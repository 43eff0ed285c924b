"""
FastAPI Routes for ICO Server
"""
from fastapi import APIRouter, HTTPException, UploadFile, File, Form
from fastapi.responses import Response
from pydantic import BaseModel, ValidationError
from typing import List, Optional
from loguru import logger

from config import settings, parse_sizes
from encoding.errors import IcoError
from ico_manager import get_ico_manager

manager = get_ico_manager()

# Create router
router = APIRouter()


# ============================================================================
# Response Models
# ============================================================================


class InfoResponse(BaseModel):
    server: str
    version: str
    default_sizes: List[int]
    mask_threshold: int
    decode_workers: int
    max_upload_size_mb: int


# ============================================================================
# Health & Info
# ============================================================================


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


@router.get("/info", response_model=InfoResponse)
async def get_info():
    """Get server information"""
    return InfoResponse(
        server="ICO Packer Server",
        version="1.0.0",
        default_sizes=settings.sizes_list,
        mask_threshold=settings.mask_threshold,
        decode_workers=settings.decode_workers,
        max_upload_size_mb=settings.max_upload_size_mb,
    )


# ============================================================================
# Icon Generation
# ============================================================================


@router.post("/ico")
async def create_ico(
    files: List[UploadFile] = File(..., description="Source images, in icon order"),
    resize: bool = Form(default=False, description="Build all sizes from the widest image"),
    sizes: Optional[str] = Form(default=None, description="Comma-separated sizes, e.g. 16,32,48"),
    mask_threshold: Optional[int] = Form(default=None, description="Alpha below this is transparent"),
):
    """Pack uploaded images into a Windows .ico file"""
    if not files:
        raise HTTPException(status_code=400, detail="No files uploaded")

    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    sources = []
    for upload in files:
        data = await upload.read()
        if len(data) > max_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"{upload.filename} exceeds {settings.max_upload_size_mb} MB",
            )
        sources.append(data)

    try:
        size_list = parse_sizes(sizes) if sizes else None
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid sizes: {sizes}")

    try:
        ico = await manager.generate_ico(
            sources,
            resize=resize,
            sizes=size_list,
            mask_threshold=mask_threshold,
        )
    except IcoError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    logger.info(f"✅ Served icon ({len(ico)} bytes from {len(sources)} uploads)")
    return Response(
        content=ico,
        media_type="image/x-icon",
        headers={"Content-Disposition": 'attachment; filename="icon.ico"'},
    )

#!/usr/bin/env python3
"""
ICO Packer Server
FastAPI Server that packs images into Windows .ico files
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
import uvicorn
import sys

from config import settings
from api.routes import router, manager

# Configure logging
logger.remove()
logger.add(
    sys.stdout,
    format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
    level=settings.log_level,
)

# Create FastAPI app
app = FastAPI(
    title="ICO Packer Server",
    description="Packs PNG and other raster images into multi-size Windows icons",
    version="1.0.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routes
app.include_router(router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    logger.info("🚀 Starting ICO Packer Server...")
    logger.info(f"📊 Server: http://{settings.ico_server_host}:{settings.ico_server_port}")
    logger.info(f"🖼️  Default sizes: {settings.sizes_list}")
    logger.info("✅ ICO Server ready!")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("🛑 Shutting down...")
    manager.shutdown()
    logger.info("✅ Shutdown complete")


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.ico_server_host,
        port=settings.ico_server_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )

"""
Apple Receipt Verify API
FastAPI backend that verifies App Store receipts and returns normalized purchases.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apple_receipt_verify.config import (
    ALLOWED_ORIGINS,
    SERVICE_NAME,
    VERSION,
    setup_logging,
    validate_startup,
)
from apple_receipt_verify.routers.receipts import router as receipts_router

setup_logging()
validate_startup()

app = FastAPI(title=SERVICE_NAME, version=VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

app.include_router(receipts_router)


# ============ API Endpoints ============

@app.get("/")
async def root():
    return {"status": "ok", "service": SERVICE_NAME, "version": VERSION}


@app.get("/health")
async def health():
    return {"status": "ok", "service": SERVICE_NAME, "version": VERSION}


if __name__ == "__main__":
    import os
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)

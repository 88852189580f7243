"""
Entry point for the FastAPI application.

Run with (from project root):

    uvicorn main:app --reload

Currently exposes the \"translate PDF\" feature via:

    POST /api/translate-pdf
"""

import logging
import sys

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from features.translate.presentation.api import INTERNAL_ERROR_MESSAGE, router as translate_pdf_router

load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,  # Set to DEBUG for more verbose output
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler('pdf_translation.log', encoding='utf-8')
    ]
)

# Set specific log levels for modules
logging.getLogger("features.translate.infrastructure.chunk_segmenter").setLevel(logging.DEBUG)
logging.getLogger("features.translate.infrastructure.text_layout").setLevel(logging.DEBUG)

logger = logging.getLogger(__name__)
logger.info("Starting PDF Translation API")

app = FastAPI(title="PDF Translation API", version="0.1.0")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

app.include_router(translate_pdf_router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"success": False, "error": INTERNAL_ERROR_MESSAGE})


@app.get("/health")
def health_check() -> dict:
    return {"status": "ok"}

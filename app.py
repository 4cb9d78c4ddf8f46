"""
Echo Chamber - FastAPI Backend
REST API and web page for arithmetic progression prediction
"""

import os
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import APP_TITLE, APP_VERSION, DEMO_SEQUENCE, EXAMPLE_SEQUENCES
from echo_chamber.core import SequencePredictor
from echo_chamber.utils import get_logger

logger = get_logger(__name__)

# Templates and static files
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
TEMPLATES_DIR = os.path.join(BASE_DIR, "templates")
STATIC_DIR = os.path.join(BASE_DIR, "static")

templates = Jinja2Templates(directory=TEMPLATES_DIR)


# ============================================
# REQUEST MODELS
# ============================================

class SequenceRequest(BaseModel):
    # Left untyped so malformed sequences reach the predictor and get a
    # structured answer instead of a 422
    sequence: Optional[Any] = None


# ============================================
# DEPENDENCIES
# ============================================

def get_predictor(request: Request) -> SequencePredictor:
    """Return the predictor owned by the running application."""
    return request.app.state.predictor


VALIDATE_PATH = "/api/validate"


def _result_flag(request: Request) -> str:
    """Name of the boolean field the route answers with."""
    return "isValid" if request.url.path == VALIDATE_PATH else "success"


def _error(status_code: int, message: str, flag: str = "success") -> JSONResponse:
    return JSONResponse(status_code=status_code, content={flag: False, "message": message})


# ============================================
# APPLICATION FACTORY
# ============================================

def create_app(predictor: Optional[SequencePredictor] = None) -> FastAPI:
    """
    Build the FastAPI application around one predictor instance.

    Args:
        predictor: Component shared by every request. A new one is created
            when omitted.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(title=APP_TITLE, version=APP_VERSION)
    app.state.predictor = predictor if predictor is not None else SequencePredictor()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if os.path.isdir(STATIC_DIR):
        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    # ============================================
    # ERROR HANDLERS
    # ============================================

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Wrong method on a known path is as unknown as a wrong path
        if exc.status_code in (404, 405):
            return _error(404, "Endpoint not found")
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
        return _error(exc.status_code, str(exc.detail), flag=_result_flag(request))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.debug(f"Bad request body on {request.url.path}: {exc.errors()}")
        return _error(400, "Invalid request body", flag=_result_flag(request))

    @app.exception_handler(Exception)
    async def server_error_handler(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} crashed")
        return _error(500, f"Server error: {exc}", flag=_result_flag(request))

    # ============================================
    # HTML ROUTES
    # ============================================

    @app.get("/", response_class=HTMLResponse)
    async def home(request: Request):
        """Serve main HTML page"""
        return templates.TemplateResponse(
            request,
            "index.html",
            {"title": APP_TITLE, "demo_sequence": DEMO_SEQUENCE, "examples": EXAMPLE_SEQUENCES},
        )

    # ============================================
    # API ROUTES
    # ============================================

    @app.post("/api/predict")
    async def predict(req: SequenceRequest, core: SequencePredictor = Depends(get_predictor)):
        """Predict the next number in a sequence"""
        if req.sequence is None:
            return _error(400, "Sequence is required")
        try:
            return core.predict(req.sequence).to_dict()
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Server error: {e}")

    @app.get("/api/memories")
    async def get_memories(core: SequencePredictor = Depends(get_predictor)):
        """Get all stored echoes, oldest first"""
        try:
            memories = [m.to_dict() for m in core.list_memories()]
            return {"memories": memories, "count": len(memories)}
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Server error: {e}")

    @app.delete("/api/memories")
    async def clear_memories(core: SequencePredictor = Depends(get_predictor)):
        """Clear all stored echoes"""
        try:
            core.clear()
            return {"success": True, "message": "All memories have been cleared"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Server error: {e}")

    @app.post(VALIDATE_PATH)
    async def validate(req: SequenceRequest, core: SequencePredictor = Depends(get_predictor)):
        """Check whether a sequence is an arithmetic progression"""
        if req.sequence is None:
            return _error(400, "Sequence is required", flag="isValid")
        try:
            return core.validate(req.sequence).to_dict()
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Server error: {e}")

    @app.get("/api/test")
    async def self_test():
        """Predict the demo sequence on a fresh predictor to prove the server works"""
        try:
            result = SequencePredictor().predict(DEMO_SEQUENCE)
            return {
                "success": result.success,
                "result": result.to_dict(),
                "message": "Server is working correctly",
            }
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Server error: {e}")

    @app.get("/api/health")
    async def health_check(core: SequencePredictor = Depends(get_predictor)):
        """Health check endpoint"""
        return {
            "status": "healthy",
            "predictions": core.prediction_count,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    logger.info(f"{APP_TITLE} API ready")
    return app


app = create_app()

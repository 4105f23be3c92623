"""HTTP routes for report evaluation."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from ..config import ServerConfig
from ..errors import EvaluationInputError
from ..evaluation.evaluator import Evaluator
from ..models.evaluation import EvaluationResult
from ..utils.uploads import save_upload

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "An error occurred during evaluation."
UPLOAD_FIELD = "pdfFile"

router = APIRouter()


def get_evaluator(request: Request) -> Evaluator:
    """Evaluator bound to the running application."""
    return request.app.state.evaluator


def get_server_config(request: Request) -> ServerConfig:
    """Server settings bound to the running application."""
    return request.app.state.config.server


@router.get("/health", tags=["system"])
def health() -> dict[str, str]:
    """Simple health-check endpoint."""
    return {"status": "ok"}


@router.post(
    "/evaluate",
    operation_id="evaluate_report",
    response_model=EvaluationResult,
    tags=["evaluation"],
)
async def evaluate_route(
    request: Request,
    evaluator: Evaluator = Depends(get_evaluator),
    settings: ServerConfig = Depends(get_server_config),
) -> Response:
    """Score a PDF report uploaded as multipart field ``pdfFile``.

    Any failure, including a missing or malformed upload, is reported as a
    plain-text 500 without detail. The cause is logged.
    """
    stored_path = None
    try:
        # Parsed here rather than by FastAPI so body errors share the 500 path
        form = await request.form()
        pdf_file = form.get(UPLOAD_FIELD)
        if not isinstance(pdf_file, UploadFile):
            raise EvaluationInputError(f"No file uploaded in field '{UPLOAD_FIELD}'")

        stored_path = await run_in_threadpool(
            save_upload, pdf_file.file, settings.upload_dir, pdf_file.filename
        )
        result = await evaluator.evaluate(stored_path)
    except Exception:
        logger.exception("Evaluation request failed")
        return PlainTextResponse(ERROR_MESSAGE, status_code=500)
    finally:
        if stored_path is not None and not settings.keep_uploads:
            stored_path.unlink(missing_ok=True)

    return JSONResponse({"score": result.score, "explanation": result.explanation})

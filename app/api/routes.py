import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, Response

from app.models.pydantic import (
    ApplyFixesRequest,
    ApplyFixesResponse,
    ApplyFixRequest,
    ApplyFixResponse,
    ExportRequest,
    InputLimitErrorBody,
    ProofreadRequest,
    ProofreadResult,
)
from app.services.proofreading.errors import InputLimitError, ProofreadResponseError
from app.services.proofreading_service import ProofreadingService, build_llm_client

logger = logging.getLogger(__name__)

router = APIRouter()


# Service (inkl. LLM-Client) wird einmal im Lifespan erzeugt; Fallback für Apps ohne Lifespan
def get_proofreading_service(request: Request) -> ProofreadingService:
    service = getattr(request.app.state, "proofreading_service", None)
    if service is None:
        service = ProofreadingService(build_llm_client())
        request.app.state.proofreading_service = service
    return service


# einfacher Health-Check
@router.get("/health")
async def health():
    return {"status": "ok"}


# erkennt Issues im Transkript, ohne es umzuschreiben
@router.post("/proofread", response_model=ProofreadResult)
def proofread(req: ProofreadRequest, service: ProofreadingService = Depends(get_proofreading_service)):
    if not req.transcript:
        raise HTTPException(status_code=400, detail="Transcript text is required")

    try:
        return service.proofread(req.transcript)
    except InputLimitError as e:
        body = InputLimitErrorBody(
            error=str(e),
            max_lines=e.max_lines,
            max_chars=e.max_chars,
            current_lines=e.current_lines,
            current_chars=e.current_chars,
        )
        return JSONResponse(status_code=400, content=body.model_dump())
    except ProofreadResponseError as e:
        logger.exception("Invalid proofreading response: %s", e.details)
        raise HTTPException(status_code=502, detail=ProofreadResponseError.user_message)
    except Exception as e:
        logger.exception("Proofreading failed")
        raise HTTPException(status_code=500, detail=str(e))


# wendet ein einzelnes Issue auf eine Zeile an (Heuristik oder KI mit Fallback)
@router.post("/apply-fix", response_model=ApplyFixResponse)
def apply_fix(req: ApplyFixRequest, service: ProofreadingService = Depends(get_proofreading_service)):
    corrected = service.apply_fix(req.line_text, req.issue, use_ai=req.use_ai)
    return ApplyFixResponse(corrected_line=corrected)


# wendet alle akzeptierten Issues auf das Original-Transkript an
@router.post("/apply-fixes", response_model=ApplyFixesResponse)
def apply_fixes(req: ApplyFixesRequest, service: ProofreadingService = Depends(get_proofreading_service)):
    return service.apply_fixes(req.transcript, req.issues, req.accepted_ids, use_ai=req.use_ai)


@router.post("/export/{fmt}")
def export(fmt: str, req: ExportRequest, service: ProofreadingService = Depends(get_proofreading_service)):
    try:
        content, media_type = service.export(fmt, req.transcript, req.issues, req.accepted_ids)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return Response(content=content, media_type=media_type)

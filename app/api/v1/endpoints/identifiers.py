"""
Access identifier endpoints (reference import/export).
"""
from fastapi import APIRouter, HTTPException, status

from app.schemas.access import DecodeRequest, IdentifierResponse
from app.services.access_service import AccessService
from app.utils.access import AccessSpecification, DecodeError

router = APIRouter()


@router.post("/encode", response_model=IdentifierResponse)
async def encode_identifier(spec: AccessSpecification):
    """Render the canonical identifier of an access."""
    service = AccessService()
    return IdentifierResponse(identifier=service.export_reference(spec))


@router.post("/decode", response_model=AccessSpecification)
async def decode_identifier(request: DecodeRequest):
    """
    Rebuild an access from its canonical identifier.

    Malformed identifiers are rejected with 400 and the decode error, so the
    caller sees exactly which field or layout was wrong.
    """
    service = AccessService()
    try:
        return service.import_reference(request.identifier, request.scope_kind)
    except DecodeError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": type(e).__name__,
                "message": str(e),
                "identifier": e.identifier,
            },
        )

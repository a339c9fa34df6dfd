"""
Access matching endpoint.
"""
import logging

from fastapi import APIRouter

from app.schemas.access import MatchRequest, ReconcileResult
from app.services.access_service import AccessService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/match", response_model=ReconcileResult)
async def match_access(request: MatchRequest):
    """
    Find the listed access matching a desired access.

    `records` is the output of groupListServers / groupListGuestAccesses for
    the scope of the specification. A desired access that is not listed is
    returned with status "absent".
    """
    service = AccessService()
    result = service.reconcile(request.specification, request.records)
    logger.info(f"Matched {result.identifier}: {result.status.value}")
    return result

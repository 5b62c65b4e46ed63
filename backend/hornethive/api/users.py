"""
Users Router
Role and status lookups by email.
"""

from fastapi import APIRouter, Depends, Query

from hornethive.api.dependencies import get_account_query
from hornethive.schemas.common import error_responses
from hornethive.schemas.user import ActiveResponse, RoleResponse
from hornethive.services.account_query import AccountQuery

router = APIRouter()


@router.get("/role", response_model=RoleResponse, responses=error_responses(404, 500))
async def get_role(
    email: str = Query(..., min_length=1),
    query: AccountQuery = Depends(get_account_query),
):
    result = await query.get_role(email)
    return {"role": result.unwrap()}


@router.get("/active", response_model=ActiveResponse, responses=error_responses(404, 500))
async def get_active(
    email: str = Query(..., min_length=1),
    query: AccountQuery = Depends(get_account_query),
):
    result = await query.is_active(email)
    return {"active": result.unwrap()}

"""
Authentication Router
Endpoints for signup, login and the administrator approval links.
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from fastapi.responses import PlainTextResponse

from hornethive.api.dependencies import (
    get_approval_workflow,
    get_login_workflow,
    get_signup_workflow,
    get_username_allocator,
)
from hornethive.schemas.common import MessageResponse, error_responses
from hornethive.schemas.user import LoginResponse, UserCreate, UserLogin, UsernameSuggestion
from hornethive.services.approval import ApprovalWorkflow
from hornethive.services.login import LoginWorkflow
from hornethive.services.signup import SignupWorkflow
from hornethive.services.usernames import UsernameAllocator

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/signup", response_model=MessageResponse, responses=error_responses(400, 500))
async def signup(
    user_data: UserCreate,
    background_tasks: BackgroundTasks,
    workflow: SignupWorkflow = Depends(get_signup_workflow),
    approval: ApprovalWorkflow = Depends(get_approval_workflow),
):
    """
    Register a new account. It cannot log in until an administrator
    follows the approve link emailed to them.
    """
    result = await workflow.signup(user_data)
    message = result.unwrap()
    background_tasks.add_task(approval.notify_admin_of_signup, user_data)
    return {"message": message}


@router.post("/login", response_model=LoginResponse, responses=error_responses(401, 403, 500))
async def login(
    login_data: UserLogin,
    workflow: LoginWorkflow = Depends(get_login_workflow),
):
    """
    Authenticate by username. Returns the account without its password.
    401 for unknown users or wrong passwords, 403 while awaiting approval.
    """
    result = await workflow.login(login_data.username, login_data.password)
    return {"user": result.unwrap()}


@router.get("/approve", response_class=PlainTextResponse, responses=error_responses(404, 500, 502))
async def approve(
    email: str = Query(..., min_length=1),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
):
    result = await workflow.approve(email)
    return result.unwrap()


@router.get("/reject", response_class=PlainTextResponse, responses=error_responses(404, 500, 502))
async def reject(
    email: str = Query(..., min_length=1),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
):
    result = await workflow.reject(email)
    return result.unwrap()


@router.get("/username-suggestion", response_model=UsernameSuggestion)
async def suggest_username(
    first_name: str = Query(...),
    last_name: str = Query(...),
    allocator: UsernameAllocator = Depends(get_username_allocator),
):
    """Free username derived from the name and the current month."""
    return {"username": await allocator.allocate(first_name, last_name)}

"""
API Dependencies
Builds the store, collaborators and workflows injected into route handlers.
Tests override get_user_store / get_notifier / get_password_hasher.
"""

from fastapi import Depends

from hornethive.database import AsyncSessionLocal
from hornethive.services.account_query import AccountQuery
from hornethive.services.approval import ApprovalWorkflow
from hornethive.services.login import LoginWorkflow
from hornethive.services.notifier import Notifier, SmtpNotifier
from hornethive.services.password_hasher import PasswordHasher, password_hasher
from hornethive.services.signup import SignupWorkflow
from hornethive.services.user_store import SqlAlchemyUserStore, UserStore
from hornethive.services.usernames import UsernameAllocator


def get_user_store() -> UserStore:
    return SqlAlchemyUserStore(AsyncSessionLocal)


def get_notifier() -> Notifier:
    return SmtpNotifier.from_settings()


def get_password_hasher() -> PasswordHasher:
    return password_hasher


def get_signup_workflow(
    store: UserStore = Depends(get_user_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> SignupWorkflow:
    return SignupWorkflow(store, hasher)


def get_login_workflow(
    store: UserStore = Depends(get_user_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> LoginWorkflow:
    return LoginWorkflow(store, hasher)


def get_approval_workflow(
    store: UserStore = Depends(get_user_store),
    notifier: Notifier = Depends(get_notifier),
) -> ApprovalWorkflow:
    return ApprovalWorkflow(store, notifier)


def get_account_query(store: UserStore = Depends(get_user_store)) -> AccountQuery:
    return AccountQuery(store)


def get_username_allocator(store: UserStore = Depends(get_user_store)) -> UsernameAllocator:
    return UsernameAllocator(store)

"""
FastAPI dependencies resolving the per-application service instances.

``create_app`` builds one directory, family service and chat gateway per
application and hangs them off ``app.state``; routers reach them through
these functions so tests can run against a fresh application.
"""

from fastapi import Request

from backend.chatbot.gateway import ChatGateway
from backend.directory.users import UserDirectory
from backend.family.service import FamilyService


def get_user_directory(request: Request) -> UserDirectory:
    return request.app.state.user_directory


def get_family_service(request: Request) -> FamilyService:
    return request.app.state.family_service


def get_chat_gateway(request: Request) -> ChatGateway:
    return request.app.state.chat_gateway

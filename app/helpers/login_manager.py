from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.models.model_member import Member
from app.services.srv_member import MemberService

reusable_oauth2 = HTTPBearer(
    scheme_name='Authorization'
)


def login_required(
    http_authorization_credentials: HTTPAuthorizationCredentials = Depends(reusable_oauth2),
    member_service: MemberService = Depends()
) -> Member:
    return member_service.get_current_member(http_authorization_credentials.credentials)

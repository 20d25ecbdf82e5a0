import jwt
import logging
from uuid import UUID
from fastapi import Depends
from pydantic import ValidationError
from starlette import status

from app.core.security import decode_access_token
from app.helpers.error_codes import GeneralErrorCode
from app.helpers.exception_handler import CustomException, BusinessException
from app.models.model_member import Member
from app.repository.repo_member import MemberRepository
from app.schemas.sche_token import TokenPayload

logger = logging.getLogger(__name__)


class MemberService:
    def __init__(self, member_repo: MemberRepository = Depends()):
        self.member_repo = member_repo

    def get_current_member(self, token: str) -> Member:
        try:
            payload = decode_access_token(token)
            token_data = TokenPayload(**payload)
        except (jwt.PyJWTError, ValidationError) as e:
            logger.error(f"Credential validation failed: {e}")
            raise CustomException(
                http_code=status.HTTP_403_FORBIDDEN,
                code='403',
                message="Could not validate credentials"
            )
        member = None
        if token_data.member_id:
            try:
                member = self.member_repo.get_by_id(UUID(token_data.member_id))
            except ValueError:
                member = None
        if not member:
            logger.error(f"Member not found: {token_data.member_id}")
            raise BusinessException(GeneralErrorCode.MEMBER_NOT_FOUND)

        logger.info(f"Member authenticated: {member.member_id}")
        return member

from typing import Optional, List
from uuid import UUID
from fastapi import Depends
from sqlalchemy.orm import Session
from app.db.base import get_db
from app.models.model_member import Member

class MemberRepository:
    def __init__(self, db_session: Session = Depends(get_db)):
        self.db = db_session

    def get_by_id(self, member_id: UUID) -> Optional[Member]:
        return self.db.query(Member).filter(Member.member_id == member_id).first()

    def get_family_members(self, member: Member) -> List[Member]:
        if member.family_id is None:
            return []
        return self.db.query(Member).filter(Member.family_id == member.family_id).order_by(Member.created_at).all()

from typing import Optional

from pydantic import BaseModel


class TokenPayload(BaseModel):
    member_id: Optional[str] = None

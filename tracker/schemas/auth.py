from pydantic import BaseModel, EmailStr, Field

class RequestLinkIn(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    email: EmailStr

class RequestLinkOut(BaseModel):
    sent: bool = True
    token: str | None = None
    link: str | None = None

class RedeemIn(BaseModel):
    token: str

class AccessTokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"

from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: str
    password: str


class CredentialRequest(BaseModel):
    api_key: str

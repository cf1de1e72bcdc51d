from enum import Enum
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FigFunction(str, Enum):
    explain = "explain"
    ask = "ask"
    # Log tag only: no route produces docstring records
    docstring = "docstring"
    complexity = "complexity"
    translate = "translate"


class FunctionRequest(BaseModel):
    """Body of every /v1 fig function. Presence checks happen in validation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    code: Optional[str] = None
    input_language: Optional[str] = None
    output_language: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    github_username: Optional[str] = None
    source: Optional[str] = None
    question: Optional[str] = None


class NewTokens(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_token: str
    refresh_token: Optional[str] = None


class FunctionResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID
    output: str
    new_tokens: Optional[NewTokens] = None


class TokenCredential(BaseModel):
    kind: Literal["token"] = "token"
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None


class UsernameCredential(BaseModel):
    kind: Literal["username"] = "username"
    github_username: str


Credential = Annotated[
    Union[TokenCredential, UsernameCredential], Field(discriminator="kind")
]


class UserIdentity(BaseModel):
    email: str
    user_id: str
    plan: str = "free"


class IdentityResult(BaseModel):
    identity: UserIdentity
    new_tokens: Optional[NewTokens] = None


class LogRecord(BaseModel):
    id: UUID
    email: str
    fig_function: FigFunction
    input: str
    output: str
    source: Optional[str] = None
    input_language: str
    output_language: Optional[str] = None

"""
jobly.api.schemas

Request and response models.

Responsibilities:
- Validate request bodies (unknown fields rejected, numeric ranges enforced).
- Shape responses with the camelCase field names clients expect.
"""

from __future__ import annotations

from decimal import Decimal
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _Camel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _Body(_Camel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class _Patch(_Body):
    """Partial-update body: absent fields stay absent, explicit nulls are checked."""

    non_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def check_not_null(self):
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} may not be null")
        return self


# --- Auth -------------------------------------------------------------------


class LoginRequest(_Body):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=1, max_length=72)


class RegisterRequest(_Body):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=72)
    first_name: str = Field(min_length=1, max_length=30)
    last_name: str = Field(min_length=1, max_length=30)
    email: str = Field(min_length=6, max_length=60, pattern=r"^[^@\s]+@[^@\s]+$")


class TokenResponse(BaseModel):
    token: str


# --- Companies --------------------------------------------------------------


class CompanyNew(_Body):
    handle: str = Field(min_length=1, max_length=25)
    name: str = Field(min_length=1)
    description: str
    num_employees: int | None = Field(default=None, ge=0)
    logo_url: str | None = None


class CompanyUpdate(_Patch):
    non_nullable = ("name", "description")

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    num_employees: int | None = Field(default=None, ge=0)
    logo_url: str | None = None


class CompanyOut(_Camel):
    handle: str
    name: str
    description: str
    num_employees: int | None = None
    logo_url: str | None = None


class CompanyJobOut(_Camel):
    id: int
    title: str
    salary: int | None = None
    equity: Decimal | None = None


class CompanyDetailOut(CompanyOut):
    jobs: list[CompanyJobOut] = Field(default_factory=list)


class CompanyResponse(_Camel):
    company: CompanyOut


class CompanyDetailResponse(_Camel):
    company: CompanyDetailOut


class CompanyListResponse(_Camel):
    companies: list[CompanyOut]


# --- Jobs -------------------------------------------------------------------


class JobNew(_Body):
    title: str = Field(min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: float | None = Field(default=None, ge=0, le=1)
    company_handle: str = Field(min_length=1, max_length=25)


class JobUpdate(_Patch):
    non_nullable = ("title",)

    title: str | None = Field(default=None, min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: float | None = Field(default=None, ge=0, le=1)


class JobOut(_Camel):
    id: int
    title: str
    salary: int | None = None
    equity: Decimal | None = None
    company: CompanyOut


class JobUpdatedOut(_Camel):
    id: int
    title: str
    salary: int | None = None
    equity: Decimal | None = None
    company_handle: str


class JobResponse(_Camel):
    job: JobOut


class JobUpdatedResponse(_Camel):
    job: JobUpdatedOut


class JobListResponse(_Camel):
    jobs: list[JobOut]


# --- Users ------------------------------------------------------------------


class UserNew(RegisterRequest):
    is_admin: bool = False


class UserUpdate(_Patch):
    non_nullable = ("first_name", "last_name", "password", "email")

    first_name: str | None = Field(default=None, min_length=1, max_length=30)
    last_name: str | None = Field(default=None, min_length=1, max_length=30)
    password: str | None = Field(default=None, min_length=5, max_length=72)
    email: str | None = Field(default=None, min_length=6, max_length=60, pattern=r"^[^@\s]+@[^@\s]+$")


class UserOut(_Camel):
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetailOut(UserOut):
    jobs: list[int] = Field(default_factory=list)


class UserResponse(_Camel):
    user: UserOut


class UserDetailResponse(_Camel):
    user: UserDetailOut


class UserCreatedResponse(_Camel):
    user: UserOut
    token: str


class UserListResponse(_Camel):
    users: list[UserOut]


class AppliedOut(_Camel):
    applied: int


class AppliedResponse(_Camel):
    user: AppliedOut


class DeletedResponse(BaseModel):
    deleted: str

"""
Pydantic validation schemas
"""
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional
from datetime import date, datetime, time

from app.db.models import PartyRole, Rating

# ============================================================================
# Case Schemas
# ============================================================================

class CaseFields(BaseModel):
    """
    Every mutable case column. Used where the whole row is written at once
    (create, complete update, migration); unknown keys are ignored.
    """
    model_config = ConfigDict(extra="ignore")

    intake_date: Optional[date] = None
    management_period: Optional[str] = Field(None, max_length=100)
    full_name: str = Field(..., min_length=1, max_length=255)
    birth_date: Optional[date] = None
    phone: Optional[str] = Field(None, max_length=30)
    landline_phone: Optional[str] = Field(None, max_length=30)
    email: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = None
    process_number: Optional[str] = Field(None, max_length=100)
    legal_matter: Optional[str] = Field(None, max_length=100)
    process_type: Optional[str] = Field(None, max_length=100)
    party_role: Optional[PartyRole] = None
    judge_prosecutor: Optional[str] = Field(None, max_length=255)
    judge_prosecutor_secondary: Optional[str] = Field(None, max_length=255)
    counterparty: Optional[str] = Field(None, max_length=255)
    activities_performed: str = ""
    current_status: Optional[str] = Field(None, max_length=255)
    next_activity_date: Optional[date] = None
    occupation: Optional[str] = Field(None, max_length=100)
    education_level: Optional[str] = Field(None, max_length=100)
    ethnicity: Optional[str] = Field(None, max_length=50)
    gender: Optional[str] = Field(None, max_length=50)
    civil_status: Optional[str] = Field(None, max_length=50)
    number_of_children: int = Field(0, ge=0)
    disability: Optional[str] = Field(None, max_length=100)
    user_type: Optional[str] = Field(None, max_length=100)
    service_line: Optional[str] = Field(None, max_length=100)
    topic: Optional[str] = Field(None, max_length=255)
    assigned_student: Optional[str] = Field(None, max_length=255)
    legal_counsel: Optional[str] = Field(None, max_length=255)


class CaseCreate(CaseFields):
    national_id: str = Field(..., min_length=1, max_length=20)


class CaseUpdate(CaseFields):
    """
    Type coercion for the allow-listed columns of a partial update. Same
    limits as ``CaseFields`` but nothing is required; the NOT NULL columns
    still refuse an explicit null.
    """
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    activities_performed: Optional[str] = None
    number_of_children: Optional[int] = Field(None, ge=0)

    @field_validator("full_name", "activities_performed", "number_of_children", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


class CaseResponse(CaseFields):
    national_id: str
    full_name: str
    activities_performed: Optional[str] = ""
    number_of_children: Optional[int] = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

# ============================================================================
# Socioeconomic Form Schemas
# ============================================================================

class SocioeconomicFormData(BaseModel):
    """Form payload; missing flags default to False and amounts to 0"""
    model_config = ConfigDict(extra="ignore")

    father_works: bool = False
    mother_works: bool = False
    others_work: bool = False
    owns_vehicle: bool = False
    owns_business: bool = False
    owns_house: bool = False
    owns_apartment: bool = False
    owns_land: bool = False
    other_assets: Optional[str] = None
    total_income: float = 0
    total_expenses: float = 0
    rent_expense: float = 0
    electricity_expense: float = 0
    water_expense: float = 0
    phone_expense: float = 0
    internet_expense: float = 0


class SocioeconomicFormResponse(SocioeconomicFormData):
    id: int
    national_id: str

    model_config = ConfigDict(from_attributes=True)

# ============================================================================
# Composite case requests
# ============================================================================

class CaseCompleteCreate(BaseModel):
    """Body of POST /cases/complete"""
    model_config = ConfigDict(populate_by_name=True)

    case_data: CaseCreate = Field(..., alias="caseData")
    socioeconomic_form: Optional[SocioeconomicFormData] = Field(None, alias="socioeconomicForm")


class CaseCompleteUpdate(BaseModel):
    """Body of PUT /cases/{id}/complete and PUT /cases/{old}/migrate/{new}"""
    model_config = ConfigDict(populate_by_name=True)

    case_data: CaseFields = Field(..., alias="caseData")
    socioeconomic_form: Optional[SocioeconomicFormData] = Field(None, alias="socioeconomicForm")


class CaseMessageResponse(BaseModel):
    message: str
    case: CaseResponse


class MessageResponse(BaseModel):
    message: str

# ============================================================================
# Satisfaction Survey Schemas
# ============================================================================

class SurveyCreate(BaseModel):
    national_id: Optional[str] = Field(None, max_length=20)
    referral_channel: Optional[str] = None
    referral_phone: Optional[str] = None
    information_rating: Rating
    guidance_rating: Rating
    satisfaction_rating: Rating
    would_use_again: bool = False
    comments: Optional[str] = None


class SurveyResponse(SurveyCreate):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SurveyStatsRow(BaseModel):
    """Totals repeated on every row; channel columns are null on the totals row"""
    total: int
    info_excellent: int
    info_good: int
    info_poor: int
    guidance_excellent: int
    guidance_good: int
    guidance_poor: int
    satisfaction_excellent: int
    satisfaction_good: int
    satisfaction_poor: int
    would_use_again: int
    referral_channel: Optional[str] = None
    channel_count: Optional[int] = None

# ============================================================================
# Personal Activity Schemas
# ============================================================================

class ActivityBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    activity_date: date
    activity_time: Optional[time] = None
    category: str = Field(..., min_length=1, max_length=50)
    completed: bool = False
    national_id: Optional[str] = Field(None, max_length=20)


class ActivityCreate(ActivityBase):
    pass


class ActivityUpdate(ActivityBase):
    """Full overwrite of an activity"""
    pass


class ActivityResponse(ActivityBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

# ============================================================================
# Auth Schemas
# ============================================================================

class UserLogin(BaseModel):
    """Login schema"""
    email: EmailStr
    password: str


class RecoverPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """Reset password with the token from the recovery link"""
    token: str = ""
    new_password: str = ""


class UserOut(BaseModel):
    id: int
    email: str
    full_name: str

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class VerifyResponse(BaseModel):
    user: UserOut


class RecoverPasswordResponse(BaseModel):
    message: str
    dev_token: Optional[str] = None

"""
SQLAlchemy ORM Models
"""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Enum as SQLEnum,
    Float,
    Integer,
    String,
    Text,
    Time,
    TIMESTAMP,
)
from sqlalchemy import Index

from app.db.database import Base

# ============================================================================
# Enums
# ============================================================================

class PartyRole(str, enum.Enum):
    """Role of the clinic's client in the judicial process"""
    ACTOR = "ACTOR"
    DEFENDANT = "DEFENDANT"

class Rating(str, enum.Enum):
    """Three-valued survey rating"""
    excellent = "excellent"
    good = "good"
    poor = "poor"

# ============================================================================
# Cases
# ============================================================================

class Case(Base):
    """One record per person served, keyed by national ID number."""
    __tablename__ = "case"

    national_id = Column(String(20), primary_key=True)

    # Intake
    intake_date = Column(Date, nullable=True)
    management_period = Column(String(100), nullable=True)

    # Person
    full_name = Column(String(255), nullable=False)
    birth_date = Column(Date, nullable=True)
    phone = Column(String(30), nullable=True)
    landline_phone = Column(String(30), nullable=True)
    email = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)

    # Judicial process
    process_number = Column(String(100), nullable=True)
    legal_matter = Column(String(100), nullable=True)
    process_type = Column(String(100), nullable=True)
    party_role = Column(SQLEnum(PartyRole), nullable=True)
    judge_prosecutor = Column(String(255), nullable=True)
    judge_prosecutor_secondary = Column(String(255), nullable=True)
    counterparty = Column(String(255), nullable=True)
    activities_performed = Column(Text, nullable=False, default="")
    current_status = Column(String(255), nullable=True)
    next_activity_date = Column(Date, nullable=True)

    # Demographics
    occupation = Column(String(100), nullable=True)
    education_level = Column(String(100), nullable=True)
    ethnicity = Column(String(50), nullable=True)
    gender = Column(String(50), nullable=True)
    civil_status = Column(String(50), nullable=True)
    number_of_children = Column(Integer, nullable=False, default=0)
    disability = Column(String(100), nullable=True)
    user_type = Column(String(100), nullable=True)
    service_line = Column(String(100), nullable=True)
    topic = Column(String(255), nullable=True)
    assigned_student = Column(String(255), nullable=True)
    legal_counsel = Column(String(255), nullable=True)

    # Timestamps
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)


class SocioeconomicForm(Base):
    """Intake form, at most one per case. ``national_id`` is not an enforced FK."""
    __tablename__ = "socioeconomic_form"

    id = Column(Integer, primary_key=True, autoincrement=True)
    national_id = Column(String(20), nullable=False, unique=True, index=True)

    # Household employment
    father_works = Column(Boolean, nullable=False, default=False)
    mother_works = Column(Boolean, nullable=False, default=False)
    others_work = Column(Boolean, nullable=False, default=False)

    # Assets
    owns_vehicle = Column(Boolean, nullable=False, default=False)
    owns_business = Column(Boolean, nullable=False, default=False)
    owns_house = Column(Boolean, nullable=False, default=False)
    owns_apartment = Column(Boolean, nullable=False, default=False)
    owns_land = Column(Boolean, nullable=False, default=False)
    other_assets = Column(Text, nullable=True)

    # Income / expenses
    total_income = Column(Float, nullable=False, default=0)
    total_expenses = Column(Float, nullable=False, default=0)
    rent_expense = Column(Float, nullable=False, default=0)
    electricity_expense = Column(Float, nullable=False, default=0)
    water_expense = Column(Float, nullable=False, default=0)
    phone_expense = Column(Float, nullable=False, default=0)
    internet_expense = Column(Float, nullable=False, default=0)


class SatisfactionSurvey(Base):
    """Client satisfaction survey. Several per case, append-only."""
    __tablename__ = "satisfaction_survey"

    id = Column(Integer, primary_key=True, autoincrement=True)
    national_id = Column(String(20), nullable=True, index=True)
    referral_channel = Column(String(100), nullable=True)
    referral_phone = Column(String(30), nullable=True)
    information_rating = Column(SQLEnum(Rating), nullable=False)
    guidance_rating = Column(SQLEnum(Rating), nullable=False)
    satisfaction_rating = Column(SQLEnum(Rating), nullable=False)
    would_use_again = Column(Boolean, nullable=False, default=False)
    comments = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow)


class PersonalActivity(Base):
    """Reminder/task of a staff member, optionally tied to a case."""
    __tablename__ = "personal_activity"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    activity_date = Column(Date, nullable=False)
    activity_time = Column(Time, nullable=True)
    category = Column(String(50), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    national_id = Column(String(20), nullable=True, index=True)
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_personal_activity_date_time", "activity_date", "activity_time"),
    )

# ============================================================================
# Staff accounts
# ============================================================================

class User(Base):
    """Clinic staff account"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    # Login throttling
    failed_login_attempts = Column(Integer, nullable=False, default=0)
    locked_until = Column(TIMESTAMP, nullable=True)

    # Password recovery
    password_reset_token = Column(String(255), nullable=True)
    password_reset_token_expiry = Column(TIMESTAMP, nullable=True)

    last_login_at = Column(TIMESTAMP, nullable=True)
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

"""
Pydantic schemas for student registration.
"""

from pydantic import EmailStr, Field, field_validator, model_validator
from typing import Optional
from datetime import datetime
from student_housing.models.student import ContactMethod
from student_housing.schemas.property import CamelModel


class StudentBase(CamelModel):
    """Base student schema with common fields."""

    first_name: str = Field(..., min_length=1, max_length=100, examples=["Jane"])
    last_name: str = Field(..., min_length=1, max_length=100, examples=["Doe"])
    email: EmailStr = Field(..., description="Contact email", examples=["jane.doe@uw.edu"])
    student_id: str = Field(..., min_length=1, max_length=50, examples=["1234567"])
    university: str = Field(..., min_length=1, max_length=255, examples=["University of Washington"])
    major: str = Field(..., min_length=1, max_length=255, examples=["Computer Science"])

    graduation_year: int = Field(
        ...,
        ge=1900,
        le=2100,
        description="Expected graduation year",
        examples=[2027]
    )

    phone_number: Optional[str] = Field(
        None,
        max_length=30,
        description="Phone number, required when phone is the preferred contact",
        examples=["206-555-0100"]
    )

    preferred_contact: ContactMethod = Field(
        ContactMethod.EMAIL,
        description="Preferred contact method"
    )

    @field_validator('first_name', 'last_name', 'student_id', 'university', 'major')
    @classmethod
    def validate_text(cls, v):
        """Validate and clean text fields."""
        if not v or not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()

    @field_validator('phone_number')
    @classmethod
    def validate_phone_number(cls, v):
        """Validate phone number characters."""
        if v is None or not v.strip():
            return None
        allowed = set("0123456789+-() .")
        if not set(v) <= allowed or sum(ch.isdigit() for ch in v) < 7:
            raise ValueError("Phone number must contain at least 7 digits")
        return v.strip()


class StudentCreate(StudentBase):
    """Schema for the registration form submission."""

    @model_validator(mode="after")
    def validate_contact(self):
        """Require a phone number when phone is the preferred contact."""
        if self.preferred_contact == ContactMethod.PHONE and not self.phone_number:
            raise ValueError("Phone number is required when phone is the preferred contact")
        return self


class StudentResponse(StudentBase):
    """Schema for a registered student."""

    id: int
    created_at: datetime

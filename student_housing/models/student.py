"""
Student model for the accommodation registration form.
"""

from sqlalchemy import String, Integer, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from student_housing.database import Base
import enum
from typing import Optional


class ContactMethod(str, enum.Enum):
    """Preferred way to reach a registered student."""
    EMAIL = "email"
    PHONE = "phone"


class Student(Base):
    """Registered student looking for accommodation."""

    __tablename__ = "students"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Student email address"
    )

    student_id: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="University-issued student number"
    )

    university: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    major: Mapped[str] = mapped_column(String(255), nullable=False)
    graduation_year: Mapped[int] = mapped_column(Integer, nullable=False)
    phone_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)

    preferred_contact: Mapped[ContactMethod] = mapped_column(
        SQLEnum(ContactMethod, values_callable=lambda enum_cls: [member.value for member in enum_cls]),
        nullable=False,
        default=ContactMethod.EMAIL
    )

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, email={self.email})>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> dict:
        """Convert student to dictionary."""
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "student_id": self.student_id,
            "university": self.university,
            "major": self.major,
            "graduation_year": self.graduation_year,
            "phone_number": self.phone_number,
            "preferred_contact": self.preferred_contact.value,
            "created_at": self.created_at,
        }

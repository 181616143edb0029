"""
Test configuration and fixtures for the student housing API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import uuid
from typing import AsyncGenerator, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from student_housing.main import app
from student_housing.database import Base, build_engine, get_db
from student_housing.models.property import Property, PropertyType
from student_housing.models.student import ContactMethod, Student
from student_housing.repositories.property import PropertyRepository
from student_housing.repositories.student import StudentRepository
from student_housing.search import SearchResult
from student_housing.services.property import PropertyService
from student_housing.services.student import StudentService


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Reference points used across search tests
UW_CAMPUS = (47.655548, -122.303200)
SEATTLE_U_CAMPUS = (47.610378, -122.317230)


@pytest.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database for each test."""
    engine = build_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database session override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    """Create a property repository instance."""
    return PropertyRepository(db_session)


@pytest.fixture
def student_repository(db_session: AsyncSession) -> StudentRepository:
    """Create a student repository instance."""
    return StudentRepository(db_session)


# Service fixtures
@pytest.fixture
def property_service(db_session: AsyncSession) -> PropertyService:
    """Create a property service instance."""
    return PropertyService(db_session)


@pytest.fixture
def student_service(db_session: AsyncSession) -> StudentService:
    """Create a student service instance."""
    return StudentService(db_session)


# Test data factories
class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        price: int = 2000,
        bedrooms: int = 2,
        bathrooms: float = 1,
        sqft: int = 900,
        address: str = "1100 12th Ave, Seattle, WA 98122",
        description: str = "Bright apartment close to campus",
        type: PropertyType = PropertyType.RENT,
        near_university: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        virtual_tour_url: Optional[str] = None
    ) -> dict:
        """Create property data dictionary."""
        return {
            "price": price,
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
            "sqft": sqft,
            "address": address,
            "description": description,
            "type": type,
            "near_university": near_university,
            "latitude": latitude,
            "longitude": longitude,
            "virtual_tour_url": virtual_tour_url
        }

    @staticmethod
    def create_payload(images: Optional[List[str]] = None, **overrides) -> dict:
        """Create a camelCase request body for POST /api/properties."""
        data = PropertyFactory.create_property_data(**overrides)
        return {
            "price": data["price"],
            "bedrooms": data["bedrooms"],
            "bathrooms": data["bathrooms"],
            "sqft": data["sqft"],
            "address": data["address"],
            "description": data["description"],
            "type": data["type"].value,
            "nearUniversity": data["near_university"],
            "latitude": data["latitude"],
            "longitude": data["longitude"],
            "virtualTourUrl": data["virtual_tour_url"],
            "images": images or []
        }

    @staticmethod
    async def create_property(
        property_repo: PropertyRepository,
        images: Optional[List[str]] = None,
        **overrides
    ) -> Property:
        """Create a test property with images in the database."""
        property_data = PropertyFactory.create_property_data(**overrides)
        return await property_repo.create_property_with_images(property_data, images or [])


class StudentFactory:
    """Factory for creating test students."""

    @staticmethod
    def create_student_data(
        email: Optional[str] = None,
        first_name: str = "Jane",
        last_name: str = "Doe",
        university: str = "University of Washington",
        preferred_contact: ContactMethod = ContactMethod.EMAIL,
        phone_number: Optional[str] = None
    ) -> dict:
        """Create student data dictionary."""
        return {
            "first_name": first_name,
            "last_name": last_name,
            "email": email or f"student{uuid.uuid4().hex[:8]}@example.edu",
            "student_id": "1234567",
            "university": university,
            "major": "Computer Science",
            "graduation_year": 2027,
            "phone_number": phone_number,
            "preferred_contact": preferred_contact
        }

    @staticmethod
    async def create_student(student_repo: StudentRepository, **overrides) -> Student:
        """Create a test student in the database."""
        return await student_repo.create_student(StudentFactory.create_student_data(**overrides))


# Common test fixtures
@pytest.fixture
async def uw_rental(property_repository: PropertyRepository) -> Property:
    """Two-bedroom rental near the University of Washington."""
    return await PropertyFactory.create_property(
        property_repository,
        images=["https://example.com/apt2a.jpg", "https://example.com/apt2b.jpg"],
        price=2100,
        bedrooms=2,
        address="4545 15th Ave NE, Seattle, WA 98105",
        near_university="University of Washington",
        latitude=47.661475,
        longitude=-122.312543
    )


@pytest.fixture
async def spu_sale(property_repository: PropertyRepository) -> Property:
    """Three-bedroom house for sale near Seattle Pacific University."""
    return await PropertyFactory.create_property(
        property_repository,
        images=["https://example.com/house2a.jpg"],
        price=450000,
        bedrooms=3,
        bathrooms=2.5,
        sqft=2800,
        address="3469 3rd Ave W, Seattle, WA 98119",
        type=PropertyType.SALE,
        near_university="Seattle Pacific University",
        latitude=47.650790,
        longitude=-122.361490
    )


@pytest.fixture
async def seattle_u_rental(property_repository: PropertyRepository) -> Property:
    """Rental near Seattle University without coordinates or images."""
    return await PropertyFactory.create_property(
        property_repository,
        price=3200,
        bedrooms=3,
        address="1111 E Cherry St, Seattle, WA 98122",
        near_university="Seattle University"
    )


@pytest.fixture
async def listings(uw_rental: Property, spu_sale: Property, seattle_u_rental: Property) -> List[Property]:
    """A small store of listings in creation order."""
    return [uw_rental, spu_sale, seattle_u_rental]


# Utility functions for tests
def result_ids(results: List[SearchResult]) -> List[int]:
    return [result.id for result in results]


def make_row(property_id: int, image_url: Optional[str] = None, image_order: Optional[int] = None, **values) -> dict:
    """Build one synthetic joined search row."""
    row = {
        "id": property_id,
        "price": 1500,
        "bedrooms": 2,
        "bathrooms": 1.0,
        "sqft": 800,
        "address": f"{property_id} Test Ave, Seattle, WA",
        "description": "Synthetic listing",
        "type": "rent",
        "near_university": None,
        "latitude": None,
        "longitude": None,
        "virtual_tour_url": None,
        "created_at": None,
        "image_url": image_url,
        "image_order": image_order,
        "distance": None,
    }
    row.update(values)
    return row

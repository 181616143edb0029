"""
Tests for service classes.
Covers error translation between the search core, storage and the API layer.
"""

import pytest
from unittest.mock import AsyncMock, Mock
from reportlab.platypus.doctemplate import LayoutError
from sqlalchemy.exc import OperationalError

from student_housing.models.property import PropertyType
from student_housing.models.student import ContactMethod
from student_housing.schemas.property import PropertyCreate
from student_housing.schemas.student import StudentCreate
from student_housing.services.flyer import FlyerService
from student_housing.services.property import PropertyService
from student_housing.services.student import StudentService
from student_housing.utils.exceptions import (
    DuplicateResourceError,
    InternalServerError,
    InvalidFilterError,
    PropertyNotFoundError,
    StorageUnavailableError,
    ValidationError
)
from tests.conftest import PropertyFactory, StudentFactory, result_ids


def storage_down() -> AsyncMock:
    return AsyncMock(side_effect=OperationalError("SELECT 1", {}, Exception("unable to open database file")))


class TestPropertyServiceSearch:
    """Test PropertyService search behavior."""

    @pytest.mark.asyncio
    async def test_search_properties(self, property_service: PropertyService, listings):
        results = await property_service.search_properties({"type": "rent"})

        assert set(result_ids(results)) == {listings[0].id, listings[2].id}

    @pytest.mark.asyncio
    async def test_empty_result_is_not_an_error(self, property_service: PropertyService):
        assert await property_service.search_properties({"university": "Nowhere College"}) == []

    @pytest.mark.asyncio
    async def test_invalid_filter_rejected_before_storage(self, property_service: PropertyService, monkeypatch):
        execute = AsyncMock()
        monkeypatch.setattr(property_service.db, "execute", execute)

        with pytest.raises(InvalidFilterError) as exc_info:
            await property_service.search_properties({"maxDistance": "5"})

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_code == "INVALID_FILTER"
        assert exc_info.value.field == "maxDistance"
        execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unparseable_number_rejected(self, property_service: PropertyService):
        with pytest.raises(InvalidFilterError) as exc_info:
            await property_service.search_properties({"minPrice": "cheap"})

        assert "minPrice" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_large_radius_returns_rows(self, property_service: PropertyService, listings):
        nearby = await property_service.search_properties({
            "latitude": "47.6",
            "longitude": "-122.3",
            "maxDistance": "500"
        })
        everywhere = await property_service.search_properties({
            "latitude": "47.6",
            "longitude": "-122.3",
            "maxDistance": "10000"
        })

        # Listings without coordinates never match a radius
        assert set(result_ids(everywhere)) == {listings[0].id, listings[1].id}
        assert set(result_ids(nearby)) <= set(result_ids(everywhere))

    @pytest.mark.asyncio
    async def test_storage_failure(self, property_service: PropertyService, monkeypatch):
        monkeypatch.setattr(property_service.db, "execute", storage_down())

        with pytest.raises(StorageUnavailableError) as exc_info:
            await property_service.search_properties({})

        assert exc_info.value.status_code == 503
        assert exc_info.value.error_code == "STORAGE_UNAVAILABLE"


class TestPropertyServiceListings:
    """Test PropertyService single-listing operations."""

    @pytest.mark.asyncio
    async def test_get_property(self, property_service: PropertyService, uw_rental):
        result = await property_service.get_property(uw_rental.id)

        assert result.id == uw_rental.id
        assert result.type == PropertyType.RENT
        assert result.images == ["https://example.com/apt2a.jpg", "https://example.com/apt2b.jpg"]
        assert result.distance is None

    @pytest.mark.asyncio
    async def test_get_property_not_found(self, property_service: PropertyService):
        with pytest.raises(PropertyNotFoundError) as exc_info:
            await property_service.get_property(404)

        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "Property not found with ID: 404"

    @pytest.mark.asyncio
    async def test_get_property_storage_failure(self, property_service: PropertyService, monkeypatch):
        monkeypatch.setattr(property_service.db, "execute", storage_down())

        with pytest.raises(StorageUnavailableError):
            await property_service.get_property(1)

    @pytest.mark.asyncio
    async def test_create_property(self, property_service: PropertyService):
        payload = PropertyCreate(**PropertyFactory.create_payload(
            images=["https://example.com/a.jpg", "https://example.com/b.jpg"],
            near_university="Seattle University"
        ))

        result = await property_service.create_property(payload)

        assert result.id is not None
        assert result.images == ["https://example.com/a.jpg", "https://example.com/b.jpg"]
        assert result.near_university == "Seattle University"
        assert await property_service.list_universities() == ["Seattle University"]

    @pytest.mark.asyncio
    async def test_create_property_storage_failure(self, property_service: PropertyService, monkeypatch):
        monkeypatch.setattr(property_service.db, "commit", storage_down())
        payload = PropertyCreate(**PropertyFactory.create_payload(images=["a.jpg"]))

        with pytest.raises(StorageUnavailableError):
            await property_service.create_property(payload)

    @pytest.mark.asyncio
    async def test_create_property_model_rule_violation(self, property_service: PropertyService):
        payload = PropertyCreate.model_construct(
            **PropertyFactory.create_property_data(price=-5),
            images=[]
        )

        with pytest.raises(ValidationError):
            await property_service.create_property(payload)

    @pytest.mark.asyncio
    async def test_delete_property(self, property_service: PropertyService, uw_rental):
        await property_service.delete_property(uw_rental.id)

        with pytest.raises(PropertyNotFoundError):
            await property_service.get_property(uw_rental.id)

    @pytest.mark.asyncio
    async def test_delete_missing_property(self, property_service: PropertyService):
        with pytest.raises(PropertyNotFoundError):
            await property_service.delete_property(12345)

    @pytest.mark.asyncio
    async def test_list_universities_storage_failure(self, property_service: PropertyService, monkeypatch):
        monkeypatch.setattr(property_service.db, "execute", storage_down())

        with pytest.raises(StorageUnavailableError):
            await property_service.list_universities()

    @pytest.mark.asyncio
    async def test_build_flyer(self, property_service: PropertyService, spu_sale):
        pdf = await property_service.build_flyer(spu_sale.id)

        assert pdf.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_build_flyer_not_found(self, property_service: PropertyService):
        with pytest.raises(PropertyNotFoundError):
            await property_service.build_flyer(77)

    @pytest.mark.asyncio
    async def test_build_flyer_layout_failure(self, property_service: PropertyService, spu_sale, monkeypatch):
        monkeypatch.setattr(FlyerService, "render", Mock(side_effect=LayoutError("Flowable too large")))

        with pytest.raises(InternalServerError) as exc_info:
            await property_service.build_flyer(spu_sale.id)

        assert exc_info.value.status_code == 500
        assert exc_info.value.error_code == "INTERNAL_SERVER_ERROR"


class TestFlyerService:
    """Test PDF flyer rendering."""

    @pytest.mark.asyncio
    async def test_render_letter_and_a4(self, property_service: PropertyService, uw_rental):
        result = await property_service.get_property(uw_rental.id)

        letter_pdf = FlyerService().render(result)
        a4_pdf = FlyerService(page_size="A4").render(result)

        assert letter_pdf.startswith(b"%PDF")
        assert a4_pdf.startswith(b"%PDF")
        assert letter_pdf != a4_pdf

    @pytest.mark.asyncio
    async def test_render_escapes_markup(self, property_service: PropertyService, property_repository):
        property_obj = await PropertyFactory.create_property(
            property_repository,
            description="Quiet <b>unit</b> & garden, no <unclosed tag",
            virtual_tour_url="https://tours.example.com/?a=1&b=2"
        )
        result = await property_service.get_property(property_obj.id)

        assert FlyerService().render(result).startswith(b"%PDF")

    def test_unknown_page_size(self):
        with pytest.raises(KeyError):
            FlyerService(page_size="legal")


class TestStudentService:
    """Test student registration."""

    @pytest.mark.asyncio
    async def test_register_student(self, student_service: StudentService):
        student = await student_service.register_student(
            StudentCreate(**StudentFactory.create_student_data(email="New.Student@UW.edu"))
        )

        assert student.id is not None
        assert student.email == "new.student@uw.edu"
        assert student.preferred_contact == ContactMethod.EMAIL

    @pytest.mark.asyncio
    async def test_duplicate_email(self, student_service: StudentService, student_repository):
        await StudentFactory.create_student(student_repository, email="taken@uw.edu")

        with pytest.raises(DuplicateResourceError) as exc_info:
            await student_service.register_student(
                StudentCreate(**StudentFactory.create_student_data(email="TAKEN@uw.edu"))
            )

        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_storage_failure(self, student_service: StudentService, monkeypatch):
        monkeypatch.setattr(student_service.db, "execute", storage_down())

        with pytest.raises(StorageUnavailableError):
            await student_service.register_student(StudentCreate(**StudentFactory.create_student_data()))

"""
PDF flyer rendering for a single listing.
Lays out already-fetched search result data; performs no storage access.
"""

from io import BytesIO
from typing import List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Flowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from student_housing.models.property import PropertyType
from student_housing.search import SearchResult
import logging

logger = logging.getLogger(__name__)

PAGE_SIZES = {
    "letter": letter,
    "a4": A4,
}


def format_price(result: SearchResult) -> str:
    """Price line, per month for rentals."""
    price = f"${result.price:,}"
    if result.type == PropertyType.RENT:
        return f"{price} / month"
    return price


def format_bathrooms(bathrooms: float) -> str:
    if float(bathrooms).is_integer():
        return str(int(bathrooms))
    return f"{bathrooms:g}"


class FlyerService:
    """Renders one listing as a single-page PDF flyer."""

    def __init__(self, page_size: str = "letter"):
        self.page_size = PAGE_SIZES[page_size.lower()]
        self.styles = getSampleStyleSheet()

    def build_story(self, result: SearchResult) -> List[Flowable]:
        """Build the flowables for a flyer."""
        styles = self.styles
        story: List[Flowable] = []

        heading = "For Rent" if result.type == PropertyType.RENT else "For Sale"
        story.append(Paragraph(f"<b>{heading}: {escape(result.address)}</b>", styles["Title"]))
        story.append(Spacer(1, 12))
        story.append(Paragraph(f"<b>{format_price(result)}</b>", styles["Heading2"]))
        story.append(Spacer(1, 12))

        data = [
            ["Bedrooms", str(result.bedrooms)],
            ["Bathrooms", format_bathrooms(result.bathrooms)],
            ["Square feet", f"{result.sqft:,}"],
        ]
        if result.near_university:
            data.append(["Near", result.near_university])
        if result.distance is not None:
            data.append(["Distance", f"{result.distance:.1f} miles"])

        table = Table(data, colWidths=[120, 300])
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (0, -1), colors.lightgrey),
            ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
            ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ]))
        story.append(table)
        story.append(Spacer(1, 18))

        story.append(Paragraph(escape(result.description), styles["BodyText"]))
        story.append(Spacer(1, 18))

        if result.images:
            story.append(Paragraph("<b>Photos</b>", styles["Heading3"]))
            for image in result.images:
                story.append(Paragraph(escape(image), styles["Normal"]))

        if result.virtual_tour_url:
            story.append(Spacer(1, 12))
            story.append(Paragraph(f"Virtual tour: {escape(result.virtual_tour_url)}", styles["Normal"]))

        return story

    def render(self, result: SearchResult) -> bytes:
        """
        Render a flyer to PDF bytes.

        Args:
            result: Search result for the listing

        Returns:
            PDF document bytes
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=self.page_size,
            title=f"Listing {result.id}",
        )
        doc.build(self.build_story(result))

        pdf = buffer.getvalue()
        logger.debug(f"Rendered flyer for property {result.id} ({len(pdf)} bytes)")
        return pdf

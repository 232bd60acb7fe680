"""
Company settings schemas.

Company settings live in a single row. Reads always merge the stored row
over DEFAULT_COMPANY_SETTINGS so every field is present even before the
row exists.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema


DEFAULT_COMPANY_SETTINGS: dict = {
    # Basic info
    "company_name": "Inkfinity Creation",
    "company_short_name": "Inkfinity",
    "tagline": (
        "Premium custom clothing manufacturer offering high-quality products with "
        "no minimum order quantity. From concept to creation, we bring your vision to life."
    ),

    # Contact
    "email": "info@inkfinitycreation.com",
    "phone": "+92 300 1234567",
    "whatsapp": "+92 300 1234567",
    "address": "Sialkot, Punjab, Pakistan",
    "business_hours": "Monday - Saturday, 9:00 AM - 6:00 PM (PKT)",

    # Branding
    "logo": None,
    "logo_dark": None,
    "favicon": None,

    # Social
    "facebook_url": "",
    "instagram_url": "",
    "linkedin_url": "",
    "twitter_url": "",
    "youtube_url": "",
    "tiktok_url": "",

    # SEO
    "meta_title": "Inkfinity Creation - Premium Custom Clothing Manufacturer",
    "meta_description": (
        "Inkfinity Creation - Premium custom clothing manufacturer. No minimum order "
        "quantity. Custom t-shirts, hoodies, jackets, sportswear and more."
    ),
    "meta_keywords": (
        "custom clothing, clothing manufacturer, t-shirts, hoodies, jackets, "
        "sportswear, no MOQ, Sialkot, Pakistan"
    ),

    # Footer
    "footer_categories": [],
}

# Columns holding storage paths, keyed by the upload field name
BRANDING_FIELDS = ("logo", "logo_dark", "favicon")


class CompanySettingsUpdate(BaseSchema):
    """
    Update company settings.

    All fields optional - only provided fields are written.
    Branding images are uploaded separately.
    """

    company_name: Optional[str] = Field(None, max_length=200)
    company_short_name: Optional[str] = Field(None, max_length=80)
    tagline: Optional[str] = Field(None, max_length=500)

    email: Optional[str] = Field(None, max_length=254)
    phone: Optional[str] = Field(None, max_length=50)
    whatsapp: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)
    business_hours: Optional[str] = Field(None, max_length=200)

    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None
    youtube_url: Optional[str] = None
    tiktok_url: Optional[str] = None

    meta_title: Optional[str] = Field(None, max_length=200)
    meta_description: Optional[str] = Field(None, max_length=500)
    meta_keywords: Optional[str] = Field(None, max_length=500)

    footer_categories: Optional[list[str]] = Field(
        None,
        description="Category ids listed in the site footer"
    )


class CompanySettingsResponse(BaseSchema):
    """Company settings merged over defaults, with public branding URLs."""

    id: Optional[str] = None

    company_name: str
    company_short_name: str
    tagline: str

    email: str
    phone: str
    whatsapp: str
    address: str
    business_hours: str

    logo: Optional[str] = None
    logo_dark: Optional[str] = None
    favicon: Optional[str] = None
    logo_url: Optional[str] = None
    logo_dark_url: Optional[str] = None
    favicon_url: Optional[str] = None

    facebook_url: str = ""
    instagram_url: str = ""
    linkedin_url: str = ""
    twitter_url: str = ""
    youtube_url: str = ""
    tiktok_url: str = ""

    meta_title: str
    meta_description: str
    meta_keywords: str

    footer_categories: list[str] = Field(default_factory=list)

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, ForeignKey, Enum, Boolean, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from .database import Base
import enum


# --- Enums ---

class ListingCategory(str, enum.Enum):
    CROPS = "crops"
    CATTLE = "cattle"
    EQUIPMENT = "equipment"
    LABOR = "labor"


class Theme(str, enum.Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class Language(str, enum.Enum):
    ENGLISH = "en"
    KANNADA = "kn"
    TELUGU = "te"
    TAMIL = "ta"


class MeasurementUnits(str, enum.Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class Currency(str, enum.Enum):
    INR = "inr"
    USD = "usd"
    EUR = "eur"


class DateFormat(str, enum.Enum):
    DD_MM_YYYY = "dd-mm-yyyy"
    MM_DD_YYYY = "mm-dd-yyyy"
    YYYY_MM_DD = "yyyy-mm-dd"


class TimeFormat(str, enum.Enum):
    H12 = "12h"
    H24 = "24h"


# --- Tables ---

class MarketplaceListing(Base):
    """Crops, cattle, equipment and labor offered by sellers."""
    __tablename__ = "marketplace_listings"

    id = Column(Integer, primary_key=True, index=True)
    category = Column(Enum(ListingCategory), nullable=False, index=True)
    title = Column(String, nullable=False)
    sub_category = Column(String, nullable=True)  # 'Grains' | 'Dairy' | 'Tractors' | ...
    price = Column(String, nullable=False)  # free text: '₹2,200/quintal', '₹500/day per worker'
    location = Column(String, nullable=True)
    seller = Column(String, nullable=False)
    rating = Column(Float, default=0.0)
    description = Column(Text, nullable=True)
    # Category-specific detail: quantity (crops), age (cattle), condition (equipment), availability (labor)
    quantity = Column(String, nullable=True)
    age = Column(String, nullable=True)
    condition = Column(String, nullable=True)
    availability = Column(String, nullable=True)
    contact_number = Column(String, nullable=True)
    image_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class DocumentFolder(Base):
    __tablename__ = "document_folders"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    documents = relationship("Document", back_populates="folder")


class Document(Base):
    """Document locker entry: land papers, loan agreements, insurance, etc."""
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    doc_type = Column(String, nullable=False, default="Other")  # 'Land Document' | 'Insurance' | ...
    size_bytes = Column(Integer, default=0)
    folder_id = Column(Integer, ForeignKey("document_folders.id"), nullable=True)
    shared = Column(Boolean, default=False)
    file_url = Column(String, nullable=True)  # None for seeded sample entries
    uploaded_on = Column(DateTime, default=datetime.utcnow)

    folder = relationship("DocumentFolder", back_populates="documents")


class FarmerProfile(Base):
    __tablename__ = "farmer_profiles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    location = Column(String, nullable=True)
    farm_size = Column(String, nullable=True)  # as entered: '5 hectares'
    crops = Column(JSON, default=list)
    soil_type = Column(String, nullable=True)
    irrigation_type = Column(String, nullable=True)
    profile_image = Column(String, nullable=True)
    member_since = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def initials(self) -> str:
        return "".join(part[0] for part in (self.name or "").split()).upper()


class UserSettings(Base):
    __tablename__ = "user_settings"

    id = Column(Integer, primary_key=True, index=True)
    theme = Column(Enum(Theme), default=Theme.SYSTEM)
    language = Column(Enum(Language), default=Language.ENGLISH)
    sidebar_collapsed = Column(Boolean, default=False)
    units = Column(Enum(MeasurementUnits), default=MeasurementUnits.METRIC)
    currency = Column(Enum(Currency), default=Currency.INR)
    date_format = Column(Enum(DateFormat), default=DateFormat.DD_MM_YYYY)
    time_format = Column(Enum(TimeFormat), default=TimeFormat.H24)
    # Notification topics
    notify_weather_alerts = Column(Boolean, default=True)
    notify_price_updates = Column(Boolean, default=True)
    notify_disease_alerts = Column(Boolean, default=True)
    notify_marketplace = Column(Boolean, default=False)
    # Notification channels
    notify_email = Column(Boolean, default=True)
    notify_sms = Column(Boolean, default=True)
    notify_push = Column(Boolean, default=True)
    notify_whatsapp = Column(Boolean, default=False)
    # Privacy
    data_collection = Column(Boolean, default=True)
    location_sharing = Column(Boolean, default=True)
    profile_visible = Column(Boolean, default=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime
from .models import (
    ListingCategory, Theme, Language, MeasurementUnits, Currency, DateFormat, TimeFormat,
)

AreaUnit = Literal["hectare", "acre"]


# --- Calculators ---

class CarbonFootprintInput(BaseModel):
    farm_size: float = Field(1.0, gt=0)
    farm_unit: AreaUnit = "hectare"
    crop_type: Literal["rice", "wheat", "maize", "cotton", "sugarcane", "vegetables", "fruits"]
    fertilizer: float = Field(50, ge=0)        # kg per hectare
    pesticide: float = Field(20, ge=0)         # kg per hectare
    irrigation: float = Field(30, ge=0)        # per hectare
    machinery: float = Field(40, ge=0)         # hours per hectare
    livestock: float = Field(0, ge=0)          # head count
    electricity_usage: float = Field(100, ge=0)  # kWh per month
    fuel_usage: float = Field(50, ge=0)          # liters per month


class EmissionCategory(BaseModel):
    name: str
    value: float
    percentage: float


class EmissionRating(BaseModel):
    label: str
    color: str


class ReductionRecommendation(BaseModel):
    source: str
    recommendations: List[str]
    potential_reduction: str


class CarbonFootprintResult(BaseModel):
    crop_type: Optional[str] = None
    farm_size_hectares: float
    total_emissions: float
    emissions_per_hectare: float
    breakdown: List[EmissionCategory]
    rating: EmissionRating
    recommendations: List[ReductionRecommendation]
    assumptions: List[str] = []


class FertilizerInput(BaseModel):
    # Optional so a missing crop reaches the calculator's user-facing message
    crop: Optional[str] = None
    area: float = Field(1.0, gt=0)
    area_unit: AreaUnit = "hectare"
    soil_n: float = Field(40, ge=0, le=200)
    soil_p: float = Field(20, ge=0, le=200)
    soil_k: float = Field(30, ge=0, le=200)
    mode: Literal["synthetic", "organic"] = "synthetic"


class NutrientRequirement(BaseModel):
    n: float
    p: float
    k: float


class FertilizerItem(BaseModel):
    name: str
    amount: float
    unit: str
    cost: float
    nutrient: str


class ScheduleShare(BaseModel):
    name: str
    percentage: int


class ApplicationStage(BaseModel):
    stage: str
    fertilizers: List[ScheduleShare]


class FertilizerResult(BaseModel):
    crop: str
    mode: str
    area_hectares: float
    nutrients: NutrientRequirement
    fertilizers: List[FertilizerItem]
    total_cost: float
    application_schedule: List[ApplicationStage]


class LoanInput(BaseModel):
    loan_type: Optional[Literal["kcc", "term", "micro", "warehouse"]] = None
    loan_amount: float = Field(100000, gt=0)
    interest_rate: Optional[float] = Field(None, gt=0)  # annual %, defaults to the loan type's rate
    loan_tenure: int = Field(12, gt=0, le=360)  # months
    payment_frequency: Literal["monthly", "quarterly", "half-yearly", "yearly"] = "monthly"


class AmortizationRow(BaseModel):
    payment_number: int
    payment_amount: float
    principal_payment: float
    interest_payment: float
    remaining_principal: float


class LoanChartPoint(BaseModel):
    payment_number: int
    principal: float
    interest: float


class PieSlice(BaseModel):
    name: str
    value: float


class LoanDetails(BaseModel):
    loan_type: Optional[str] = None
    principal: float
    interest_rate: float
    tenure: int
    payment_frequency: str


class LoanResult(BaseModel):
    emi: float
    number_of_payments: int
    rate_per_period: float
    total_payment: float
    total_interest: float
    amortization_schedule: List[AmortizationRow]
    chart_data: List[LoanChartPoint]
    pie_chart_data: List[PieSlice]
    loan_details: LoanDetails
    assumptions: List[str] = []


# --- Analyses ---

class CropRecommendationInput(BaseModel):
    soil_type: Literal["clay", "sandy", "loamy", "silt", "peat", "chalky"]
    region: Literal["karnataka", "tamilnadu", "andhra", "telangana", "kerala", "maharashtra"]
    temperature: float = Field(25, ge=0, le=50)
    humidity: float = Field(60, ge=0, le=100)
    rainfall: float = Field(100, ge=0, le=500)
    ph: float = Field(7, ge=0, le=14)
    nitrogen: float = Field(80, ge=0, le=200)
    phosphorus: float = Field(50, ge=0, le=200)
    potassium: float = Field(40, ge=0, le=200)
    use_iot: bool = False


# --- Marketplace ---

class ListingBase(BaseModel):
    category: ListingCategory
    title: str
    sub_category: Optional[str] = None
    price: str
    location: Optional[str] = None
    seller: str
    rating: float = Field(0.0, ge=0, le=5)
    description: Optional[str] = None
    quantity: Optional[str] = None
    age: Optional[str] = None
    condition: Optional[str] = None
    availability: Optional[str] = None
    contact_number: Optional[str] = None
    image_url: Optional[str] = None


class ListingCreate(ListingBase):
    pass


class ListingUpdate(BaseModel):
    title: Optional[str] = None
    sub_category: Optional[str] = None
    price: Optional[str] = None
    location: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    description: Optional[str] = None
    quantity: Optional[str] = None
    age: Optional[str] = None
    condition: Optional[str] = None
    availability: Optional[str] = None
    contact_number: Optional[str] = None
    image_url: Optional[str] = None


class Listing(ListingBase):
    id: int
    created_at: datetime
    class Config:
        from_attributes = True


# --- Document locker ---

class FolderCreate(BaseModel):
    name: str


class Folder(BaseModel):
    id: int
    name: str
    document_count: int = 0
    last_updated: Optional[datetime] = None


class Document(BaseModel):
    id: int
    name: str
    doc_type: str
    size_bytes: int
    folder_id: Optional[int] = None
    shared: bool
    file_url: Optional[str] = None
    uploaded_on: datetime
    class Config:
        from_attributes = True


class DocumentUpdate(BaseModel):
    name: Optional[str] = None
    doc_type: Optional[str] = None
    folder_id: Optional[int] = None
    shared: Optional[bool] = None


class StorageUsage(BaseModel):
    used_bytes: int
    quota_bytes: int
    used_percentage: float
    document_count: int


# --- Profile & settings ---

class ProfileBase(BaseModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    farm_size: Optional[str] = None
    crops: List[str] = []
    soil_type: Optional[str] = None
    irrigation_type: Optional[str] = None
    profile_image: Optional[str] = None


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    farm_size: Optional[str] = None
    crops: Optional[List[str]] = None
    soil_type: Optional[str] = None
    irrigation_type: Optional[str] = None
    profile_image: Optional[str] = None


class Profile(ProfileBase):
    id: int
    initials: str
    member_since: datetime
    class Config:
        from_attributes = True


class SettingsBase(BaseModel):
    theme: Theme = Theme.SYSTEM
    language: Language = Language.ENGLISH
    sidebar_collapsed: bool = False
    units: MeasurementUnits = MeasurementUnits.METRIC
    currency: Currency = Currency.INR
    date_format: DateFormat = DateFormat.DD_MM_YYYY
    time_format: TimeFormat = TimeFormat.H24
    notify_weather_alerts: bool = True
    notify_price_updates: bool = True
    notify_disease_alerts: bool = True
    notify_marketplace: bool = False
    notify_email: bool = True
    notify_sms: bool = True
    notify_push: bool = True
    notify_whatsapp: bool = False
    data_collection: bool = True
    location_sharing: bool = True
    profile_visible: bool = True


class SettingsUpdate(BaseModel):
    theme: Optional[Theme] = None
    language: Optional[Language] = None
    sidebar_collapsed: Optional[bool] = None
    units: Optional[MeasurementUnits] = None
    currency: Optional[Currency] = None
    date_format: Optional[DateFormat] = None
    time_format: Optional[TimeFormat] = None
    notify_weather_alerts: Optional[bool] = None
    notify_price_updates: Optional[bool] = None
    notify_disease_alerts: Optional[bool] = None
    notify_marketplace: Optional[bool] = None
    notify_email: Optional[bool] = None
    notify_sms: Optional[bool] = None
    notify_push: Optional[bool] = None
    notify_whatsapp: Optional[bool] = None
    data_collection: Optional[bool] = None
    location_sharing: Optional[bool] = None
    profile_visible: Optional[bool] = None


class UserSettings(SettingsBase):
    id: int
    updated_at: datetime
    class Config:
        from_attributes = True

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, constr


class Profile(str, Enum):
    BABY = "Baby"
    ALLERGY = "Allergy"

    def toggled(self) -> "Profile":
        return Profile.ALLERGY if self is Profile.BABY else Profile.BABY


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"


class OutcomeStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class ScanEvent(BaseModel):
    data: str
    format: Optional[str] = None


class Product(BaseModel):
    name: Optional[str] = None
    ingredients_text: Optional[str] = None


class LookupResult(BaseModel):
    status: LookupStatus
    barcode: str
    product: Optional[Product] = None

    @property
    def found(self) -> bool:
        return self.status == LookupStatus.FOUND


class Verdict(BaseModel):
    profile: Profile
    matched: List[str] = Field(default_factory=list)

    @property
    def is_safe(self) -> bool:
        return not self.matched


class Alert(BaseModel):
    title: str
    message: str
    actions: List[str] = Field(..., min_length=1, max_length=2)


class ScanOutcome(BaseModel):
    event: ScanEvent
    profile: Profile
    status: OutcomeStatus
    verdict: Optional[Verdict] = None
    alert: Alert
    acknowledged_with: Optional[str] = None


class ScanRequest(BaseModel):
    barcode: constr(strip_whitespace=True, min_length=1) = Field(
        ..., description="Decoded barcode value (EAN-13, UPC-A or UPC-E)"
    )
    profile: Profile = Field(default=Profile.BABY, description="Profile whose denylist applies")


class ScanResponse(BaseModel):
    barcode: str
    profile: Profile
    status: LookupStatus
    product_name: Optional[str] = None
    ingredients_text: Optional[str] = None
    matched: List[str] = Field(default_factory=list)
    safe: Optional[bool] = None
    alert: Alert


class ProfileInfo(BaseModel):
    name: Profile
    denylist: List[str]


class ProfilesResponse(BaseModel):
    profiles: List[ProfileInfo]
    default: Profile

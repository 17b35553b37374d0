# provide dataclass models

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Identity:
    name: str
    email: str  # unique across the registry
    password: str  # stored as entered

    def to_dict(self) -> dict:
        return {"name": self.name, "email": self.email, "password": self.password}

    @classmethod
    def from_dict(cls, data: dict) -> "Identity":
        return cls(
            name=str(data["name"]),
            email=str(data["email"]),
            password=str(data.get("password") or ""),
        )


@dataclass(frozen=True)
class Session:
    """Redacted view of an Identity, without the password."""

    name: str
    email: str

    def to_dict(self) -> dict:
        return {"name": self.name, "email": self.email}

    @classmethod
    def from_dict(cls, data: dict) -> "Session":
        return cls(name=str(data["name"]), email=str(data["email"]))

    @classmethod
    def of(cls, identity: Identity) -> "Session":
        return cls(name=identity.name, email=identity.email)


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    category: str
    price: float
    rating: int
    image_url: str
    description: str
    original_price: Optional[float] = None
    image_urls: Tuple[str, ...] = ()
    benefits: Tuple[str, ...] = ()

    @property
    def on_sale(self) -> bool:
        return self.original_price is not None


@dataclass(frozen=True)
class LineItem:
    product: Product
    quantity: int

    @property
    def product_id(self) -> int:
        return self.product.id

    @property
    def name(self) -> str:
        return self.product.name

    @property
    def unit_price(self) -> float:
        return self.product.price

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class BillingDetails:
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str
    city: str
    state: str = ""
    zip: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def full_address(self) -> str:
        return f"{self.address}, {self.city}, {self.state} {self.zip}"


@dataclass(frozen=True)
class PlacedOrder:
    details: BillingDetails
    items: Tuple[LineItem, ...]
    total: float


@dataclass(frozen=True)
class Inquiry:
    name: str
    email: str
    phone: str
    comments: str = ""


@dataclass(frozen=True)
class DeepLinks:
    whatsapp: str
    email: str

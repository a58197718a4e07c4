from scheduler.models.appointment import Appointment, AppointmentForm, AppointmentPublic
from scheduler.models.contact import Contact, ContactCreate, ContactPublic
from scheduler.models.customer import Customer, CustomerCreate, CustomerPublic
from scheduler.models.division import (
    Country,
    CountryCreate,
    CountryPublic,
    Division,
    DivisionCreate,
    DivisionPublic,
)

__all__ = [
    "Appointment",
    "AppointmentForm",
    "AppointmentPublic",
    "Contact",
    "ContactCreate",
    "ContactPublic",
    "Country",
    "CountryCreate",
    "CountryPublic",
    "Customer",
    "CustomerCreate",
    "CustomerPublic",
    "Division",
    "DivisionCreate",
    "DivisionPublic",
]

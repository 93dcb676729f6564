
from app.schemas.common import PaginatedResponse, ErrorResponse, FieldErrorResponse, DeleteResponse
from app.schemas.venue import Venue, VenueCreate, VenueUpdate, VenueSummary
from app.schemas.event import Event, EventCreate, EventUpdate, EventWithVenue, EventSummary
from app.schemas.customer import Customer, CustomerCreate, CustomerUpdate, CustomerSummary
from app.schemas.booking import Booking, BookingCreate, BookingUpdate, BookingDetail

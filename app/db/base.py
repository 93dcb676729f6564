
from app.db.session import Base
from app.models.venue import Venue
from app.models.event import Event
from app.models.customer import Customer
from app.models.booking import Booking

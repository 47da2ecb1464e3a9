# Parking engine: Database Models
# Import all models here for SQLAlchemy discovery

from app.models.parking_zone import ParkingZone        # noqa
from app.models.parking_slot import ParkingSlot        # noqa
from app.models.parking_session import ParkingSession  # noqa
from app.models.user import User                       # noqa
from app.models.role import Role                       # noqa
from app.models.pricing_rule import PricingRule        # noqa
from app.models.vehicle import Vehicle                 # noqa
from app.models.qr_code import QRCode                  # noqa

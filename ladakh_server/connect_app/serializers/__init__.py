"""Serializers package - imports from domain-specific modules"""

# User serializers
from .user_serializers import (
    UserSerializer,
    ProfileSerializer,
    ProfileCompletionSerializer,
    ProfileUpdateSerializer,
    OTPRequestSerializer,
    OTPVerifySerializer,
    FirebaseLoginSerializer,
    LogoutSerializer,
)

# Reference data serializers
from .location_serializers import (
    CitySerializer,
    RouteSerializer,
    VehicleTypeSerializer,
)

# Ride offer serializers
from .ride_serializers import (
    RideOfferSerializer,
    PublishRideSerializer,
    RideSearchSerializer,
)

# Trip serializers
from .trip_serializers import (
    ChatMessageSerializer,
    TripSerializer,
    BookingRequestSerializer,
    TripStatusSerializer,
    RatingSerializer,
    MessageCreateSerializer,
    DriverDashboardSerializer,
)

__all__ = [
    'UserSerializer',
    'ProfileSerializer',
    'ProfileCompletionSerializer',
    'ProfileUpdateSerializer',
    'OTPRequestSerializer',
    'OTPVerifySerializer',
    'FirebaseLoginSerializer',
    'LogoutSerializer',
    'CitySerializer',
    'RouteSerializer',
    'VehicleTypeSerializer',
    'RideOfferSerializer',
    'PublishRideSerializer',
    'RideSearchSerializer',
    'ChatMessageSerializer',
    'TripSerializer',
    'BookingRequestSerializer',
    'TripStatusSerializer',
    'RatingSerializer',
    'MessageCreateSerializer',
    'DriverDashboardSerializer',
]

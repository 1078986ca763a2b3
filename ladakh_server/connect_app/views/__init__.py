"""Views package - HTTP request handlers"""

from .auth_views import MobileLoginView, ProfileView
from .location_views import CitiesView, RouteViewSet, VehicleTypeViewSet
from .ride_views import RideOfferViewSet
from .trip_views import TripViewSet, DriverDashboardView

__all__ = [
    'MobileLoginView', 'ProfileView',
    'CitiesView', 'RouteViewSet', 'VehicleTypeViewSet',
    'RideOfferViewSet',
    'TripViewSet', 'DriverDashboardView',
]

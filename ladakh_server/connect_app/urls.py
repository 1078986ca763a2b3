from django.urls import path, include
from rest_framework import routers

from .views import (
    MobileLoginView, ProfileView,
    CitiesView, RouteViewSet, VehicleTypeViewSet,
    RideOfferViewSet,
    TripViewSet, DriverDashboardView,
)

router = routers.DefaultRouter()
router.register(r"mobile-login", MobileLoginView, basename="mobile-login")
router.register(r"profile", ProfileView, basename="profile")

router.register(r"city-list", CitiesView, basename="city-list")
router.register(r"route", RouteViewSet, basename="route")
router.register(r"vehicle-types", VehicleTypeViewSet, basename="vehicle-types")

router.register(r"ride-offers", RideOfferViewSet, basename="ride-offers")
router.register(r"trips", TripViewSet, basename="trips")
router.register(r"driver-dashboard", DriverDashboardView, basename="driver-dashboard")

urlpatterns = [
    path('', include(router.urls)),
    path('api-auth/', include('rest_framework.urls')),    # to login in rest_framework
]

"""Shared fixtures for connect_app tests"""
from datetime import time, timedelta

from django.contrib.auth.models import User
from django.utils import timezone

from ..models import City, Profile, RideOffer, Route, VehicleType
from ..utils.constants import UserRole


def make_passenger(username='9191000001', full_name='Dolma Angmo'):
    user = User.objects.create(username=username)
    Profile.objects.create(user=user, mobile_number=username, full_name=full_name, role=UserRole.PASSENGER)
    return User.objects.get(pk=user.pk)


def make_owner(username='9191000002', full_name='Tenzin Norbu', vehicle_type='Innova Crysta'):
    user = User.objects.create(username=username)
    Profile.objects.create(
        user=user, mobile_number=username, full_name=full_name, role=UserRole.OWNER,
        vehicle_no='JK-10-B-1234', vehicle_type=vehicle_type,
    )
    return User.objects.get(pk=user.pk)


def make_cities():
    leh = City.objects.create(name='Leh')
    srinagar = City.objects.create(name='Srinagar')
    return leh, srinagar


def make_reference_data():
    leh, srinagar = make_cities()
    Route.objects.create(from_city=leh, to_city=srinagar, distance_km=420, base_fare=3000)
    VehicleType.objects.create(name='Innova Crysta', seats=6, layout=[1, 2, 3], rate_multiplier='1.20')
    VehicleType.objects.create(name='Tempo Traveler', seats=12, layout=[1, 2, 3, 3, 3], rate_multiplier='0.85')
    return leh, srinagar


def make_offer(driver, from_city, to_city, days_ahead=2, departure_time=time(7, 0), price=3500,
               total_seats=6, booked_seats=None, vehicle_type='Innova Crysta'):
    return RideOffer.objects.create(
        driver=driver,
        vehicle_no='JK-10-B-1234',
        vehicle_type=vehicle_type,
        from_city=from_city,
        to_city=to_city,
        departure_date=timezone.localdate() + timedelta(days=days_ahead),
        departure_time=departure_time,
        price_per_seat=price,
        total_seats=total_seats,
        booked_seats=booked_seats or [],
    )

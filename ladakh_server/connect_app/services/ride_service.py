"""Ride service - marketplace of offers published by vehicle owners"""
import logging
from datetime import time
from decimal import Decimal, ROUND_HALF_UP

from django.db.models import Q
from django.utils import timezone

from ..models import RideOffer, Route, VehicleType
from ..utils.constants import UserRole, BusinessRules, TimeOfDay

logger = logging.getLogger(__name__)


class RidePublishError(Exception):
    """Raised when a ride offer cannot be published"""
    pass


ORDERING_FIELDS = {
    'departure': ['departure_time', 'price_per_seat'],
    'price': ['price_per_seat', 'departure_time'],
    '-price': ['-price_per_seat', 'departure_time'],
    'rating': ['-rating', 'departure_time'],
}


def default_layout(total_seats):
    """Front seat beside the driver, then rows of three"""
    if total_seats <= 0:
        return []
    rows = [1]
    remaining = total_seats - 1
    while remaining > 0:
        rows.append(min(3, remaining))
        remaining -= rows[-1]
    return rows


def build_seat_map(total_seats, layout, booked_seats):
    """Lay seats 1..total_seats out in rows, marking each booked or available"""
    if not layout or sum(layout) != total_seats:
        layout = default_layout(total_seats)

    booked = set(booked_seats)
    rows = []
    seat_number = 1
    for row_size in layout:
        row = []
        for _ in range(row_size):
            row.append({
                'seat_number': seat_number,
                'status': 'booked' if seat_number in booked else 'available',
            })
            seat_number += 1
        rows.append(row)
    return rows


class RideService:
    """Service for ride offer operations"""

    def suggested_price(self, from_city, to_city, vehicle_type):
        """Route base fare scaled by the vehicle's rate multiplier, or None if the route is unknown"""
        route = Route.objects.filter(from_city=from_city, to_city=to_city).first()
        if route is None:
            route = Route.objects.filter(from_city=to_city, to_city=from_city).first()
        if route is None:
            return None

        vehicle = VehicleType.objects.filter(name=vehicle_type).first()
        multiplier = vehicle.rate_multiplier if vehicle else Decimal('1.00')
        price = (Decimal(route.base_fare) * multiplier).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
        return int(price)

    def default_seat_count(self, vehicle_type):
        vehicle = VehicleType.objects.filter(name=vehicle_type).first()
        if vehicle:
            return vehicle.seats
        if vehicle_type == BusinessRules.TEMPO_TRAVELER:
            return BusinessRules.TEMPO_TRAVELER_SEATS
        return BusinessRules.DEFAULT_SEATS

    def publish_ride(self, user, from_city, to_city, departure_date, departure_time,
                     price_per_seat=None, total_seats=None):
        """
        Publish a ride offer for the owner's registered vehicle

        Args:
            user: Owner publishing the ride
            from_city, to_city: City objects
            departure_date: date of travel
            departure_time: time of departure
            price_per_seat: optional, defaults to the suggested route fare
            total_seats: optional, defaults to the vehicle's seat count

        Returns:
            RideOffer object

        Raises:
            RidePublishError: If the user cannot publish or the offer is invalid
        """
        profile = getattr(user, 'profile', None)
        if profile is None or profile.role != UserRole.OWNER:
            raise RidePublishError('Only vehicle owners can publish rides')

        if from_city == to_city:
            raise RidePublishError('Origin and destination must differ')

        if departure_date < timezone.localdate():
            raise RidePublishError('Departure date cannot be in the past')

        vehicle_type = profile.vehicle_type or BusinessRules.DEFAULT_VEHICLE_TYPE

        if price_per_seat is None:
            price_per_seat = self.suggested_price(from_city, to_city, vehicle_type)
            if price_per_seat is None:
                raise RidePublishError('No fare known for this route; please set a price per seat')

        if total_seats is None:
            total_seats = self.default_seat_count(vehicle_type)

        offer = RideOffer.objects.create(
            driver=user,
            vehicle_no=profile.vehicle_no or '',
            vehicle_type=vehicle_type,
            from_city=from_city,
            to_city=to_city,
            departure_date=departure_date,
            departure_time=departure_time,
            price_per_seat=price_per_seat,
            total_seats=total_seats,
            booked_seats=[],
            rating=BusinessRules.DEFAULT_DRIVER_RATING,
        )
        logger.info(f'[RIDE] {user.username} published offer {offer.id}: {offer}')
        return offer

    def search(self, from_city, to_city, date, max_price=None, vehicle_types=None,
               time_of_day=None, ordering='departure'):
        """Active offers on a route and date, narrowed by the passenger's filters"""
        offers = RideOffer.objects.filter(
            is_active=True,
            from_city__name__iexact=from_city,
            to_city__name__iexact=to_city,
            departure_date=date,
        ).select_related('driver__profile', 'from_city', 'to_city')

        if max_price is not None:
            offers = offers.filter(price_per_seat__lte=max_price)

        if vehicle_types:
            offers = offers.filter(vehicle_type__in=vehicle_types)

        if time_of_day:
            offers = offers.filter(self._time_of_day_filter(time_of_day))

        return offers.order_by(*ORDERING_FIELDS.get(ordering, ORDERING_FIELDS['departure']))

    def offers_for_driver(self, user):
        return RideOffer.objects.filter(driver=user).select_related('from_city', 'to_city')

    def seat_map(self, offer):
        vehicle = VehicleType.objects.filter(name=offer.vehicle_type).first()
        layout = vehicle.layout if vehicle else []
        return {
            'offer_id': offer.id,
            'vehicle_type': offer.vehicle_type,
            'total_seats': offer.total_seats,
            'available_seats': offer.available_seats,
            'price_per_seat': offer.price_per_seat,
            'rows': build_seat_map(offer.total_seats, layout, offer.booked_seats),
        }

    def _time_of_day_filter(self, periods):
        condition = Q()
        for period in periods:
            start_hour, end_hour = TimeOfDay.WINDOWS[period]
            window = Q(departure_time__gte=time(start_hour, 0))
            if end_hour < 24:
                window &= Q(departure_time__lt=time(end_hour, 0))
            condition |= window
        return condition

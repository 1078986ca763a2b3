# command : python manage.py seed_marketplace
from datetime import time
from decimal import Decimal

from django.contrib.auth.models import User
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from connect_app.models import City, Route, VehicleType, Profile, RideOffer
from connect_app.utils.constants import UserRole

CITIES = ['Leh', 'Srinagar', 'Kargil', 'Nubra Valley', 'Pangong Lake', 'Manali', 'Jammu', 'Sonamarg']

# (from, to, distance km, base fare per seat)
ROUTES = [
    ('Leh', 'Srinagar', 420, 3000),
    ('Leh', 'Kargil', 220, 1500),
    ('Leh', 'Nubra Valley', 150, 1200),
    ('Leh', 'Pangong Lake', 225, 1400),
    ('Leh', 'Manali', 475, 3500),
    ('Kargil', 'Srinagar', 200, 1500),
    ('Srinagar', 'Sonamarg', 80, 700),
    ('Srinagar', 'Jammu', 260, 1400),
]

# (name, seats, layout, rate multiplier)
VEHICLES = [
    ('Innova Crysta', 6, [1, 2, 3], Decimal('1.20')),
    ('Mahindra Xylo', 7, [1, 3, 3], Decimal('1.00')),
    ('Toyota Innova', 7, [1, 3, 3], Decimal('1.10')),
    ('Tempo Traveler', 12, [1, 2, 3, 3, 3], Decimal('0.85')),
]

DEMO_DRIVERS = [
    {
        'username': 'demo_tenzin', 'full_name': 'Tenzin Norbu', 'vehicle_no': 'JK-10-B-1234',
        'vehicle_type': 'Innova Crysta', 'departure_time': time(7, 0), 'price': 3500,
        'seats': 6, 'booked': [1], 'rating': Decimal('4.80'),
    },
    {
        'username': 'demo_stanzin', 'full_name': 'Stanzin Dorje', 'vehicle_no': 'JK-10-A-5678',
        'vehicle_type': 'Mahindra Xylo', 'departure_time': time(8, 30), 'price': 3000,
        'seats': 7, 'booked': [], 'rating': Decimal('4.50'),
    },
]


class Command(BaseCommand):
    help = 'Seed cities, routes, vehicle types and the demo Leh to Srinagar ride offers'

    def add_arguments(self, parser):
        parser.add_argument('--skip-offers', action='store_true', help='Only load reference data')

    @transaction.atomic
    def handle(self, *args, **options):
        cities = {}
        for name in CITIES:
            cities[name], created = City.objects.get_or_create(name=name)
            if created:
                self.stdout.write(f'Created city: {name}')

        for origin, destination, distance, fare in ROUTES:
            Route.objects.update_or_create(
                from_city=cities[origin], to_city=cities[destination],
                defaults={'distance_km': distance, 'base_fare': fare},
            )
        self.stdout.write(f'Loaded {len(ROUTES)} routes')

        for name, seats, layout, multiplier in VEHICLES:
            VehicleType.objects.update_or_create(
                name=name,
                defaults={'seats': seats, 'layout': layout, 'rate_multiplier': multiplier},
            )
        self.stdout.write(f'Loaded {len(VEHICLES)} vehicle types')

        if options['skip_offers']:
            self.stdout.write(self.style.SUCCESS('Reference data loaded'))
            return

        today = timezone.localdate()
        for demo in DEMO_DRIVERS:
            user, created = User.objects.get_or_create(username=demo['username'])
            if created:
                user.set_unusable_password()
                user.save(update_fields=['password'])
            Profile.objects.get_or_create(
                user=user,
                defaults={
                    'full_name': demo['full_name'],
                    'role': UserRole.OWNER,
                    'vehicle_no': demo['vehicle_no'],
                    'vehicle_type': demo['vehicle_type'],
                    'driver_rating': demo['rating'],
                },
            )
            offer, created = RideOffer.objects.get_or_create(
                driver=user,
                from_city=cities['Leh'],
                to_city=cities['Srinagar'],
                departure_date=today,
                departure_time=demo['departure_time'],
                defaults={
                    'vehicle_no': demo['vehicle_no'],
                    'vehicle_type': demo['vehicle_type'],
                    'price_per_seat': demo['price'],
                    'total_seats': demo['seats'],
                    'booked_seats': demo['booked'],
                    'rating': demo['rating'],
                },
            )
            if created:
                self.stdout.write(f'Created offer {offer.id}: {offer} by {demo["full_name"]}')

        self.stdout.write(self.style.SUCCESS('Marketplace seeded'))

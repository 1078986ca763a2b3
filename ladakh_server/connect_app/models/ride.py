"""Ride offers published by vehicle owners"""
from datetime import datetime

from django.db import models
from django.contrib.auth.models import User
from django.utils import timezone


class RideOffer(models.Model):
    driver = models.ForeignKey(User, on_delete=models.CASCADE, related_name='ride_offers')
    vehicle_no = models.CharField(max_length=20)
    vehicle_type = models.CharField(max_length=30)
    from_city = models.ForeignKey('City', on_delete=models.PROTECT, related_name='offers_from')
    to_city = models.ForeignKey('City', on_delete=models.PROTECT, related_name='offers_to')
    departure_date = models.DateField(db_index=True)
    departure_time = models.TimeField()
    price_per_seat = models.PositiveIntegerField()
    total_seats = models.PositiveSmallIntegerField()
    booked_seats = models.JSONField(default=list)
    rating = models.DecimalField(max_digits=3, decimal_places=2, default=5.00)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['from_city', 'to_city', 'departure_date'], name='offer_route_date_idx'),
        ]

    def __str__(self):
        return f"{self.from_city} → {self.to_city} ({self.departure_date} {self.departure_time:%H:%M})"

    @property
    def driver_name(self):
        profile = getattr(self.driver, 'profile', None)
        return profile.full_name if profile else self.driver.username

    @property
    def available_seats(self):
        return self.total_seats - len(self.booked_seats)

    def departure_datetime(self):
        naive = datetime.combine(self.departure_date, self.departure_time)
        return timezone.make_aware(naive, timezone.get_current_timezone())

    def unavailable_seats(self, seats):
        """Return the requested seats that are already booked"""
        booked = set(self.booked_seats)
        return sorted(s for s in seats if s in booked)

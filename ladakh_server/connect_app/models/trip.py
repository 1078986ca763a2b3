"""Trip-related models"""
from django.db import models
from django.contrib.auth.models import User

from ..utils.constants import TripStatus, BusinessRules


class Trip(models.Model):
    offer = models.ForeignKey('RideOffer', on_delete=models.SET_NULL, null=True, blank=True, related_name='trips')
    passenger = models.ForeignKey(User, on_delete=models.CASCADE, related_name='trips')
    driver = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='driven_trips')
    from_city = models.ForeignKey('City', on_delete=models.PROTECT, related_name='trips_from')
    to_city = models.ForeignKey('City', on_delete=models.PROTECT, related_name='trips_to')
    travel_date = models.DateField(db_index=True)
    seats = models.JSONField(default=list)
    cost = models.PositiveIntegerField()
    status = models.CharField(max_length=10, choices=TripStatus.CHOICES, default=TripStatus.BOOKED, db_index=True)
    driver_name = models.CharField(max_length=100, default=BusinessRules.PLACEHOLDER_DRIVER_NAME)
    vehicle_no = models.CharField(max_length=20, default=BusinessRules.PLACEHOLDER_VEHICLE_NO)
    vehicle_type = models.CharField(max_length=30)
    user_rating = models.PositiveSmallIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['passenger', '-created_at'], name='trip_passenger_created_idx'),
            models.Index(fields=['driver', 'status'], name='trip_driver_status_idx'),
        ]

    def __str__(self):
        return f"{self.booking_reference}: {self.from_city} → {self.to_city} ({self.status})"

    @property
    def booking_reference(self):
        return f"{BusinessRules.BOOKING_REFERENCE_PREFIX}{self.id}"

    @property
    def passenger_name(self):
        profile = getattr(self.passenger, 'profile', None)
        return profile.full_name if profile else self.passenger.username

    def is_participant(self, user):
        return user.id in (self.passenger_id, self.driver_id)


class ChatMessage(models.Model):
    trip = models.ForeignKey(Trip, on_delete=models.CASCADE, related_name='messages')
    sender = models.ForeignKey(User, on_delete=models.CASCADE, related_name='chat_messages')
    text = models.TextField(max_length=BusinessRules.MAX_MESSAGE_LENGTH)
    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['timestamp', 'id']

    def __str__(self):
        return f"{self.sender} on {self.trip_id}: {self.text[:30]}"

"""User-related models"""
from django.db import models
from django.contrib.auth.models import User

from ..utils.constants import UserRole, AuthProvider


class OTPAttempt(models.Model):
    mobile_number = models.CharField(max_length=15, unique=True, db_index=True)
    attempt_count = models.IntegerField(default=0)
    last_attempt = models.DateTimeField(auto_now=True)
    blocked_until = models.DateTimeField(null=True, blank=True)

    class Meta:
        indexes = [models.Index(fields=['mobile_number', 'last_attempt'], name='otp_mobile_last_idx')]

    def __str__(self):
        return f"{self.mobile_number} - Attempts: {self.attempt_count}"


class Profile(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE)
    mobile_number = models.CharField(max_length=15, unique=True, null=True, blank=True, db_index=True)
    full_name = models.CharField(max_length=100)
    role = models.CharField(max_length=10, choices=UserRole.CHOICES, default=UserRole.PASSENGER)
    vehicle_no = models.CharField(max_length=20, null=True, blank=True)
    vehicle_type = models.CharField(max_length=30, null=True, blank=True)
    profile_image = models.FileField(upload_to='profiles/', null=True, blank=True)
    auth_provider = models.CharField(max_length=10, choices=AuthProvider.CHOICES, default=AuthProvider.PHONE)
    driver_rating = models.DecimalField(max_digits=3, decimal_places=2, default=5.00)
    total_reviews = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.full_name} ({self.role})"

    @property
    def is_owner(self):
        return self.role == UserRole.OWNER

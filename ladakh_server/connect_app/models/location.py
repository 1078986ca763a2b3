"""Reference data: cities, routes and vehicle definitions"""
from decimal import Decimal

from django.db import models
from django.core.exceptions import ValidationError


class City(models.Model):
    name = models.CharField(max_length=50, unique=True)
    image = models.URLField(blank=True, default='')

    class Meta:
        ordering = ['name']
        verbose_name_plural = 'cities'

    def __str__(self):
        return self.name


class Route(models.Model):
    from_city = models.ForeignKey(City, on_delete=models.CASCADE, related_name='routes_from')
    to_city = models.ForeignKey(City, on_delete=models.CASCADE, related_name='routes_to')
    distance_km = models.PositiveIntegerField()
    base_fare = models.PositiveIntegerField(help_text='Per-seat fare for a standard vehicle')

    class Meta:
        unique_together = ['from_city', 'to_city']
        ordering = ['id']

    def __str__(self):
        return f"{self.from_city} → {self.to_city} ({self.distance_km} km)"

    def clean(self):
        if self.from_city_id and self.from_city_id == self.to_city_id:
            raise ValidationError("Route must connect two different cities")


class VehicleType(models.Model):
    name = models.CharField(max_length=30, unique=True)
    rate_multiplier = models.DecimalField(max_digits=4, decimal_places=2, default=Decimal('1.00'))
    seats = models.PositiveSmallIntegerField()
    layout = models.JSONField(default=list, help_text='Seats per row, front row first, e.g. [1, 3, 3]')
    image = models.URLField(blank=True, default='')

    class Meta:
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.seats} seats)"

    def clean(self):
        if self.layout and sum(self.layout) != self.seats:
            raise ValidationError("Seat layout must add up to the number of seats")

"""Reference data serializers"""
from rest_framework import serializers

from ..models import City, Route, VehicleType


class CitySerializer(serializers.ModelSerializer):
    class Meta:
        model = City
        fields = ["id", "name", "image"]


class RouteSerializer(serializers.ModelSerializer):
    from_city = serializers.CharField(source='from_city.name', read_only=True)
    to_city = serializers.CharField(source='to_city.name', read_only=True)

    class Meta:
        model = Route
        fields = ["id", "from_city", "to_city", "distance_km", "base_fare"]


class VehicleTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = VehicleType
        fields = ["id", "name", "rate_multiplier", "seats", "layout", "image"]

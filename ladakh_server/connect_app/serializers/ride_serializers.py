"""Ride offer serializers"""
from rest_framework import serializers

from ..models import RideOffer, City
from ..services.ride_service import ORDERING_FIELDS
from ..utils.constants import TimeOfDay

TIME_INPUT_FORMATS = ['%H:%M', '%H:%M:%S', '%I:%M %p']


class RideOfferSerializer(serializers.ModelSerializer):
    driver_id = serializers.IntegerField(source='driver.id', read_only=True)
    driver_name = serializers.CharField(read_only=True)
    from_city = serializers.CharField(source='from_city.name', read_only=True)
    to_city = serializers.CharField(source='to_city.name', read_only=True)
    available_seats = serializers.IntegerField(read_only=True)

    class Meta:
        model = RideOffer
        fields = ['id', 'driver_id', 'driver_name', 'vehicle_no', 'vehicle_type', 'from_city', 'to_city',
                  'departure_date', 'departure_time', 'price_per_seat', 'total_seats', 'booked_seats',
                  'available_seats', 'rating', 'is_active', 'created_at']


class PublishRideSerializer(serializers.Serializer):
    from_city = serializers.SlugRelatedField(slug_field='name', queryset=City.objects.all())
    to_city = serializers.SlugRelatedField(slug_field='name', queryset=City.objects.all())
    departure_date = serializers.DateField()
    departure_time = serializers.TimeField(input_formats=TIME_INPUT_FORMATS)
    price_per_seat = serializers.IntegerField(min_value=1, required=False)
    total_seats = serializers.IntegerField(min_value=1, max_value=20, required=False)

    def validate(self, data):
        if data['from_city'] == data['to_city']:
            raise serializers.ValidationError("Origin and destination must differ")
        return data


class RideSearchSerializer(serializers.Serializer):
    from_city = serializers.CharField()
    to_city = serializers.CharField()
    date = serializers.DateField()
    max_price = serializers.IntegerField(min_value=0, required=False)
    vehicle_types = serializers.ListField(child=serializers.CharField(), required=False)
    time_of_day = serializers.ListField(
        child=serializers.ChoiceField(choices=TimeOfDay.CHOICES), required=False
    )
    ordering = serializers.ChoiceField(choices=list(ORDERING_FIELDS), required=False, default='departure')

    def to_internal_value(self, data):
        # accept both repeated params and comma-separated values
        if hasattr(data, 'getlist'):
            data = {key: data.getlist(key) if key in ('vehicle_types', 'time_of_day') else data.get(key)
                    for key in data.keys()}
        else:
            data = dict(data)
        for key in ('vehicle_types', 'time_of_day'):
            if key in data:
                values = data[key] if isinstance(data[key], list) else [data[key]]
                data[key] = [v.strip() for value in values for v in str(value).split(',') if v.strip()]
        return super().to_internal_value(data)

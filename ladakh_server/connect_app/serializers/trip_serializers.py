"""Trip-related serializers"""
from rest_framework import serializers

from ..models import Trip, ChatMessage
from ..utils.constants import TripStatus, BusinessRules


class ChatMessageSerializer(serializers.ModelSerializer):
    sender_id = serializers.IntegerField(source='sender.id', read_only=True)
    sender_name = serializers.SerializerMethodField()

    class Meta:
        model = ChatMessage
        fields = ['id', 'sender_id', 'sender_name', 'text', 'timestamp']

    def get_sender_name(self, obj):
        profile = getattr(obj.sender, 'profile', None)
        return profile.full_name if profile else obj.sender.username


class TripSerializer(serializers.ModelSerializer):
    from_city = serializers.CharField(source='from_city.name', read_only=True)
    to_city = serializers.CharField(source='to_city.name', read_only=True)
    booking_reference = serializers.CharField(read_only=True)
    passenger_id = serializers.IntegerField(source='passenger.id', read_only=True)
    passenger_name = serializers.CharField(read_only=True)
    offer_id = serializers.IntegerField(source='offer.id', read_only=True, default=None)
    departure_time = serializers.SerializerMethodField()
    payment_status = serializers.SerializerMethodField()

    class Meta:
        model = Trip
        fields = ['id', 'booking_reference', 'offer_id', 'from_city', 'to_city', 'travel_date', 'departure_time',
                  'seats', 'cost', 'status', 'passenger_id', 'passenger_name', 'driver_name', 'vehicle_no',
                  'vehicle_type', 'user_rating', 'payment_status', 'created_at', 'completed_at', 'cancelled_at']

    def get_departure_time(self, obj):
        return obj.offer.departure_time if obj.offer else None

    def get_payment_status(self, obj):
        escrow = getattr(obj, 'escrow', None)
        return escrow.status if escrow else None


class BookingRequestSerializer(serializers.Serializer):
    offer = serializers.IntegerField()
    seats = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)


class TripStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TripStatus.CHOICES)


class RatingSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=BusinessRules.MIN_RATING, max_value=BusinessRules.MAX_RATING)


class MessageCreateSerializer(serializers.Serializer):
    text = serializers.CharField(max_length=BusinessRules.MAX_MESSAGE_LENGTH)


class DriverDashboardSerializer(serializers.Serializer):
    balance = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_earnings = serializers.IntegerField()
    active_trips = TripSerializer(many=True)
    completed_trips = TripSerializer(many=True)

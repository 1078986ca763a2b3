"""User-related serializers"""
from rest_framework import serializers
from django.contrib.auth.models import User

from ..models import Profile
from ..utils.constants import UserRole, BusinessRules


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "username", "email"]


class ProfileSerializer(serializers.ModelSerializer):
    user = UserSerializer(read_only=True)

    class Meta:
        model = Profile
        fields = ['id', 'user', 'mobile_number', 'full_name', 'role', 'vehicle_no', 'vehicle_type',
                  'profile_image', 'auth_provider', 'driver_rating', 'total_reviews']


class ProfileCompletionSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=UserRole.CHOICES)
    full_name = serializers.CharField(max_length=100)
    vehicle_no = serializers.CharField(max_length=20, required=False, allow_blank=True)
    vehicle_type = serializers.CharField(max_length=30, required=False, allow_blank=True)

    def validate_full_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Please enter your name")
        return value

    def validate(self, data):
        if data['role'] == UserRole.OWNER and not data.get('vehicle_no', '').strip():
            raise serializers.ValidationError({'vehicle_no': "Please enter vehicle number"})
        return data


class ProfileUpdateSerializer(serializers.ModelSerializer):
    # verified with Pillow; the client content type is not trusted
    profile_image = serializers.ImageField(required=False, allow_null=True)

    class Meta:
        model = Profile
        fields = ['full_name', 'vehicle_no', 'vehicle_type', 'profile_image']

    def validate_profile_image(self, value):
        if value is None:
            return value
        if value.size > BusinessRules.MAX_PROFILE_IMAGE_BYTES:
            raise serializers.ValidationError("Profile picture must be 2 MB or smaller")
        return value

    def validate(self, data):
        if self.instance and self.instance.role != UserRole.OWNER:
            for field in ('vehicle_no', 'vehicle_type'):
                if data.get(field):
                    raise serializers.ValidationError({field: "Only vehicle owners have vehicle details"})
        if self.instance and self.instance.role == UserRole.OWNER and 'vehicle_no' in data and not data['vehicle_no']:
            raise serializers.ValidationError({'vehicle_no': "Please enter vehicle number"})
        return data


class OTPRequestSerializer(serializers.Serializer):
    mobile_number = serializers.CharField(max_length=20)


class OTPVerifySerializer(serializers.Serializer):
    mobile_number = serializers.CharField(max_length=20)
    otp_code = serializers.CharField(max_length=6, min_length=4)


class FirebaseLoginSerializer(serializers.Serializer):
    firebase_token = serializers.CharField()


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()

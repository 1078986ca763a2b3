from django.contrib import admin
from django.utils import timezone

from .models import OTPAttempt, Profile, City, Route, VehicleType, RideOffer, Trip, ChatMessage

# Customize admin site
admin.site.site_header = "Ladakh Connect Administration"
admin.site.site_title = "Ladakh Connect Admin"
admin.site.index_title = "Welcome to Ladakh Connect Admin Panel"


@admin.register(OTPAttempt)
class OTPAttemptAdmin(admin.ModelAdmin):
    list_display = ['id', 'mobile_number', 'attempt_count', 'last_attempt', 'blocked_until', 'is_blocked']
    list_filter = ['last_attempt', 'blocked_until']
    search_fields = ['mobile_number']
    ordering = ['-last_attempt']
    list_per_page = 100
    readonly_fields = ['last_attempt']
    actions = ['unblock_numbers']

    def is_blocked(self, obj):
        return bool(obj.blocked_until and obj.blocked_until > timezone.now())
    is_blocked.boolean = True
    is_blocked.short_description = 'Blocked'

    def unblock_numbers(self, request, queryset):
        count = queryset.update(blocked_until=None, attempt_count=0)
        self.message_user(request, f"{count} numbers unblocked.")
    unblock_numbers.short_description = "Unblock selected numbers"


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'mobile_number', 'full_name', 'role', 'vehicle_no', 'driver_rating', 'created_at']
    list_filter = ['role', 'auth_provider', 'created_at']
    search_fields = ['user__username', 'user__email', 'mobile_number', 'full_name', 'vehicle_no']
    ordering = ['-created_at']
    list_per_page = 50
    readonly_fields = ['created_at', 'driver_rating', 'total_reviews']


@admin.register(City)
class CityAdmin(admin.ModelAdmin):
    list_display = ['id', 'name']
    search_fields = ['name']


@admin.register(Route)
class RouteAdmin(admin.ModelAdmin):
    list_display = ['id', 'from_city', 'to_city', 'distance_km', 'base_fare']
    search_fields = ['from_city__name', 'to_city__name']
    autocomplete_fields = ['from_city', 'to_city']


@admin.register(VehicleType)
class VehicleTypeAdmin(admin.ModelAdmin):
    list_display = ['name', 'seats', 'layout', 'rate_multiplier']


@admin.register(RideOffer)
class RideOfferAdmin(admin.ModelAdmin):
    list_display = ['id', 'driver', 'from_city', 'to_city', 'departure_date', 'departure_time',
                    'price_per_seat', 'total_seats', 'is_active']
    list_filter = ['is_active', 'departure_date', 'vehicle_type']
    search_fields = ['driver__username', 'vehicle_no', 'from_city__name', 'to_city__name']
    ordering = ['-departure_date']
    date_hierarchy = 'departure_date'
    list_per_page = 50
    autocomplete_fields = ['from_city', 'to_city']
    actions = ['deactivate_offers']

    def deactivate_offers(self, request, queryset):
        count = queryset.update(is_active=False)
        self.message_user(request, f"{count} offers withdrawn from search.")
    deactivate_offers.short_description = "Withdraw selected offers"


class ChatMessageInline(admin.TabularInline):
    model = ChatMessage
    extra = 0
    readonly_fields = ['sender', 'text', 'timestamp']


@admin.register(Trip)
class TripAdmin(admin.ModelAdmin):
    list_display = ['id', 'passenger', 'driver_name', 'from_city', 'to_city', 'travel_date', 'cost', 'status', 'created_at']
    list_filter = ['status', 'travel_date', 'created_at']
    search_fields = ['passenger__username', 'driver_name', 'vehicle_no']
    ordering = ['-created_at']
    date_hierarchy = 'travel_date'
    list_per_page = 50
    # money moves only through the booking and trip services
    readonly_fields = ['status', 'cost', 'seats', 'user_rating', 'created_at', 'completed_at', 'cancelled_at']
    inlines = [ChatMessageInline]


@admin.register(ChatMessage)
class ChatMessageAdmin(admin.ModelAdmin):
    list_display = ['id', 'trip', 'sender', 'text', 'timestamp']
    search_fields = ['sender__username', 'text']
    ordering = ['-timestamp']
    list_per_page = 100

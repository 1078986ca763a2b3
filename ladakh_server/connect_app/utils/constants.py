"""Centralized constants and business rules"""

class UserRole:
    PASSENGER = 'passenger'
    OWNER = 'owner'

    CHOICES = [
        (PASSENGER, 'Passenger'),
        (OWNER, 'Vehicle Owner'),
    ]

class TripStatus:
    BOOKED = 'BOOKED'
    EN_ROUTE = 'EN_ROUTE'
    ARRIVED = 'ARRIVED'
    COMPLETED = 'COMPLETED'
    CANCELLED = 'CANCELLED'

    CHOICES = [
        (BOOKED, 'Booked'),
        (EN_ROUTE, 'En Route'),
        (ARRIVED, 'Arrived'),
        (COMPLETED, 'Completed'),
        (CANCELLED, 'Cancelled'),
    ]

    # Steps a driver may take; COMPLETED is reached only through passenger confirmation
    DRIVER_TRANSITIONS = {
        BOOKED: EN_ROUTE,
        EN_ROUTE: ARRIVED,
    }

    OPEN = [BOOKED, EN_ROUTE, ARRIVED]

class EscrowStatus:
    HELD = 'held'
    RELEASED = 'released'
    REFUNDED = 'refunded'

    CHOICES = [
        (HELD, 'Held in Vault'),
        (RELEASED, 'Released to Driver'),
        (REFUNDED, 'Refunded to Passenger'),
    ]

class TransactionType:
    CREDIT = 'credit'
    DEBIT = 'debit'

    CHOICES = [
        (CREDIT, 'credit'),
        (DEBIT, 'debit'),
    ]

class TopUpMethod:
    SIMULATED = 'simulated'
    STRIPE = 'stripe'

    CHOICES = [
        (SIMULATED, 'Simulated'),
        (STRIPE, 'Stripe'),
    ]

class TimeOfDay:
    MORNING = 'Morning'
    AFTERNOON = 'Afternoon'
    EVENING = 'Evening'

    # [start_hour, end_hour)
    WINDOWS = {
        MORNING: (6, 12),
        AFTERNOON: (12, 18),
        EVENING: (18, 24),
    }

    CHOICES = [
        (MORNING, 'Morning'),
        (AFTERNOON, 'Afternoon'),
        (EVENING, 'Evening'),
    ]

class DocumentType:
    TICKET = 'Ticket'
    INVOICE = 'Invoice'

class AuthProvider:
    PHONE = 'phone'
    GOOGLE = 'google'

    CHOICES = [
        (PHONE, 'Phone OTP'),
        (GOOGLE, 'Google'),
    ]

class BusinessRules:
    """Business rules and limits"""
    OTP_EXPIRY_SECONDS = 120
    OTP_MAX_ATTEMPTS = 5
    OTP_BLOCK_MINUTES = 30
    OTP_LENGTH = 6
    DEFAULT_COUNTRY_CODE = '91'
    MIN_MOBILE_DIGITS = 10
    INITIAL_PASSENGER_BALANCE = 15000
    INITIAL_OWNER_BALANCE = 2500
    CANCELLATION_WINDOW_HOURS = 2
    DEFAULT_DRIVER_RATING = 5.0
    DEFAULT_VEHICLE_TYPE = 'Taxi'
    DEFAULT_SEATS = 7
    TEMPO_TRAVELER_SEATS = 12
    TEMPO_TRAVELER = 'Tempo Traveler'
    MAX_MESSAGE_LENGTH = 1000
    MAX_PROFILE_IMAGE_BYTES = 2 * 1024 * 1024
    MIN_RATING = 1
    MAX_RATING = 5
    PLACEHOLDER_DRIVER_NAME = 'Assigned Driver'
    PLACEHOLDER_VEHICLE_NO = 'JK-XX-TEMP'
    BOOKING_REFERENCE_PREFIX = 'LC'

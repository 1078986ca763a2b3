"""Models package - domain-based organization"""

# User models
from .user import OTPAttempt, Profile

# Reference data
from .location import City, Route, VehicleType

# Marketplace models
from .ride import RideOffer

# Trip models
from .trip import Trip, ChatMessage

__all__ = [
    'OTPAttempt', 'Profile', 'City', 'Route', 'VehicleType', 'RideOffer', 'Trip', 'ChatMessage',
]

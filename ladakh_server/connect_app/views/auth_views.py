"""Authentication and profile views"""
import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.parsers import JSONParser, MultiPartParser, FormParser
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from wallet.services import WalletService
from ..models import Profile
from ..serializers import (
    ProfileSerializer, ProfileCompletionSerializer, ProfileUpdateSerializer,
    OTPRequestSerializer, OTPVerifySerializer, FirebaseLoginSerializer, LogoutSerializer,
)
from ..services import AuthService

logger = logging.getLogger(__name__)


def _login_response(user, **extra):
    tokens = AuthService().issue_tokens(user)
    profile = getattr(user, 'profile', None)
    return {
        **tokens,
        'user_id': user.id,
        'profile_complete': profile is not None,
        'profile': ProfileSerializer(profile).data if profile else None,
        **extra,
    }


class MobileLoginView(viewsets.ViewSet):

    permission_classes = [AllowAny]
    # login endpoints must work without a token
    authentication_classes = []

    @action(detail=False, methods=['post'], url_path='request-otp')
    def request_otp(self, request):
        serializer = OTPRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService().request_otp(serializer.validated_data['mobile_number'])
        if not result['success']:
            return Response({'error': result['error']}, status=result['status_code'])

        data = {'message': result['message'], 'mobile_number': result['mobile_number']}
        if result['otp_code']:
            # SMS delivery failed; the demo flow shows the code on screen
            data['otp_code'] = result['otp_code']
        return Response(data, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], url_path='verify-otp')
    def verify_otp(self, request):
        serializer = OTPVerifySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService().verify_otp(
            serializer.validated_data['mobile_number'],
            serializer.validated_data['otp_code'],
        )
        if not result['success']:
            return Response({'error': result['error']}, status=status.HTTP_400_BAD_REQUEST)

        return Response(_login_response(result['user']), status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], url_path='firebase-login')
    def firebase_login(self, request):
        serializer = FirebaseLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService().verify_firebase_token(serializer.validated_data['firebase_token'])
        if not result['success']:
            return Response({'error': result['error']}, status=status.HTTP_401_UNAUTHORIZED)

        return Response(
            _login_response(result['user'], provider=result['provider'], suggested_name=result['suggested_name']),
            status=status.HTTP_200_OK,
        )


class ProfileView(viewsets.ViewSet):
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    @action(detail=False, methods=['get'], url_path='me')
    def me(self, request):
        try:
            profile = Profile.objects.select_related('user').get(user=request.user)
        except Profile.DoesNotExist:
            return Response({'error': 'Profile not found', 'profile_complete': False},
                            status=status.HTTP_404_NOT_FOUND)

        data = ProfileSerializer(profile, context={'request': request}).data
        data['wallet_balance'] = WalletService().get_wallet(request.user).balance
        return Response(data, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], url_path='complete')
    def complete(self, request):
        serializer = ProfileCompletionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService().complete_profile(request.user, **serializer.validated_data)
        if not result['success']:
            return Response({'error': result['error']}, status=status.HTTP_400_BAD_REQUEST)

        data = ProfileSerializer(result['profile'], context={'request': request}).data
        data['wallet_balance'] = WalletService().get_wallet(request.user).balance
        return Response(data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['patch', 'put'], url_path='update')
    def update_profile(self, request):
        try:
            profile = Profile.objects.get(user=request.user)
        except Profile.DoesNotExist:
            return Response({'error': 'Profile not found'}, status=status.HTTP_404_NOT_FOUND)

        serializer = ProfileUpdateSerializer(profile, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        if serializer.validated_data.get('vehicle_no'):
            serializer.validated_data['vehicle_no'] = serializer.validated_data['vehicle_no'].upper()
        serializer.save()

        logger.info(f'[AUTH] Profile updated for {request.user.username}')
        return Response(ProfileSerializer(profile, context={'request': request}).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], url_path='logout')
    def logout(self, request):
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService().logout(serializer.validated_data['refresh'])
        if not result['success']:
            return Response({'error': result['error']}, status=status.HTTP_400_BAD_REQUEST)
        return Response({'message': 'Logged out'}, status=status.HTTP_200_OK)

"""Trip views: booking, lifecycle, chat, rating and documents"""

from django.db.models import Q
from django.http import HttpResponse
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from wallet.services import InsufficientFundsError
from ..models import Trip, RideOffer
from ..permissions import HasProfile, IsOwner, IsPassenger
from ..serializers import (
    TripSerializer, ChatMessageSerializer, BookingRequestSerializer, TripStatusSerializer,
    RatingSerializer, MessageCreateSerializer, DriverDashboardSerializer,
)
from ..services import (
    BookingService, BookingError, SeatUnavailableError, TripService, TripPermissionError,
    InvalidStatusTransitionError, RatingError, ChatError, EscrowError,
    DocumentService, DocumentNotAvailableError,
)
from ..utils.constants import DocumentType


DOCUMENT_TYPES = {
    'ticket': DocumentType.TICKET,
    'invoice': DocumentType.INVOICE,
}


class TripViewSet(viewsets.ReadOnlyModelViewSet):
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated, HasProfile]
    serializer_class = TripSerializer

    def get_permissions(self):
        if self.action == 'create':
            return [IsAuthenticated(), IsPassenger()]
        return super().get_permissions()

    def get_queryset(self):
        user = self.request.user
        return Trip.objects.filter(
            Q(passenger=user) | Q(driver=user)
        ).select_related('from_city', 'to_city', 'offer', 'passenger__profile', 'escrow')

    def list(self, request, *args, **kwargs):
        trips = TripService().trips_for(request.user).select_related('passenger__profile', 'escrow')
        serializer = self.get_serializer(trips, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    def create(self, request, *args, **kwargs):
        serializer = BookingRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            trip = BookingService().book_trip(
                request.user,
                serializer.validated_data['offer'],
                serializer.validated_data['seats'],
            )
        except RideOffer.DoesNotExist:
            return Response({'error': 'Ride not found'}, status=status.HTTP_404_NOT_FOUND)
        except SeatUnavailableError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        except InsufficientFundsError:
            return Response({'error': 'Insufficient wallet balance'}, status=status.HTTP_400_BAD_REQUEST)
        except BookingError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(self.get_serializer(trip).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'], url_path='status')
    def update_status(self, request, pk=None):
        serializer = TripStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        trip = self.get_object()

        try:
            trip = TripService().update_status(trip.id, request.user, serializer.validated_data['status'])
        except TripPermissionError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidStatusTransitionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(self.get_serializer(trip).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='confirm-arrival')
    def confirm_arrival(self, request, pk=None):
        trip = self.get_object()

        try:
            trip = TripService().confirm_arrival(trip.id, request.user)
        except TripPermissionError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (InvalidStatusTransitionError, EscrowError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(self.get_serializer(trip).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='cancel')
    def cancel(self, request, pk=None):
        trip = self.get_object()

        try:
            trip = BookingService().cancel_booking(trip.id, request.user)
        except BookingError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(self.get_serializer(trip).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='rate')
    def rate(self, request, pk=None):
        serializer = RatingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        trip = self.get_object()

        try:
            trip = TripService().rate_trip(trip.id, request.user, serializer.validated_data['rating'])
        except TripPermissionError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except RatingError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(self.get_serializer(trip).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['get', 'post'], url_path='messages')
    def messages(self, request, pk=None):
        trip = self.get_object()

        if request.method == 'POST':
            serializer = MessageCreateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            try:
                message = TripService().send_message(trip.id, request.user, serializer.validated_data['text'])
            except ChatError as e:
                return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
            return Response(ChatMessageSerializer(message).data, status=status.HTTP_201_CREATED)

        since = request.query_params.get('since')
        if since:
            since = parse_datetime(since)
            if since is None:
                return Response({'error': 'Invalid since timestamp'}, status=status.HTTP_400_BAD_REQUEST)
            if timezone.is_naive(since):
                since = timezone.make_aware(since)

        messages = TripService().messages(trip.id, request.user, since=since or None)
        return Response(ChatMessageSerializer(messages, many=True).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['get'], url_path=r'documents/(?P<doc_type>ticket|invoice)')
    def document(self, request, pk=None, doc_type=None):
        trip = self.get_object()

        try:
            filename, content = DocumentService().render(trip, DOCUMENT_TYPES[doc_type])
        except DocumentNotAvailableError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        response = HttpResponse(content, content_type='text/plain; charset=utf-8')
        response['Content-Disposition'] = f'attachment; filename="{filename}"'
        return response


class DriverDashboardView(viewsets.ViewSet):
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated, IsOwner]

    def list(self, request):
        summary = TripService().driver_summary(request.user)
        return Response(DriverDashboardSerializer(summary).data, status=status.HTTP_200_OK)


__all__ = ['TripViewSet', 'DriverDashboardView']

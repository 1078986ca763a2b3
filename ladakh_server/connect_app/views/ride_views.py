"""Ride offer views using RideService"""
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.generics import get_object_or_404
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from ..models import RideOffer, City
from ..permissions import IsOwner
from ..serializers import RideOfferSerializer, PublishRideSerializer, RideSearchSerializer
from ..services import RideService, RidePublishError


class RideOfferViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Marketplace of rides published by owners

    GET  /ride-offers/?from_city=Leh&to_city=Srinagar&date=2026-11-02  search
    POST /ride-offers/                                                 publish (owners)
    GET  /ride-offers/{id}/seats/                                      seat map
    GET  /ride-offers/mine/                                            owner's own offers
    """
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated]
    serializer_class = RideOfferSerializer
    queryset = RideOffer.objects.select_related('driver__profile', 'from_city', 'to_city')

    def get_permissions(self):
        if self.action in ('create', 'mine'):
            return [IsAuthenticated(), IsOwner()]
        return super().get_permissions()

    def list(self, request, *args, **kwargs):
        search = RideSearchSerializer(data=request.query_params)
        search.is_valid(raise_exception=True)

        offers = RideService().search(**search.validated_data)
        serializer = self.get_serializer(offers, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    def create(self, request, *args, **kwargs):
        serializer = PublishRideSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            offer = RideService().publish_ride(request.user, **serializer.validated_data)
        except RidePublishError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(self.get_serializer(offer).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['get'], url_path='seats')
    def seats(self, request, pk=None):
        offer = self.get_object()
        return Response(RideService().seat_map(offer), status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], url_path='mine')
    def mine(self, request):
        offers = RideService().offers_for_driver(request.user)
        serializer = self.get_serializer(offers, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], url_path='suggested-price')
    def suggested_price(self, request):
        from_city = get_object_or_404(City, name__iexact=request.query_params.get('from_city', ''))
        to_city = get_object_or_404(City, name__iexact=request.query_params.get('to_city', ''))

        profile = getattr(request.user, 'profile', None)
        vehicle_type = request.query_params.get('vehicle_type') or (profile.vehicle_type if profile else None)
        price = RideService().suggested_price(from_city, to_city, vehicle_type)
        if price is None:
            return Response({'error': 'No fare known for this route'}, status=status.HTTP_404_NOT_FOUND)
        return Response({'price_per_seat': price}, status=status.HTTP_200_OK)

"""Reference data views: cities, routes and vehicle types"""
from rest_framework import viewsets
from rest_framework.permissions import AllowAny

from ..models import City, Route, VehicleType
from ..serializers import CitySerializer, RouteSerializer, VehicleTypeSerializer


class CitiesView(viewsets.ReadOnlyModelViewSet):
    permission_classes = [AllowAny]
    queryset = City.objects.all()
    serializer_class = CitySerializer


class RouteViewSet(viewsets.ReadOnlyModelViewSet):
    permission_classes = [AllowAny]
    serializer_class = RouteSerializer

    def get_queryset(self):
        queryset = Route.objects.select_related('from_city', 'to_city')
        from_city = self.request.query_params.get('from_city')
        to_city = self.request.query_params.get('to_city')
        if from_city:
            queryset = queryset.filter(from_city__name__iexact=from_city)
        if to_city:
            queryset = queryset.filter(to_city__name__iexact=to_city)
        return queryset


class VehicleTypeViewSet(viewsets.ReadOnlyModelViewSet):
    permission_classes = [AllowAny]
    queryset = VehicleType.objects.all()
    serializer_class = VehicleTypeSerializer

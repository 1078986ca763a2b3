from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import WalletView, WalletTransactionView, VaultView, stripe_webhook

router = DefaultRouter()
router.register(r'balance', WalletView, basename='balance')
router.register(r'transactions', WalletTransactionView, basename='transactions')
router.register(r'vault', VaultView, basename='vault')

urlpatterns = [
    path('wallet/', include(router.urls)),
    path('webhook/stripe/', stripe_webhook, name='stripe-webhook'),
]

from decimal import Decimal

from django.db.models.signals import post_save
from django.dispatch import receiver
from django.db.models import Avg
import logging

from wallet.services import WalletService
from .models import Profile, Trip, RideOffer

logger = logging.getLogger(__name__)


def _rounded(avg):
    return Decimal(str(round(avg, 2))) if avg is not None else None


@receiver(post_save, sender=Profile)
def open_wallet_on_profile_created(sender, instance, created, **kwargs):
    """Every new profile starts with the simulated balance for its role"""
    if not created:
        return
    wallet = WalletService().open_wallet(instance.user, instance.role)
    logger.info(f'[SIGNAL] Wallet opened for {instance.user.username} with {wallet.balance}')


@receiver(post_save, sender=Trip)
def update_ratings_on_trip_rated(sender, instance, created, update_fields=None, **kwargs):
    """Auto-update cached driver and offer ratings when a passenger rates a trip"""
    if created or not update_fields or 'user_rating' not in update_fields:
        return
    if instance.user_rating is None:
        return

    if instance.driver_id:
        driver_trips = Trip.objects.filter(driver_id=instance.driver_id, user_rating__isnull=False)
        avg = _rounded(driver_trips.aggregate(Avg('user_rating'))['user_rating__avg'])
        Profile.objects.filter(user_id=instance.driver_id).update(
            driver_rating=avg, total_reviews=driver_trips.count()
        )

    if instance.offer_id:
        offer_trips = Trip.objects.filter(offer_id=instance.offer_id, user_rating__isnull=False)
        avg = _rounded(offer_trips.aggregate(Avg('user_rating'))['user_rating__avg'])
        RideOffer.objects.filter(id=instance.offer_id).update(rating=avg)

    logger.info(f'[SIGNAL] Ratings refreshed after {instance.booking_reference} was rated {instance.user_rating}')

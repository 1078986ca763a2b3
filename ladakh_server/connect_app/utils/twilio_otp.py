"""Twilio SMS utility"""
import os
import logging
from twilio.rest import Client

logger = logging.getLogger(__name__)


def send_sms_via_twilio(phone_number, body):
    """Send an SMS via Twilio"""
    try:
        account_sid = os.getenv('TWILIO_ACCOUNT_SID')
        auth_token = os.getenv('TWILIO_AUTH_TOKEN')
        twilio_phone_number = os.getenv('TWILIO_PHONE_NUMBER')

        if not all([account_sid, auth_token, twilio_phone_number]):
            return {"status": "error", "message": "Twilio credentials not configured"}

        if not phone_number.startswith('+'):
            phone_number = '+' + phone_number

        client = Client(account_sid, auth_token)
        message = client.messages.create(
            body=body,
            from_=twilio_phone_number,
            to=phone_number
        )

        return {"status": "success", "sid": message.sid}
    except Exception as e:
        logger.error(f'[SMS] Twilio delivery to {phone_number} failed: {e}')
        return {"status": "error", "message": str(e)}


def send_otp_via_twilio(phone_number, otp_code):
    """Send OTP via Twilio SMS"""
    return send_sms_via_twilio(phone_number, f"Your Ladakh Connect OTP is {otp_code}")

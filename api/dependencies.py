"""
API dependencies.
"""
from application.factory import get_payment_processor
from application.services.payment_processor import PaymentProcessor


async def get_processor() -> PaymentProcessor:
    return get_payment_processor()

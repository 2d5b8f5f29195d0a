"""Payment gateway implementations."""

from app.infrastructure.external.payments.razorpay_gateway import RazorpayGateway

__all__ = ["RazorpayGateway"]

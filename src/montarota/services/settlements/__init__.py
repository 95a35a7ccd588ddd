"""Settlement helpers."""

from .service import generate_weekly, list_payments, mark_paid, total_fees

__all__ = ["generate_weekly", "mark_paid", "list_payments", "total_fees"]

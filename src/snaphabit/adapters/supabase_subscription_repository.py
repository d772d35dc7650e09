"""Supabase repository for synced subscriptions."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from snaphabit.domain.billing import SubscriptionRecord
from snaphabit.services.subscriptions import SubscriptionRepository


@dataclass
class SupabaseSubscriptionRepository(SubscriptionRepository):
    """Read-only view of the subscriptions table."""

    client: Client

    def get_subscription(self, user_id: str) -> SubscriptionRecord | None:
        """Return the subscription row for a user."""
        response = (
            self.client.table("subscriptions")
            .select(
                "user_id, status, stripe_current_period_end, is_lifetime, "
                "stripe_customer_id, stripe_subscription_id"
            )
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        period_end_raw = row.get("stripe_current_period_end")
        return SubscriptionRecord(
            user_id=str(row["user_id"]),
            status=row.get("status"),
            current_period_end=(
                datetime.fromisoformat(period_end_raw)
                if isinstance(period_end_raw, str) and period_end_raw
                else None
            ),
            is_lifetime=bool(row.get("is_lifetime")),
            stripe_customer_id=row.get("stripe_customer_id"),
            stripe_subscription_id=row.get("stripe_subscription_id"),
        )

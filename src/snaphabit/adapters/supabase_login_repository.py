"""Supabase repository for daily logins."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from snaphabit.services.logins import LoginRepository


@dataclass
class SupabaseLoginRepository(LoginRepository):
    """Supabase implementation for the daily_logins table."""

    client: Client

    def record_login(self, user_id: str, day: date) -> None:
        """Upsert today's login row."""
        self.client.table("daily_logins").upsert(
            {"user_id": user_id, "login_date": day.isoformat()},
            on_conflict="user_id,login_date",
        ).execute()

    def list_login_days(self, user_id: str, limit: int) -> list[date]:
        """Return recent login days, newest first."""
        response = (
            self.client.table("daily_logins")
            .select("login_date")
            .eq("user_id", user_id)
            .order("login_date", desc=True)
            .limit(limit)
            .execute()
        )
        return [
            date.fromisoformat(str(row["login_date"])[:10])
            for row in response.data or []
            if row.get("login_date")
        ]

    def count_login_days(self, user_id: str) -> int:
        """Return the number of recorded login days."""
        response = (
            self.client.table("daily_logins")
            .select("login_date", count="exact")
            .eq("user_id", user_id)
            .execute()
        )
        if response.count is not None:
            return response.count
        return len(response.data or [])

"""Supabase repository for user goals."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from food_diary.services.goals import GoalsStore


@dataclass
class SupabaseGoalsRepository(GoalsStore):
    """Supabase implementation for daily goals."""

    client: Client

    def get_goals(self, user_id: str) -> dict[str, object] | None:
        """Return the stored goals row for a user."""
        response = (
            self.client.table("user_goals")
            .select("*")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]

    def set_goals(self, user_id: str, payload: dict[str, object]) -> None:
        """Insert or update the user's goals."""
        response = (
            self.client.table("user_goals")
            .upsert(
                {
                    "user_id": user_id,
                    **payload,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save goals")

"""Supabase backend adapter."""

from goalpilot.repositories.supabase.advisor import SupabaseScheduleAdvisor
from goalpilot.repositories.supabase.client import SupabaseClient
from goalpilot.repositories.supabase.repository import SupabaseRepository

__all__ = ["SupabaseClient", "SupabaseRepository", "SupabaseScheduleAdvisor"]

"""Request handlers."""

from health_tip_chat.services.health_chat import HealthChatService
from health_tip_chat.services.tips import TipService, select_daily_tip

__all__ = ["HealthChatService", "TipService", "select_daily_tip"]

"""User settings service — upsert over hardcoded defaults."""

import dataclasses
from typing import Optional

from taskflow.db.memory import EntityStore
from taskflow.models import UserSettings
from taskflow.models.base import utcnow
from taskflow.schemas.schemas import SettingsUpdate


class SettingsService:

    @staticmethod
    def get(store: EntityStore, user_id: str) -> Optional[UserSettings]:
        return store.user_settings.first_by("user_id", user_id)

    @staticmethod
    def update(store: EntityStore, user_id: str, patch: SettingsUpdate) -> UserSettings:
        """Merge the patch into the user's settings, creating the row on first save.

        Notification channels are merged one by one, so toggling ``push``
        leaves ``email`` and ``mentions`` as they were.
        """
        changes = patch.changes()
        existing = SettingsService.get(store, user_id)
        base = existing or UserSettings(user_id=user_id)

        if "notifications" in changes:
            changes["notifications"] = {**base.notifications, **changes["notifications"]}

        if existing is None:
            return store.user_settings.add(dataclasses.replace(base, **changes))
        updated = dataclasses.replace(
            existing, **changes, updated_at=max(utcnow(), existing.updated_at)
        )
        return store.user_settings.replace(updated)


settings_service = SettingsService()

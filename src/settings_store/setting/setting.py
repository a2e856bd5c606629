"""Store-wide key/value setting, filed under one of a fixed set of groups."""

from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from shared.clock import utcnow
from shared.domain import yapee


class SettingGroup(Enum):
    GENERAL = "general"
    PAYMENT = "payment"
    NOTIFICATION = "notification"
    SHIPPING = "shipping"


@yapee.aggregate
class Setting:
    key: String(required=True, max_length=100, unique=True)
    value: Text(required=True)
    group: String(max_length=50, default=SettingGroup.GENERAL.value)
    description: Text()
    created_at: DateTime(default=utcnow)
    updated_at: DateTime(default=utcnow)

    @classmethod
    def create(cls, key, value, group=None, description=None):
        check_entry(key, value, group)

        now = utcnow()
        return cls(
            key=key,
            value=value,
            group=group or SettingGroup.GENERAL.value,
            description=description,
            created_at=now,
            updated_at=now,
        )

    def change(self, value, group=None, description=None) -> None:
        """Replace the value; group and description are kept unless given."""
        check_entry(self.key, value, group)
        self.value = value
        if group:
            self.group = group
        if description:
            self.description = description
        self.updated_at = utcnow()


def check_entry(key, value, group=None) -> None:
    if not key or not key.strip():
        raise ValidationError({"key": ["Key is required"]})
    if value is None or value == "":
        raise ValidationError({"value": ["Value is required"]})
    if group:
        try:
            SettingGroup(group)
        except ValueError:
            allowed = ", ".join(g.value for g in SettingGroup)
            raise ValidationError({"group": [f"Invalid group '{group}'. Expected one of: {allowed}"]}) from None

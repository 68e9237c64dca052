"""Friend link entry model.

Entries are authored by hand in the entry file. The checker only ever toggles
``disconnected`` and does so by returning new instances, never by mutation.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FriendLink(BaseModel):
    """One friend-link record: a site URL plus its avatar image URL.

    ``recommended`` and ``disconnected`` are absent-means-false. ``False`` is
    normalised to ``None`` so that two entries that differ only in how "not set"
    was spelled compare equal.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    url: str = Field(min_length=1)
    avatar: str = Field(min_length=1)
    add_date: str | None = Field(default=None, alias="addDate")
    recommended: bool | None = None
    disconnected: bool | None = None

    @field_validator("recommended", "disconnected")
    @classmethod
    def _false_means_absent(cls, value: bool | None) -> bool | None:
        return True if value else None

    @field_validator("add_date")
    @classmethod
    def _empty_date_means_absent(cls, value: str | None) -> str | None:
        return value or None

    @property
    def is_disconnected(self) -> bool:
        """True when a previous run flagged this entry as unreachable."""
        return bool(self.disconnected)

    @property
    def is_recommended(self) -> bool:
        return bool(self.recommended)

    def mark_disconnected(self) -> "FriendLink":
        """Return a copy flagged as disconnected (idempotent)."""
        if self.is_disconnected:
            return self
        return self.model_copy(update={"disconnected": True})

    def clear_disconnected(self) -> "FriendLink":
        """Return a copy with the disconnected flag removed."""
        if not self.is_disconnected:
            return self
        return self.model_copy(update={"disconnected": None})

    def to_record(self) -> dict[str, str | bool]:
        """Serialise using the on-disk key names, omitting unset fields.

        Key order matches the canonical file layout: required fields, then
        ``addDate``, ``recommended`` and ``disconnected``.
        """
        record: dict[str, str | bool] = {
            "name": self.name,
            "description": self.description,
            "url": self.url,
            "avatar": self.avatar,
        }
        if self.add_date:
            record["addDate"] = self.add_date
        if self.recommended:
            record["recommended"] = True
        if self.disconnected:
            record["disconnected"] = True
        return record

"""Pydantic models describing the UniFi OS network API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class UniFiBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Site(UniFiBaseModel):
    name: str
    desc: str | None = None


class SitesResponse(UniFiBaseModel):
    data: list[Site] = Field(default_factory=list[Site])


class ActiveClient(UniFiBaseModel):
    mac: str
    ip: str | None = None
    hostname: str | None = None
    display_name: str | None = None

    @property
    def name(self) -> str:
        """Reported hostname, falling back to the name shown in the UniFi UI."""

        return self.hostname or self.display_name or ""


ActiveClientsAdapter = TypeAdapter(list[ActiveClient])

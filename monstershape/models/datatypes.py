"""Core datatypes for normalized monster records.

Responsibilities:
- Represent the fixed-schema record produced by the normalizer.
- Export records as plain payloads where absent fields are omitted, never `null`.

Key types:
- `RecordEntry`: one trait, action, reaction, or legendary action.
- `MonsterRecord`: the normalized record consumed by downstream rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(frozen=True, slots=True)
class RecordEntry:
    """A named block of rules text.

    Attributes:
        name: Display name of the entry.
        text: Plain-prose description with markdown removed.
        recharge: Limited-use annotation copied from the source `uses` field.
        cost: Legendary action cost; set only for legendary actions.
    """

    name: object = None
    text: str | None = None
    recharge: object = None
    cost: object = None

    def as_payload(self) -> dict[str, object]:
        """Return entry fields that are present, in fixed order."""

        payload: dict[str, object] = {}
        for key in ("name", "text", "recharge", "cost"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        return payload


_PAYLOAD_KEYS = {
    "armor_class": "AC",
    "hit_points": "HP",
    "legendary_actions": "legendaryActions",
    "legendary_points": "legendaryPoints",
    "saving_throws": "savingThrows",
    "condition_immunities": "conditionImmunities",
    "damage_resistances": "damageResistances",
    "damage_immunities": "damageImmunities",
    "damage_vulnerabilities": "damageVulnerabilities",
}


@dataclass(frozen=True, slots=True)
class MonsterRecord:
    """Normalized monster record; `None` marks a field absent from the source.

    Field order matches the serialized key order.
    """

    name: object = None
    size: str | None = None
    type: str | None = None
    alignment: object = None
    armor_class: object = None
    hit_points: object = None
    speed: object = None
    strength: object = None
    dexterity: object = None
    constitution: object = None
    intelligence: object = None
    wisdom: object = None
    charisma: object = None
    challenge: object = None
    traits: tuple[RecordEntry, ...] | None = None
    actions: tuple[RecordEntry, ...] | None = None
    legendary_actions: tuple[RecordEntry, ...] | None = None
    legendary_points: object = None
    reactions: tuple[RecordEntry, ...] | None = None
    saving_throws: str | None = None
    skills: str | None = None
    condition_immunities: object = None
    damage_resistances: object = None
    damage_immunities: object = None
    damage_vulnerabilities: object = None
    senses: object = None
    languages: object = None

    @staticmethod
    def payload_key(attribute: str) -> str:
        """Return the serialized key for a dataclass attribute name."""

        return _PAYLOAD_KEYS.get(attribute, attribute)

    def is_empty(self) -> bool:
        """Return whether every field is absent."""

        return all(getattr(self, item.name) is None for item in fields(self))

    def as_payload(self) -> dict[str, object]:
        """Return a JSON-ready mapping containing only present fields."""

        payload: dict[str, object] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is None:
                continue
            if isinstance(value, tuple):
                value = [entry.as_payload() for entry in value]
            payload[self.payload_key(item.name)] = value
        return payload

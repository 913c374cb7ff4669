"""Record normalization from document trees to `MonsterRecord`.

Responsibilities:
- Map author-facing source fields onto the fixed record schema.
- Apply per-field formatting rules only when the source field is present.
- Report present-but-misshapen fields as `NormalizationError`.

Key types:
- `RecordNormalizer`: stateless field mapper; one instance may serve many documents.
"""

from __future__ import annotations

from collections.abc import Iterator

from ..document.tree import ABSENT, MappingValue, Node, SequenceValue, lookup
from ..errors import NormalizationError
from ..models.datatypes import MonsterRecord, RecordEntry
from ..parsing import parse_integer_like
from ..text.cleaners import MarkdownStripper
from ..text.formatting import capitalize_first, challenge_value, format_bonus_list
from .attack_text import read_attack_fields, render_attack_text


_ABILITY_FIELDS = (
    ("str", "strength"),
    ("dex", "dexterity"),
    ("con", "constitution"),
    ("int", "intelligence"),
    ("wis", "wisdom"),
    ("cha", "charisma"),
)
_VERBATIM_FIELDS = (
    ("name", "name"),
    ("alignment", "alignment"),
    ("hp", "hit_points"),
    ("speed", "speed"),
    ("condition.immunities", "condition_immunities"),
    ("damage.resistances", "damage_resistances"),
    ("damage.immunities", "damage_immunities"),
    ("damage.vulnerabilities", "damage_vulnerabilities"),
    ("senses", "senses"),
    ("languages", "languages"),
)
_DEFAULT_LEGENDARY_POINTS = 3
_DEFAULT_LEGENDARY_COST = 1
_LEGENDARY_PREAMBLE_KEY = "description"


class RecordNormalizer:
    """Normalize one source document tree into a `MonsterRecord`."""

    def __init__(self, stripper: MarkdownStripper | None = None) -> None:
        """Initialize with an optional custom markdown stripper."""

        self._stripper = stripper or MarkdownStripper()

    def normalize(self, tree: Node) -> MonsterRecord:
        """Return the normalized record for `tree`; `ABSENT` yields an empty record.

        Raises:
            NormalizationError: A present field has an incompatible shape.
        """

        if not tree.present:
            return MonsterRecord()
        if not isinstance(tree, MappingValue):
            raise NormalizationError(
                field_path="<root>",
                detail="document root must be a mapping.",
            )

        values: dict[str, object] = {}
        for source_path, attribute in _VERBATIM_FIELDS:
            node = lookup(tree, source_path)
            if node.present:
                values[attribute] = node.to_python()

        values.update(self._identity_fields(tree))
        values.update(self._ability_scores(tree))

        cr = tree.field("cr")
        if cr.present:
            values["challenge"] = challenge_value(cr.to_python())

        traits = tree.field("traits")
        if traits.present:
            values["traits"] = tuple(self._entries(traits, "traits"))

        actions = self._actions(tree)
        if actions is not None:
            values["actions"] = actions

        legendary = tree.field("legendaryActions")
        if legendary.present:
            points = tree.field("legendaryPoints")
            values["legendary_points"] = (
                points.to_python() if points.present else _DEFAULT_LEGENDARY_POINTS
            )
            values["legendary_actions"] = tuple(self._legendary_entries(legendary))

        reactions = tree.field("reactions")
        if reactions.present:
            values["reactions"] = tuple(self._entries(reactions, "reactions"))

        saves = tree.field("saves")
        if saves.present:
            values["saving_throws"] = format_bonus_list(
                self._bonuses(saves, "saves"), label=capitalize_first
            )

        skills = tree.field("skills")
        if skills.present:
            values["skills"] = format_bonus_list(self._bonuses(skills, "skills"))

        return MonsterRecord(**values)

    def strip(self, value: object) -> str:
        """Strip markdown from a free-text field."""

        text = value if isinstance(value, str) else str(value)
        return self._stripper.strip(text)

    def _identity_fields(self, tree: MappingValue) -> dict[str, object]:
        """Render size, type with subtype, and AC with armor."""

        values: dict[str, object] = {}
        size = tree.field("size")
        if size.present:
            values["size"] = capitalize_first(size.to_python())

        kind = tree.field("type")
        if kind.present:
            rendered = capitalize_first(kind.to_python())
            subtype = tree.field("subtype")
            if subtype.present:
                rendered = f"{rendered} ({subtype.to_python()})"
            values["type"] = rendered

        ac = tree.field("ac")
        if ac.present:
            armor = tree.field("armor")
            values["armor_class"] = (
                f"{ac.to_python()} ({armor.to_python()})" if armor.present else ac.to_python()
            )
        return values

    def _ability_scores(self, tree: MappingValue) -> dict[str, object]:
        """Copy the six ability scores from the nested `abilities` group."""

        abilities = tree.field("abilities")
        if not abilities.present:
            return {}
        group = self._require_mapping(abilities, "abilities")
        values: dict[str, object] = {}
        for source_key, attribute in _ABILITY_FIELDS:
            score = group.field(source_key)
            if score.present:
                values[attribute] = score.to_python()
        return values

    def _actions(self, tree: MappingValue) -> tuple[RecordEntry, ...] | None:
        """Combine multiattack, actions, and attacks in that fixed order."""

        multiattack = tree.field("multiattack")
        actions = tree.field("actions")
        attacks = tree.field("attacks")
        if not (multiattack.present or actions.present or attacks.present):
            return None

        combined: list[RecordEntry] = []
        if multiattack.present:
            description = (
                multiattack.field("description")
                if isinstance(multiattack, MappingValue)
                else multiattack
            )
            combined.append(
                RecordEntry(
                    name="Multiattack",
                    text=self.strip(description.to_python()) if description.present else None,
                )
            )
        if actions.present:
            combined.extend(self._entries(actions, "actions"))
        if attacks.present:
            for path, _, entry, fallback_name in self._collection(attacks, "attacks"):
                fields = read_attack_fields(entry, path)
                combined.append(
                    RecordEntry(
                        name=self._entry_name(entry, fallback_name),
                        text=render_attack_text(fields),
                        recharge=entry.field("uses").to_python(),
                    )
                )
        return tuple(combined)

    def _entries(self, group: Node, path: str) -> Iterator[RecordEntry]:
        """Yield trait-shaped entries: name, stripped description, optional recharge."""

        for _, _, entry, fallback_name in self._collection(group, path):
            yield RecordEntry(
                name=self._entry_name(entry, fallback_name),
                text=self._entry_text(entry),
                recharge=entry.field("uses").to_python(),
            )

    def _legendary_entries(self, group: Node) -> Iterator[RecordEntry]:
        """Yield legendary actions, skipping the group's `description` preamble."""

        for _, _, entry, fallback_name in self._collection(
            group, "legendaryActions", skip_key=_LEGENDARY_PREAMBLE_KEY
        ):
            cost = entry.field("cost")
            yield RecordEntry(
                name=self._entry_name(entry, fallback_name),
                text=self._entry_text(entry),
                cost=cost.to_python() if cost.present else _DEFAULT_LEGENDARY_COST,
            )

    def _collection(
        self, group: Node, path: str, skip_key: str | None = None
    ) -> Iterator[tuple[str, str | None, MappingValue, str | None]]:
        """Iterate entries of a sequence or mapping group as `(path, key, entry, fallback)`.

        Mapping groups use their keys as fallback entry names.
        """

        if isinstance(group, SequenceValue):
            for index, item in enumerate(group):
                item_path = f"{path}[{index}]"
                if not item.present:
                    continue
                yield item_path, None, self._require_mapping(item, item_path), None
            return
        if isinstance(group, MappingValue):
            for key, item in group:
                if skip_key is not None and key == skip_key:
                    continue
                item_path = f"{path}.{key}"
                if not item.present:
                    continue
                yield item_path, key, self._require_mapping(item, item_path), key
            return
        raise NormalizationError(
            field_path=path,
            detail="must be a list or mapping of entries.",
        )

    def _bonuses(self, group: Node, path: str) -> Iterator[tuple[str, int]]:
        """Yield `(name, bonus)` pairs from a mapping of integer-like bonuses."""

        mapping = self._require_mapping(group, path)
        for name, node in mapping:
            raw = node.to_python()
            bonus = parse_integer_like(raw)
            if bonus is None:
                raise NormalizationError(
                    field_path=f"{path}.{name}",
                    detail=f"must be an integer bonus, got `{raw}`.",
                )
            yield name, bonus

    def _entry_text(self, entry: MappingValue) -> str | None:
        description = entry.field("description")
        return self.strip(description.to_python()) if description.present else None

    @staticmethod
    def _entry_name(entry: MappingValue, fallback: str | None) -> object:
        name = entry.field("name")
        return name.to_python() if name.present else fallback

    @staticmethod
    def _require_mapping(node: Node, path: str) -> MappingValue:
        if not isinstance(node, MappingValue):
            raise NormalizationError(field_path=path, detail="must be a mapping.")
        return node


def normalize(tree: Node = ABSENT) -> MonsterRecord:
    """Normalize a document tree with a fresh `RecordNormalizer`."""

    return RecordNormalizer().normalize(tree)

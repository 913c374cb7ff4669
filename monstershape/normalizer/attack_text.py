"""Attack description synthesis.

Responsibilities:
- Read attack sub-fields from a source entry.
- Render attack text from an ordered table of `(condition, fragment)` rules.

The rendered shape is
``<type>: <sign><tohit> to hit, [reach <reach>][ or ][range <range>], <target>. Hit: <damage>[ <onhit>]``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..document.tree import MappingValue
from ..errors import NormalizationError
from ..parsing import parse_integer_like
from ..text.formatting import signed


@dataclass(frozen=True, slots=True)
class AttackFields:
    """Attack sub-fields used by the text template.

    Attributes:
        kind: Attack type label, e.g. `Melee Weapon Attack`.
        to_hit: Attack bonus.
        target: Target description.
        damage: Damage expression.
        reach: Optional reach distance.
        range: Optional range band.
        on_hit: Optional trailing on-hit effect.
    """

    kind: object
    to_hit: int
    target: object
    damage: object
    reach: object = None
    range: object = None
    on_hit: object = None


@dataclass(frozen=True, slots=True)
class TemplateRule:
    """Emit `fragment(attack)` when `condition(attack)` holds."""

    condition: Callable[[AttackFields], bool]
    fragment: Callable[[AttackFields], str]


def _always(_: AttackFields) -> bool:
    return True


ATTACK_TEXT_RULES: tuple[TemplateRule, ...] = (
    TemplateRule(_always, lambda attack: f"{attack.kind}: {signed(attack.to_hit)} to hit"),
    TemplateRule(
        lambda attack: attack.reach is not None or attack.range is not None,
        lambda _: ", ",
    ),
    TemplateRule(lambda attack: attack.reach is not None, lambda attack: f"reach {attack.reach}"),
    TemplateRule(
        lambda attack: attack.reach is not None and attack.range is not None,
        lambda _: " or ",
    ),
    TemplateRule(lambda attack: attack.range is not None, lambda attack: f"range {attack.range}"),
    TemplateRule(_always, lambda attack: f", {attack.target}. Hit: {attack.damage}"),
    TemplateRule(lambda attack: attack.on_hit is not None, lambda attack: f" {attack.on_hit}"),
)


def render_attack_text(
    attack: AttackFields, rules: tuple[TemplateRule, ...] = ATTACK_TEXT_RULES
) -> str:
    """Concatenate the fragments of every rule whose condition holds, in table order."""

    return "".join(rule.fragment(attack) for rule in rules if rule.condition(attack))


def read_attack_fields(entry: MappingValue, path: str) -> AttackFields:
    """Build `AttackFields` from a source attack mapping.

    Raises:
        NormalizationError: A required sub-field is missing or `tohit` is not an integer.
    """

    def required(name: str) -> object:
        node = entry.field(name)
        if not node.present:
            raise NormalizationError(
                field_path=f"{path}.{name}",
                detail="is required for an attack entry.",
            )
        return node.to_python()

    def optional(name: str) -> object:
        return entry.field(name).to_python()

    raw_to_hit = required("tohit")
    to_hit = parse_integer_like(raw_to_hit)
    if to_hit is None:
        raise NormalizationError(
            field_path=f"{path}.tohit",
            detail=f"must be an integer bonus, got `{raw_to_hit}`.",
        )

    return AttackFields(
        kind=required("type"),
        to_hit=to_hit,
        target=required("target"),
        damage=required("damage"),
        reach=optional("reach"),
        range=optional("range"),
        on_hit=optional("onhit"),
    )

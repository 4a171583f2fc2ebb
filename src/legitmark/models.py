"""Modèle de données : dataclasses typées pour service requests, sides, progression."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class SRPrimaryState(str, Enum):
    """Étape principale du workflow d'un SR."""

    DRAFT = "DRAFT"
    QC = "QC"
    QUEUE = "QUEUE"
    UNDERWAY = "UNDERWAY"
    COMPLETE = "COMPLETE"
    CANCELLED = "CANCELLED"


class SRSupplementState(str, Enum):
    """Sous-état (None tant que le SR est en DRAFT)."""

    PENDING = "PENDING"
    REJECTED = "REJECTED"
    ASSIGNED = "ASSIGNED"
    APPROVED = "APPROVED"
    COMPLETE = "COMPLETE"


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class SRState:
    """
    État en deux parties d'un SR.

    Combinaisons courantes : DRAFT/None (créé), QC/PENDING, QC/APPROVED,
    UNDERWAY/ASSIGNED, COMPLETE/APPROVED (authentique), COMPLETE/REJECTED
    (contrefaçon), CANCELLED.
    """

    primary: str
    supplement: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "SRState":
        data = _mapping(data)
        supplement = data.get("supplement")
        return cls(
            primary=str(data.get("primary") or SRPrimaryState.DRAFT.value),
            supplement=str(supplement) if supplement is not None else None,
        )


@dataclass(frozen=True)
class Side:
    """Une photo exigée ou optionnelle (ex. "Front", "Interior Size Tag")."""

    uuid: str
    name: str
    required: bool = False
    ordinal: int = 0
    description: str | None = None
    side_group_id: str | None = None
    side_group_name: str | None = None
    thumbnail_image: str | None = None
    example_image: str | None = None
    template_url: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Side":
        data = _mapping(data)
        return cls(
            uuid=str(data.get("uuid") or ""),
            name=str(data.get("name") or ""),
            required=bool(data.get("required", False)),
            ordinal=_int(data.get("ordinal")),
            description=data.get("description"),
            side_group_id=data.get("side_group_id"),
            side_group_name=data.get("side_group_name"),
            thumbnail_image=data.get("thumbnail_image"),
            example_image=data.get("example_image"),
            template_url=data.get("template_url"),
        )


@dataclass(frozen=True)
class SideGroup:
    """Groupe de sides (ex. "Footwear Base")."""

    uuid: str
    name: str
    ordinal: int = 0
    sides: tuple[Side, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "SideGroup":
        data = _mapping(data)
        return cls(
            uuid=str(data.get("uuid") or ""),
            name=str(data.get("name") or ""),
            ordinal=_int(data.get("ordinal")),
            sides=tuple(Side.from_dict(s) for s in data.get("sides") or []),
        )


@dataclass(frozen=True)
class SRRequirements:
    """Exigences photo (structure historique par groupes)."""

    side_groups: tuple[SideGroup, ...] = ()
    total_required: int = 0
    total_optional: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "SRRequirements":
        data = _mapping(data)
        return cls(
            side_groups=tuple(SideGroup.from_dict(g) for g in data.get("side_groups") or []),
            total_required=_int(data.get("total_required")),
            total_optional=_int(data.get("total_optional")),
        )


@dataclass(frozen=True)
class ProgressData:
    """Compteurs d'upload ; `met` est le seul critère d'éligibilité à la soumission."""

    current_required: int = 0
    total_required: int = 0
    current_optional: int = 0
    total_optional: int = 0
    met: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "ProgressData":
        data = _mapping(data)
        return cls(
            current_required=_int(data.get("current_required")),
            total_required=_int(data.get("total_required")),
            current_optional=_int(data.get("current_optional")),
            total_optional=_int(data.get("total_optional")),
            met=bool(data.get("met", False)),
        )


@dataclass(frozen=True)
class SRSides:
    """Sides renvoyés avec `sides=true` : requis, optionnels, progression."""

    required: tuple[Side, ...] = ()
    optional: tuple[Side, ...] = ()
    progress: ProgressData | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "SRSides":
        data = _mapping(data)
        progress = data.get("progress")
        return cls(
            required=tuple(Side.from_dict(s) for s in data.get("required") or []),
            optional=tuple(Side.from_dict(s) for s in data.get("optional") or []),
            progress=ProgressData.from_dict(progress) if isinstance(progress, Mapping) else None,
        )


@dataclass(frozen=True)
class ServiceRequest:
    """Service request (SR) : l'article à authentifier, tel que renvoyé par l'API."""

    uuid: str
    micro_id: str = ""
    state: SRState = field(default_factory=lambda: SRState(SRPrimaryState.DRAFT.value))
    active: bool = True
    external_id: str | None = None
    source: str | None = None
    service: str | None = None
    item: Mapping[str, Any] = field(default_factory=dict)
    requirements: SRRequirements | None = None
    sides: SRSides | None = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> "ServiceRequest":
        data = _mapping(data)
        requirements = data.get("requirements")
        sides = data.get("sides")
        return cls(
            uuid=str(data.get("uuid") or ""),
            micro_id=str(data.get("micro_id") or ""),
            state=SRState.from_dict(data.get("state")),
            active=bool(data.get("active", True)),
            external_id=data.get("external_id"),
            source=data.get("source"),
            service=data.get("service"),
            item=dict(_mapping(data.get("item"))),
            requirements=(
                SRRequirements.from_dict(requirements) if isinstance(requirements, Mapping) else None
            ),
            sides=SRSides.from_dict(sides) if isinstance(sides, Mapping) else None,
            raw=dict(data),
        )


@dataclass(frozen=True)
class ItemSelection:
    """Sélection taxonomique de l'article (UUIDs catégorie / type / marque)."""

    category: str
    type: str
    brand: str


@dataclass(frozen=True)
class CreateSRRequest:
    """Paramètres de création d'un SR."""

    service: str
    item: ItemSelection
    external_id: str | None = None
    """Référence interne du partenaire (renvoyée comme `reference_id` dans les webhooks)."""
    source: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "service": self.service,
            "item": {
                "category": self.item.category,
                "type": self.item.type,
                "brand": self.item.brand,
            },
        }
        if self.external_id is not None:
            payload["external_id"] = self.external_id
        if self.source is not None:
            payload["source"] = self.source
        return payload


@dataclass(frozen=True)
class SubmitResult:
    """Réponse de soumission : identifiants et nouvel état du SR."""

    uuid: str
    micro_id: str
    state: SRState

    @classmethod
    def from_dict(cls, data: Any) -> "SubmitResult":
        sr = _mapping(_mapping(data).get("sr"))
        return cls(
            uuid=str(sr.get("uuid") or ""),
            micro_id=str(sr.get("micro_id") or ""),
            state=SRState.from_dict(sr.get("state")),
        )

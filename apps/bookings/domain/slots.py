"""
Slot Catalog

The fixed set of daily slots a client can reserve. A slot is identified by
a short code (``"A"``, ``"B"``, ...) and maps to a display time range.

The catalog is an immutable value built once from settings and passed
explicitly to the availability calculator and the booking services.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class SlotDefinition:
    """A named time range within a day, e.g. ``A`` = 13:00–15:00."""

    code: str
    start: str
    end: str

    @property
    def label(self) -> str:
        return f"{self.start} - {self.end}"


@dataclass(frozen=True)
class SlotCatalog:
    """
    Slot definitions plus the order they are displayed in.

    Every defined code is bookable. ``display_order`` only lists codes that
    are defined; unknown codes in the configured order are dropped.
    """

    definitions: Tuple[SlotDefinition, ...]
    display_order: Tuple[str, ...] = ()
    _by_code: Dict[str, SlotDefinition] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self):
        by_code = {definition.code: definition for definition in self.definitions}
        if len(by_code) != len(self.definitions):
            raise ValueError("Duplicate slot codes in catalog")
        order = tuple(code for code in self.display_order if code in by_code)
        if not self.display_order:
            order = tuple(definition.code for definition in self.definitions)
        object.__setattr__(self, "_by_code", by_code)
        object.__setattr__(self, "display_order", order)

    @classmethod
    def from_mapping(
        cls,
        slots: Mapping[str, Sequence[str]],
        order: Optional[Iterable[str]] = None,
    ) -> "SlotCatalog":
        definitions = tuple(
            SlotDefinition(code=code, start=start, end=end)
            for code, (start, end) in slots.items()
        )
        return cls(definitions=definitions, display_order=tuple(order or ()))

    @classmethod
    def from_settings(cls) -> "SlotCatalog":
        """Build the catalog from ``BOOKING_SLOTS`` and ``BOOKING_SLOT_ORDER``."""
        from django.conf import settings  # type: ignore

        return cls.from_mapping(
            settings.BOOKING_SLOTS,
            getattr(settings, "BOOKING_SLOT_ORDER", None),
        )

    def __contains__(self, code: object) -> bool:
        return code in self._by_code

    def get(self, code: str) -> SlotDefinition:
        return self._by_code[code]

    @property
    def codes(self) -> Tuple[str, ...]:
        return tuple(self._by_code)

    def ordered(self) -> Tuple[SlotDefinition, ...]:
        return tuple(self._by_code[code] for code in self.display_order)

    def label(self, code: str) -> str:
        return self._by_code[code].label

from __future__ import annotations

from dataclasses import MISSING, dataclass, fields

from gillespie._constants import ANGSTROM_TO_NM


@dataclass
class PlacementSettings:
    """Tuning parameters for candidate selection and snapping.

    The defaults are calibrated against each other.  Change them
    together.

    Attributes:
        bias_factor: Multiplier on the ideal single-bond length that
            sets the catch radius around atoms with spare capacity.
            Full atoms always use a multiplier of 1.
        full_bias: Divisor applied to the distance of full atoms when
            ranking candidates.  Values below 1 push full atoms towards
            the back of the ranking.
        snap_falloff: Steepness of the snap strength
            ``1 / (1 + snap_falloff * d) ** 2``.
        length_scale: Factor converting tabulated angstrom bond
            lengths into scene units.
        bond_scale: Bond cylinder radius relative to atom scale, used
            for display markers.
    """

    bias_factor: float = 1.5
    full_bias: float = 0.5
    snap_falloff: float = 4.0
    length_scale: float = ANGSTROM_TO_NM
    bond_scale: float = 0.15

    def __post_init__(self) -> None:
        for name in ("bias_factor", "full_bias", "length_scale", "bond_scale"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.snap_falloff < 0:
            raise ValueError(
                f"snap_falloff must be non-negative, got {self.snap_falloff}"
            )

    def to_dict(self) -> dict:
        """Serialise to a JSON-compatible dictionary.

        Only fields that differ from their defaults are included.
        """
        defaults = _defaults()
        return {
            name: getattr(self, name)
            for name, default in defaults.items()
            if getattr(self, name) != default
        }

    @classmethod
    def from_dict(cls, d: dict) -> PlacementSettings:
        """Deserialise from a dictionary.

        Missing fields use their defaults.

        Raises:
            ValueError: If *d* contains unknown keys.
        """
        unknown = set(d) - set(_defaults())
        if unknown:
            raise ValueError(
                f"unknown placement settings: {sorted(unknown)}"
            )
        return cls(**d)


def _defaults() -> dict:
    """Return ``{field_name: default}`` for :class:`PlacementSettings`."""
    return {
        f.name: f.default
        for f in fields(PlacementSettings)
        if f.default is not MISSING
    }

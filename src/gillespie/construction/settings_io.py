"""JSON persistence for placement tuning and element overrides.

A settings file is a JSON object with up to two sections::

    {
      "placement": {"bias_factor": 1.3},
      "elements": {"Si": {"colour": "#f0c8a0", "valence": 4,
                          "steric_number": 4, "vdw_radius": 0.21}}
    }

``placement`` holds the non-default :class:`PlacementSettings` fields.
``elements`` maps symbols to :class:`ElementSpec` fields and is merged
over the built-in element table.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from gillespie.elements import DEFAULT_ELEMENT_TABLE, ElementTable
from gillespie.model import ElementSpec, PlacementSettings

_SECTIONS = frozenset({"placement", "elements"})


@dataclass
class SettingsSet:
    """Contents of a settings file.

    A section missing from the file is ``None`` here, so callers can
    tell "not configured" apart from "configured with defaults".

    Attributes:
        placement: Candidate and snapping parameters.
        elements: Extra or replacement element specs keyed by symbol.
    """

    placement: PlacementSettings | None = None
    elements: dict[str, ElementSpec] | None = None

    def element_table(
        self,
        base: ElementTable = DEFAULT_ELEMENT_TABLE,
    ) -> ElementTable:
        """Merge the element overrides over *base*.

        Returns *base* itself when there is nothing to merge.
        """
        if not self.elements:
            return base
        return base.with_elements(self.elements)


def save_settings(
    path: str | Path,
    *,
    placement: PlacementSettings | None = None,
    elements: dict[str, ElementSpec] | None = None,
) -> None:
    """Write placement tuning and element overrides to *path*.

    Sections passed as ``None`` are left out of the file.  Placement
    fields at their default value are left out of the placement
    section.
    """
    payload: dict = {}
    if placement is not None:
        payload["placement"] = placement.to_dict()
    if elements is not None:
        payload["elements"] = {
            symbol: spec.to_dict() for symbol, spec in elements.items()
        }
    Path(path).write_text(json.dumps(payload, indent=2) + "\n")


def load_settings(path: str | Path) -> SettingsSet:
    """Read a settings file written by :func:`save_settings`.

    Element colours may be given in any form
    :func:`~gillespie.model.normalise_colour` accepts, so hand-edited
    files can use names such as ``"orange"``.

    Raises:
        ValueError: If the file has a section other than
            ``placement`` or ``elements``, or a field value fails
            validation.
    """
    payload = json.loads(Path(path).read_text())

    extra = set(payload) - _SECTIONS
    if extra:
        raise ValueError(
            f"unknown top-level keys in settings file: {sorted(extra)}"
        )

    settings = SettingsSet()
    if "placement" in payload:
        settings.placement = PlacementSettings.from_dict(payload["placement"])
    if "elements" in payload:
        settings.elements = {
            symbol: ElementSpec.from_dict(symbol, fields)
            for symbol, fields in payload["elements"].items()
        }
    return settings

from __future__ import annotations

from matplotlib.colors import to_hex, to_rgb

#: A colour specification accepted throughout gillespie.
#:
#: Can be any of:
#:
#: - A packed ``0xRRGGBB`` integer (e.g. ``0xff0000``), the form used
#:   by the element table.
#: - A CSS colour name or hex string (e.g. ``"red"``, ``"#ff0000"``).
#: - A single float for grey (``0.0`` = black, ``1.0`` = white).
#: - An RGB tuple or list with values in ``[0, 1]``
#:   (e.g. ``(1.0, 0.0, 0.0)``).
#:
#: See :func:`normalise_colour` for conversion to a normalised RGB tuple.
Colour = int | str | float | tuple[float, float, float] | list[float]


def normalise_colour(colour: Colour) -> tuple[float, float, float]:
    """Convert a colour specification to a normalised (r, g, b) tuple.

    Integers are read as packed ``0xRRGGBB`` values; floats are grey
    levels.

    Args:
        colour: The colour to normalise.

    Returns:
        A tuple of three floats in [0, 1].

    Raises:
        ValueError: If the colour cannot be interpreted.
    """
    if isinstance(colour, bool):
        raise ValueError(f"Cannot interpret colour: {colour!r}")

    if isinstance(colour, int):
        if not 0 <= colour <= 0xFFFFFF:
            raise ValueError(
                f"Packed colour must be in [0, 0xFFFFFF], got {colour:#x}"
            )
        return (
            ((colour >> 16) & 0xFF) / 255.0,
            ((colour >> 8) & 0xFF) / 255.0,
            (colour & 0xFF) / 255.0,
        )

    if isinstance(colour, float):
        if not 0.0 <= colour <= 1.0:
            raise ValueError(f"Grey value must be in [0, 1], got {colour}")
        return (colour, colour, colour)

    if isinstance(colour, (tuple, list)):
        if len(colour) != 3:
            raise ValueError(
                f"RGB colour needs 3 elements, got {len(colour)}"
            )
        rgb = tuple(float(c) for c in colour)
        outside = [c for c in rgb if not 0.0 <= c <= 1.0]
        if outside:
            raise ValueError(
                f"RGB component outside [0, 1] in {colour!r}: {outside[0]}"
            )
        return rgb

    if isinstance(colour, str):
        try:
            rgb = to_rgb(colour)
        except ValueError as exc:
            raise ValueError(f"Unrecognised colour name: {colour!r}") from exc
        return rgb

    raise ValueError(f"Cannot interpret colour: {colour!r}")


def colour_to_hex(colour: Colour) -> str:
    """Return *colour* as a ``#rrggbb`` string for front ends."""
    return to_hex(normalise_colour(colour))

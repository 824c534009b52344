"""Demo script: build methane with guideline snapping and plot it with matplotlib."""

import logging
from pathlib import Path

import matplotlib.pyplot as plt

from gillespie import BuildSession, atom_markers, bond_markers, guideline_markers

OUTPUT = Path(__file__).resolve().parent / "methane.pdf"

# Rough cursor positions; snapping pulls each one onto a tetrahedral leg.
CURSORS = [
    (0.0, 0.1, 0.0),
    (0.09, -0.04, 0.0),
    (-0.05, -0.03, 0.08),
    (-0.05, -0.03, -0.08),
]


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    session = BuildSession(element="C")
    carbon = session.commit((0.0, 0.0, 0.0))
    session.element = "H"
    for cursor in CURSORS:
        preview = session.preview(cursor)
        print(
            f"cursor {cursor} -> {preview.position.round(4)} "
            f"({len(guideline_markers(preview.guidelines))} guideline markers)"
        )
        session.apply(preview)

    print(f"Built {session.structure}")
    print(f"Carbon capacity left: {carbon.empty_bond_capacity}")

    fig = plt.figure()
    ax = fig.add_subplot(projection="3d")
    for bond in bond_markers(session.structure):
        xs, ys, zs = zip(bond.start, bond.end)
        ax.plot(xs, ys, zs, color="0.5")
    for atom in atom_markers(session.structure):
        ax.scatter(*atom.position, color=atom.colour, edgecolors="k",
                   s=4000 * atom.radius)
    ax.set_box_aspect((1, 1, 1))
    fig.savefig(OUTPUT)
    print(f"Rendered to {OUTPUT}")


if __name__ == "__main__":
    main()

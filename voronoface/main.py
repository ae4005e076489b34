#!/usr/bin/env python
"""
Command-line interface for the voronoface application.

This script provides a CLI wrapper around the run_voronoface function, allowing
its parameters to be controlled via command-line arguments.

Examples:
    # Run with default settings
    voronoface

    # Slower, smoother tracking, with some extra random cells
    voronoface --lerp-speed 0.3 --random-points 15

    # Glowing cells, and the point and cell counts in the corner
    voronoface --glow-layers 3 --stats

    # Print the point count every frame
    voronoface --log-points count
"""

import argh
from voronoface.script_utils import voronoface_cli


def dispatched_voronoface_cli():
    argh.dispatch_command(voronoface_cli)


if __name__ == "__main__":
    dispatched_voronoface_cli()

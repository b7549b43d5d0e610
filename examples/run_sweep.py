#!/usr/bin/env python3
"""Run a breeding sweep and print the JSON report.

Usage: run_sweep.py [preset]   (default: reference)
"""

import logging
import sys

from hatchery.experiment.presets import PRESETS, get_preset
from hatchery.experiment.runner import ExperimentRunner


def main():
    preset = sys.argv[1] if len(sys.argv) > 1 else "reference"
    if preset not in PRESETS:
        print(f"Unknown preset '{preset}'. Available: {', '.join(PRESETS)}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = get_preset(preset)
    collector = ExperimentRunner().run_sweep(config)
    print(collector.to_json())
    return 0


if __name__ == "__main__":
    sys.exit(main())

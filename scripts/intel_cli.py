#!/usr/bin/env python
"""
propscore property intelligence CLI

Usage:
    python scripts/intel_cli.py aggregate 26.14 -81.79                  # flood only
    python scripts/intel_cli.py aggregate 26.14 -81.79 flood,weather    # selected categories
    python scripts/intel_cli.py aggregate 26.14 -81.79 all 12021        # everything, with county FIPS
    python scripts/intel_cli.py presets                                 # list scoring presets
"""

import asyncio
import sys
from pathlib import Path

# add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from propscore.errors import ValidationError
from propscore.log import setup_logging
from propscore.schemas.results import AggregationRequest
from propscore.pipeline import AggregationOrchestrator
from propscore.domain.presets import SCORING_PRESETS


async def _aggregate(request: AggregationRequest):
    async with AggregationOrchestrator() as orchestrator:
        return await orchestrator.aggregate(request)


def cmd_aggregate(lat: str, lng: str, toggles: str = "flood", fips: str = None):
    """Aggregate and print the composite score"""
    try:
        request = AggregationRequest(
            lat=float(lat),
            lng=float(lng),
            toggles=[t for t in toggles.split(",") if t.strip()],
            fips_code=fips,
        )
        response = asyncio.run(_aggregate(request))
    except (ValueError, ValidationError) as e:
        print(f"Invalid request: {e}")
        sys.exit(1)

    score = response.property_score

    print("=" * 60)
    print(f"Property score: {score.score} ({score.grade})")
    print("=" * 60)
    print(f"  {score.summary}")
    print()

    for factor in score.factors:
        print(f"  {factor.impact:+6.1f}  {factor.name:<18} {factor.reason}")

    if response.data:
        print()
        print(f"Data: {', '.join(response.data)}")

    if response.errors:
        print()
        print("Errors:")
        for category, message in response.errors.items():
            print(f"  {category:<12} {message}")

    print("=" * 60)


def cmd_presets():
    """List the preset bundles"""
    print("=" * 40)
    print("Scoring presets")
    print("=" * 40)

    for name, overrides in SCORING_PRESETS.items():
        print(f"{name}")
        for o in overrides:
            state = "on" if o.enabled else "off"
            print(f"  {o.id:<18} weight {o.weight:<4g} {state}")

    print("=" * 40)


def print_help():
    print(__doc__)
    print("Categories: flood, disasters, environment, earthquakes, weather,")
    print("            walkability, amenities, places (groups: all, risk)")


def main():
    if len(sys.argv) < 2:
        print_help()
        return

    setup_logging()
    command = sys.argv[1].lower()

    if command == "aggregate":
        if len(sys.argv) < 4:
            print_help()
            sys.exit(1)
        cmd_aggregate(*sys.argv[2:6])
    elif command == "presets":
        cmd_presets()
    elif command in ["help", "-h", "--help"]:
        print_help()
    else:
        print(f"Unknown command: {command}")
        print_help()


if __name__ == "__main__":
    main()

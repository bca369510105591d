"""Settle the demo galaxy headlessly and print its clusters.

This script:
1. Seeds the 100-thought demo galaxy
2. Steps the force solver until every node sleeps (or --steps runs out)
3. Detects sub and major clusters and summarizes them with the local keyword table
4. Optionally writes final positions and clusters to a JSON file

Useful for tuning physics defaults without a renderer.
"""

import argparse
import asyncio
import json
import logging
import random
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

# Add src to path
sys.path.insert(0, str(project_root / "src"))

from mindgalaxy.galaxy import Galaxy
from mindgalaxy.services import LocalThoughtServices


async def settle(steps: int, seed: int | None, report_every: int, output: str | None) -> None:
    rng = random.Random(seed)
    galaxy = Galaxy.seeded(services=LocalThoughtServices(rng=rng), rng=rng)

    print(f"Seeded {len(galaxy.graph)} thoughts")
    print(f"Physics: {galaxy.engine.config.to_dict()}")

    print("Settling layout...")
    for i in range(1, steps + 1):
        result = galaxy.engine.step()
        if i % report_every == 0:
            print(f"  Step {i}: {result.awake} awake, total speed {result.total_speed:.2f}")
        if galaxy.engine.is_settled:
            print(f"Settled after {i} steps.")
            break
    else:
        awake = sum(not n.is_sleeping for n in galaxy.engine.snapshot())
        print(f"Stopped after {steps} steps with {awake} nodes still awake.")

    # Rebuild clusters against the settled positions, then wait for summaries
    print("Detecting clusters...")
    galaxy.tracker.recompute(galaxy.graph.snapshot(), galaxy.engine.positions())
    await galaxy.tracker.wait_for_summaries()

    for major in galaxy.tracker.major_clusters:
        theme = major.summary.theme if major.summary else "?"
        print(f"\n{major.id} [{theme}] at ({major.center_x:.0f}, {major.center_y:.0f}), {len(major.node_ids)} thoughts")
        for sub_id in major.sub_cluster_ids:
            sub = galaxy.tracker.get(sub_id)
            if sub is None:
                continue
            sub_theme = sub.summary.theme if sub.summary else "?"
            label = "orphans" if sub.is_orphan_group else sub_theme
            print(f"  {sub.id} [{label}] {len(sub.node_ids)} thoughts")

    positions = galaxy.engine.positions()
    if positions:
        xs = [p[0] for p in positions.values()]
        ys = [p[1] for p in positions.values()]
        print(f"\nBounding box: x=[{min(xs):.1f}, {max(xs):.1f}], y=[{min(ys):.1f}, {max(ys):.1f}]")

    if output:
        data = {
            "nodes": galaxy.nodes(),
            "sub_clusters": [c.to_dict() for c in galaxy.tracker.sub_clusters],
            "major_clusters": [c.to_dict() for c in galaxy.tracker.major_clusters],
        }
        Path(output).write_text(json.dumps(data, indent=2, ensure_ascii=False))
        print(f"Wrote layout to {output}")

    await galaxy.close()


def main():
    parser = argparse.ArgumentParser(description="Settle the demo galaxy and print its clusters")
    parser.add_argument(
        "-n", "--steps",
        type=int,
        default=3000,
        help="Maximum solver steps (default: 3000)",
    )
    parser.add_argument(
        "-s", "--seed",
        type=int,
        default=None,
        help="Random seed for the demo data and cluster seeding",
    )
    parser.add_argument(
        "-r", "--report-every",
        type=int,
        default=250,
        help="Print progress every N steps (default: 250)",
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        help="Write final nodes and clusters as JSON",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    asyncio.run(settle(
        steps=args.steps,
        seed=args.seed,
        report_every=args.report_every,
        output=args.output,
    ))


if __name__ == "__main__":
    main()

"""
Command-line runner: seeds a world, runs it and writes the results to CSV.

Example:
    python run_world.py --years 30 --country NL --enact NL "Free schools"
"""

import argparse
import logging

import pandas as pd

from climate import Earth
from forecast import project, summarize_projection
from seed import DEFAULT_SEED_PATH, load_countries
from simulation import WorldSimulation
from store import StateStore


def build_world(seed_path: str = DEFAULT_SEED_PATH, db_path: str = None) -> WorldSimulation:
    store = StateStore(db_path) if db_path else None
    return WorldSimulation(Earth(), load_countries(seed_path), store=store)


def main() -> None:
    parser = argparse.ArgumentParser(description="Save The World climate/economy simulation")
    parser.add_argument("--years", type=int, default=20, help="Simulation years")
    parser.add_argument("--seed-file", type=str, default=DEFAULT_SEED_PATH, help="Country seed JSON")
    parser.add_argument("--db", type=str, default=None, help="SQLite database to persist state in")
    parser.add_argument("--enact", nargs=2, action="append", metavar=("CODE", "POLICY"),
                        help="Enact a policy before running (can be repeated)")
    parser.add_argument("--country", type=str, default=None, help="Country code to project after the run")
    parser.add_argument("--horizon", type=int, default=50, help="Projection horizon in years")
    parser.add_argument("--csv", type=str, default="world_results.csv", help="Output CSV path")
    parser.add_argument("--forecast-csv", type=str, default="forecast.csv", help="Projection CSV path")
    parser.add_argument("--verbose", action="store_true", help="Log per-year progress")

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    world = build_world(args.seed_file, args.db)

    for code, policy_name in args.enact or []:
        result = world.enact_policy(code, policy_name)
        print(result.message)

    results = world.run(args.years)

    pd.set_option("display.max_columns", None)
    print("\nWORLD SUMMARY")
    print(results.iloc[[0, -1]].to_string(index=False))
    print("\nCOUNTRIES")
    print(world.country_frame().to_string(index=False))

    if args.csv:
        results.to_csv(args.csv, index=False)
        print(f"\nSaved yearly results: {args.csv}")

    if args.country:
        projection = project(world.country(args.country), world.earth,
                             world.earth.current_year + args.horizon, world.aggregate_emissions)
        print(f"\nPROJECTION FOR {args.country}")
        for key, value in summarize_projection(projection).items():
            print(f"  {key}: {value:.3f}")
        if args.forecast_csv:
            projection.to_csv(args.forecast_csv, index=False)
            print(f"Saved projection: {args.forecast_csv}")

    print("\nLatest log:")
    for message in world.last_log_messages(5):
        print(f"  {message}")


if __name__ == "__main__":
    main()

"""
Local expert advisor from the command line: score one reading, or a sensor log CSV.
Run from project root:
    python run_advisor.py --soil-type Clay --ph 5.5 --moisture 80 --temperature 25 --n 70 --p 35 --k 35
    python run_advisor.py --soil-type Loamy --readings data/raw/sensor_readings.csv
    python run_advisor.py --soil-type Loamy --readings data/raw/sensor_readings.csv --all
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(PROJECT_ROOT))

from farm_expert.config import TOP_N_CROPS, FIGURES_DIR
from farm_expert.advisor import advise_field, quick_suggestion
from farm_expert.crop_params import get_profile
from farm_expert.data_loader import load_readings, latest_reading
from farm_expert.explainer import explain_score, plot_score_breakdown
from farm_expert.management import water_requirement_litres, fertilizer_deficits
from farm_expert.schema import FieldDescriptor, SensorReading
from farm_expert.scorer import score_breakdown, score_frame, resolve_soil_type

log = logging.getLogger("run_advisor")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rank crops for a field and print soil, irrigation and nutrient advice."
    )
    parser.add_argument("--soil-type",   default="",   help="Field soil type, e.g. Clay, Loamy (blank = Alluvial)")
    parser.add_argument("--size",        type=float, default=None, help="Field size in acres (for water volume)")
    parser.add_argument("--temperature", type=float, default=None, help="Air temperature (°C)")
    parser.add_argument("--moisture",    type=float, default=None, help="Soil moisture (%%)")
    parser.add_argument("--ph",          type=float, default=None, help="Soil pH")
    parser.add_argument("--n",           type=float, default=None, help="Nitrogen (ppm)")
    parser.add_argument("--p",           type=float, default=None, help="Phosphorus (ppm)")
    parser.add_argument("--k",           type=float, default=None, help="Potassium (ppm)")
    parser.add_argument("--readings",    type=Path,  default=None, help="Sensor log CSV; the latest row is advised on")
    parser.add_argument("--all",         action="store_true", help="With --readings: print the best crop for every row")
    parser.add_argument("--top",         type=int,   default=TOP_N_CROPS, help="Number of crops to list")
    parser.add_argument("--plot",        action="store_true", help="Save a score breakdown chart for the best crop")
    parser.add_argument("--json",        action="store_true", help="Print the report as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _print_report(report: dict, field: FieldDescriptor, reading: SensorReading) -> None:
    print("Local Expert Crop Advisor")
    print("=" * 50)
    print(f"Soil type: {resolve_soil_type(field)}")
    present = reading.present()
    print("Reading:   " + (", ".join(f"{k}={v:g}" for k, v in present.items()) if present else "(no sensors reporting)"))

    print("\nRecommended crops:")
    for i, rec in enumerate(report["recommendations"], 1):
        print(f"  {i}. {rec['name']:<18} {rec['suitability']:>3}%  yield {rec['yield']}")
        print(f"     {rec['requirements']} Fertilizer: {rec['fertilizer']}")
    if report["recommendations"]:
        best = get_profile(report["recommendations"][0]["name"])
        print("  " + explain_score(best, resolve_soil_type(field), reading))

    insight = report["soil_insight"]
    print(f"\nSoil insight: {insight['summary']}")
    print(f"  {insight['soil_fertilizer']}")

    irrigation = report["prescription"]["irrigation"]
    nutrient = report["prescription"]["nutrient"]
    if irrigation["needed"]:
        print(f"\nIrrigation: {irrigation['volume']} {irrigation['schedule'].lower()}")
    else:
        print("\nIrrigation: not needed")
    litres = water_requirement_litres(reading.moisture, field.size)
    if litres:
        print(f"  Apply approx. {litres:,} litres to reach target moisture.")
    if nutrient["needed"]:
        doses = ", ".join(f"{f['type']} {f['amount']}" for f in nutrient["fertilizers"])
        print(f"Nutrients: {doses}. {nutrient['advice']}")
    for need in fertilizer_deficits(reading):
        print(f"  {need['type']} deficit: {need['deficit']:g}")

    print("\nRoadmap:")
    for task in report["roadmap"]:
        print(f"  [{task['priority']:<6}] {task['title']}: {task['description']}")

    quick = quick_suggestion(field.soil_type, reading.ph_level, reading.npk_n)
    print(f"\nQuick pick: {quick['crop']} ({quick['reason']})")


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    field = FieldDescriptor(soil_type=args.soil_type, size=args.size)

    if args.readings is not None:
        try:
            df = load_readings(args.readings)
            reading = latest_reading(df)
        except (FileNotFoundError, ValueError) as exc:
            log.error("%s", exc)
            return 1
        if args.all:
            scores = score_frame(df, resolve_soil_type(field))
            best = scores.idxmax(axis=1)
            for idx in scores.index:
                print(f"row {idx}: {best[idx]} ({scores.loc[idx, best[idx]]:.1f})")
            return 0
    else:
        reading = SensorReading(
            temperature=args.temperature,
            moisture=args.moisture,
            ph_level=args.ph,
            npk_n=args.n,
            npk_p=args.p,
            npk_k=args.k,
        )

    try:
        report = advise_field(field, reading, top_n=args.top)
    except ValueError as exc:
        log.error("%s", exc)
        return 2

    if args.plot and report["recommendations"]:
        best = get_profile(report["recommendations"][0]["name"])
        path = plot_score_breakdown(
            score_breakdown(best, resolve_soil_type(field), reading),
            title=f"Suitability breakdown — {best.name}",
            save_path=FIGURES_DIR / "score_breakdown.png",
        )
        log.info("Breakdown chart saved to %s", path)

    if args.json:
        print(json.dumps({"reading": reading.as_dict(), **report}, indent=2))
    else:
        _print_report(report, field, reading)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Project estimation command line tool.

Usage:
  estimator calculate -p PROJECT_ID [-f json|table]
  estimator recalculate -p PROJECT_ID
"""
import argparse
import json
import sys
from typing import List, Optional

from estimator.errors import EstimatorError
from estimator.services.estimator_service import EstimatorService, get_estimator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="estimator", description="Project estimation calculation engine")
    subparsers = parser.add_subparsers(dest="command", required=True)

    calculate = subparsers.add_parser("calculate", help="Calculate project estimate")
    calculate.add_argument("-p", "--project-id", required=True, help="Project ID to calculate")
    calculate.add_argument("-f", "--format", choices=["json", "table"], default="json", help="Output format")

    recalculate = subparsers.add_parser("recalculate", help="Recalculate and update project totals")
    recalculate.add_argument("-p", "--project-id", required=True, help="Project ID to recalculate")
    return parser


def _print_table(estimate) -> None:
    print("Project Estimation Results")
    print("-" * 30)
    print(f"Project ID: {estimate.project_id}")
    print(f"Total Estimate: {estimate.total_min_hours:g}h - {estimate.total_max_hours:g}h")
    print(f"Calculated At: {estimate.calculated_at.isoformat()}")
    print("")
    print("Task Breakdown:")
    for item in estimate.task_breakdown:
        print(f"  * {item.task_type_name}")
        print(f"    Quantity: {item.quantity}")
        print(f"    Hours: {item.min_hours:g}h - {item.max_hours:g}h each")
        print(f"    Subtotal: {item.subtotal_min_hours:g}h - {item.subtotal_max_hours:g}h")


def main(argv: Optional[List[str]] = None, estimator: Optional[EstimatorService] = None) -> int:
    args = _build_parser().parse_args(argv)
    estimator = estimator or get_estimator()
    try:
        if args.command == "calculate":
            estimate = estimator.calculate_estimate(args.project_id)
            if args.format == "json":
                print(json.dumps(estimate.model_dump(mode="json"), indent=2, ensure_ascii=False))
            else:
                _print_table(estimate)
        else:
            estimator.recalculate(args.project_id)
            print(f"Project {args.project_id} totals recalculated")
    except EstimatorError as exc:
        print(f"Error: {exc.detail}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

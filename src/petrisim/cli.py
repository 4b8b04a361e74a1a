#!/usr/bin/env python3
"""
Petrisim command-line interface

Runs the engine on nets stored as JSON files:
- step a net once, or resolve a conflict
- run any of the analyses
- validate a net against expected outputs
- print a Mermaid diagram
"""

import argparse
import logging
import random
import sys
from typing import List, Optional

from petrisim.common.mermaid import to_mermaid
from petrisim.exceptions import PetriNetError
from petrisim.io import dump_model, load_net, load_validation_request
from petrisim.models import DescriptionModel
from petrisim.service import PetriNetEngine

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2

ANALYSES = {
    "reachability": "analyze_reachable_states",
    "liveness": "analyze_liveness",
    "boundedness": "analyze_boundedness",
    "incidence": "compute_incidence_matrix",
    "structure": "perform_structural_analysis",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="petrisim",
        description="Petri net simulation and analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Fire one transition
  petrisim step net.json

  # Settle a conflict by choosing t2
  petrisim resolve net.json t2

  # Count reachable markings
  petrisim analyze reachability net.json

  # Check a net reaches its expected outputs
  petrisim validate request.json
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "-o", "--output",
        metavar="FILE",
        help="Write the JSON result to FILE instead of stdout",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    step = sub.add_parser("step", help="Run a single simulation step")
    step.add_argument("file", help="Net description (JSON)")
    step.add_argument("--seed", type=int, help="Seed for the random pick in non-deterministic mode")

    resolve = sub.add_parser("resolve", help="Fire the chosen transition of a conflict")
    resolve.add_argument("file", help="Net description (JSON)")
    resolve.add_argument(
        "transition", nargs="?",
        help="Transition to fire (default: the net's selectedTransitionId)",
    )

    analyze = sub.add_parser("analyze", help="Run an analysis")
    analyze.add_argument("kind", choices=sorted(ANALYSES))
    analyze.add_argument("file", help="Net description (JSON)")

    validate = sub.add_parser("validate", help="Validate a net against expected outputs")
    validate.add_argument("file", help="Validation request (JSON)")

    diagram = sub.add_parser("diagram", help="Print a Mermaid diagram of the net")
    diagram.add_argument("file", help="Net description (JSON)")

    return parser


def _emit(model: DescriptionModel, output: Optional[str]):
    if output:
        path = dump_model(model, output)
        print(f"Result written to: {path}")
    else:
        print(model.to_json())


def run(args: argparse.Namespace) -> int:
    if args.command == "diagram":
        print(to_mermaid(load_net(args.file)))
        return EXIT_OK

    if args.command == "validate":
        result = PetriNetEngine().validate(load_validation_request(args.file))
        _emit(result, args.output)
        return EXIT_OK if result.valid else EXIT_INVALID

    if args.command == "step":
        rng = random.Random(args.seed) if args.seed is not None else None
        outcome = PetriNetEngine(rng=rng).step(load_net(args.file))
        logger.info("step: %s enabled=%s fired=%s", outcome.phase.name, outcome.enabled_ids, outcome.fired_id)
        _emit(outcome.net, args.output)
        return EXIT_OK

    if args.command == "resolve":
        outcome = PetriNetEngine().resolve(load_net(args.file), args.transition)
        logger.info("resolve: %s enabled=%s", outcome.phase.name, outcome.enabled_ids)
        _emit(outcome.net, args.output)
        return EXIT_OK

    engine = PetriNetEngine()
    result = getattr(engine, ANALYSES[args.kind])(load_net(args.file))
    _emit(result, args.output)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return run(args)
    except (PetriNetError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
